"""
Example 01: Materializing rows

This example reads rows through the sqlite adapter and maps them onto a
dataclass and a Pydantic model by column name.
"""

import datetime
from dataclasses import dataclass

from pydantic import BaseModel

from row_reflect import ConnectionConfig, ConnectionManager, Reflector


@dataclass
class User:
    """User model using dataclass"""
    id: int = 0
    name: str = ""
    email: str | None = None
    active: bool = False
    joined: datetime.date | None = None


class UserName(BaseModel):
    """Narrow projection using Pydantic"""
    id: int = 0
    name: str = ""


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")

    with ConnectionManager(config).get_connection() as conn:
        conn.raw.executescript("""
            CREATE TABLE users (
                ID INTEGER PRIMARY KEY,
                NAME TEXT NOT NULL,
                EMAIL TEXT,
                ACTIVE INTEGER DEFAULT 1,
                JOINED TEXT
            );
            INSERT INTO users (NAME, EMAIL, JOINED) VALUES ('Alice', 'alice@example.com', '2023-04-01');
            INSERT INTO users (NAME, EMAIL, ACTIVE) VALUES ('Bob', NULL, 0);
        """)

        print("=== Materializing ===\n")

        command = conn.create_command()
        command.text = "SELECT * FROM users ORDER BY ID"

        print("1. Dataclass (column names differ in case):")
        with command.execute_reader() as reader:
            for user in Reflector(User).materialize_all(reader):
                print(f"   {user}")
        print()

        print("2. Pydantic projection (extra columns ignored):")
        with command.execute_reader() as reader:
            for user in Reflector(UserName).materialize_all(reader):
                print(f"   {user!r}")


if __name__ == "__main__":
    main()
