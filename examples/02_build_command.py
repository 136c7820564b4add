"""
Example 02: Building commands

This example turns models and plain dicts into parameterized commands. Every
mappable field becomes an @Field parameter; None is bound as DBNull.
"""

from dataclasses import dataclass
from decimal import Decimal

from row_reflect import (
    ConnectionConfig,
    ConnectionManager,
    InvalidKeyError,
    Reflector,
    build_command_from_mapping,
)


@dataclass
class Product:
    Id: int = 0
    Name: str | None = None
    Price: Decimal = Decimal("0")
    Stock: int | None = None


INSERT = "INSERT INTO product (Id, Name, Price, Stock) VALUES (@Id, @Name, @Price, @Stock)"


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")
    reflector = Reflector(Product)

    with ConnectionManager(config).get_connection() as conn:
        conn.raw.execute(
            "CREATE TABLE product (Id INTEGER PRIMARY KEY, Name TEXT, Price TEXT, Stock INTEGER)"
        )

        print("=== Building commands ===\n")

        print("1. From a model:")
        command = reflector.build_command(conn, INSERT, Product(1, "Lamp", Decimal("19.90")))
        for parameter in command.parameters:
            print(f"   {parameter.name} = {parameter.value!r}")
        print(f"   rows affected: {command.execute_non_query()}\n")

        print("2. From a mapping:")
        command = build_command_from_mapping(
            conn, {"stock": 12, "@id": 1}, "UPDATE product SET Stock = @stock WHERE Id = @id"
        )
        print(f"   rows affected: {command.execute_non_query()}\n")

        print("3. Reading it back:")
        select = build_command_from_mapping(conn, {"id": 1}, "SELECT * FROM product WHERE Id = @id")
        with select.execute_reader() as reader:
            print(f"   {reflector.materialize_next(reader)}\n")

        print("4. Blank keys are rejected:")
        try:
            build_command_from_mapping(conn, {"  ": 1}, "SELECT 1")
        except InvalidKeyError as e:
            print(f"   {e}")


if __name__ == "__main__":
    main()
