"""
Example 03: Transactions

This example attaches a transaction to built commands. The transaction
commits when the block succeeds and rolls back when it raises.
"""

from dataclasses import dataclass

from row_reflect import ConnectionConfig, ConnectionManager, Reflector


@dataclass
class Account:
    Id: int = 0
    Owner: str = ""
    Balance: int = 0


INSERT = "INSERT INTO account (Id, Owner, Balance) VALUES (@Id, @Owner, @Balance)"


def count(conn):
    command = conn.create_command()
    command.text = "SELECT COUNT(*) FROM account"
    return command.execute_scalar()


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")
    reflector = Reflector(Account)

    with ConnectionManager(config).get_connection() as conn:
        conn.raw.execute("CREATE TABLE account (Id INTEGER PRIMARY KEY, Owner TEXT, Balance INTEGER)")

        print("=== Transactions ===\n")

        print("1. Commit:")
        with conn.begin_transaction() as tx:
            reflector.build_command(conn, INSERT, Account(1, "Alice", 100), tx).execute_non_query()
            reflector.build_command(conn, INSERT, Account(2, "Bob", 50), tx).execute_non_query()
        print(f"   accounts: {count(conn)}\n")

        print("2. Rollback on error:")
        try:
            with conn.begin_transaction() as tx:
                reflector.build_command(conn, INSERT, Account(3, "Carol", 10), tx).execute_non_query()
                raise RuntimeError("transfer failed")
        except RuntimeError as e:
            print(f"   error: {e}")
        print(f"   accounts: {count(conn)}")


if __name__ == "__main__":
    main()
