"""SQLite adapter over the stdlib sqlite3 driver.

Provides the connection, command, parameter, reader and transaction
capabilities the mapper consumes, plus command execution.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import logging
import sqlite3
import uuid
from typing import Any

from row_reflect.core.connection import ConnectionConfig
from row_reflect.core.dbnull import DBNull, is_null
from row_reflect.core.enums import CommandKind, DatabaseBackend
from row_reflect.core.exceptions import AdapterError, ConnectionError  # noqa: A004
from row_reflect.core.transaction import Transaction

logger = logging.getLogger(__name__)

_NAME_PREFIXES = ("@", ":", "$")


def to_sqlite_value(value: Any) -> Any:
    """Convert a parameter value to something sqlite3 binds natively."""
    if is_null(value):
        return None
    if isinstance(value, enum.Enum):
        return to_sqlite_value(value.value)
    if isinstance(value, (decimal.Decimal, uuid.UUID)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    return value


class SqliteParameter:
    """A named parameter value."""

    def __init__(self, name: str = "", value: Any = DBNull) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"SqliteParameter({self.name!r}, {self.value!r})"


class SqliteDataReader:
    """Forward-only reader over a sqlite3 cursor."""

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor
        self._names = [desc[0] for desc in cursor.description or ()]
        self._row: tuple[Any, ...] | None = None
        self._closed = False

    def __enter__(self) -> SqliteDataReader:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def field_count(self) -> int:
        return len(self._names)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def read(self) -> bool:
        if self._closed:
            raise AdapterError("Reader is closed")
        self._row = self._cursor.fetchone()
        return self._row is not None

    def get_name(self, ordinal: int) -> str:
        return self._names[ordinal]

    def get_value(self, ordinal: int) -> Any:
        if self._row is None:
            raise AdapterError("No current row; call read() first")
        value = self._row[ordinal]
        return DBNull if value is None else value

    def close(self) -> None:
        if not self._closed:
            self._cursor.close()
            self._closed = True


class SqliteCommand:
    """A parameterized command bound to a SqliteConnection."""

    def __init__(self, connection: SqliteConnection) -> None:
        self.connection = connection
        self.text = ""
        self.kind = CommandKind.TEXT
        self.transaction: Transaction | None = None
        self._parameters: list[SqliteParameter] = []

    @property
    def parameters(self) -> list[SqliteParameter]:
        return self._parameters

    def create_parameter(self) -> SqliteParameter:
        return SqliteParameter()

    def _bindings(self) -> dict[str, Any]:
        bindings: dict[str, Any] = {}
        for parameter in self._parameters:
            name = parameter.name
            if name.startswith(_NAME_PREFIXES):
                name = name[1:]
            bindings[name] = to_sqlite_value(parameter.value)
        return bindings

    def _execute(self) -> sqlite3.Cursor:
        if self.kind is not CommandKind.TEXT:
            raise AdapterError(f"SQLite does not support {self.kind.value} commands")
        if not self.text:
            raise AdapterError("Command text has not been set")
        self.connection._check_transaction(self.transaction)
        bindings = self._bindings()
        logger.debug("SQL:\n%s\nparams: %s", self.text, bindings)
        return self.connection.raw.execute(self.text, bindings)

    def execute_reader(self) -> SqliteDataReader:
        """Execute and return a reader over the result rows."""
        return SqliteDataReader(self._execute())

    def execute_non_query(self) -> int:
        """Execute a write and return the affected row count.

        Outside a transaction the write is committed immediately.
        """
        cursor = self._execute()
        if self.transaction is None:
            self.connection.raw.commit()
        return int(cursor.rowcount)

    def execute_scalar(self) -> Any:
        """Execute and return the first column of the first row, or None."""
        cursor = self._execute()
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
        if row is None:
            return None
        return row[0]


class SqliteConnection:
    """DbConnection capability over a sqlite3 connection."""

    def __init__(self, raw: sqlite3.Connection) -> None:
        self._raw = raw
        self._transaction: Transaction | None = None

    def __enter__(self) -> SqliteConnection:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def raw(self) -> sqlite3.Connection:
        return self._raw

    def create_command(self) -> SqliteCommand:
        return SqliteCommand(self)

    def begin_transaction(self) -> Transaction:
        """Start a transaction; commands must carry it until it ends."""
        if self._transaction is not None and self._transaction.is_active:
            raise AdapterError("A transaction is already active on this connection")
        self._transaction = Transaction(self._raw)
        return self._transaction

    def _check_transaction(self, transaction: Transaction | None) -> None:
        active = self._transaction if self._transaction and self._transaction.is_active else None
        if transaction is not active:
            if active is None:
                raise AdapterError("Command transaction is not active on this connection")
            raise AdapterError("Command must be associated with the connection's active transaction")

    def close(self) -> None:
        self._raw.close()


class SqliteAdapter:
    """Opens SqliteConnection instances from a ConnectionConfig."""

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.SQLITE

    def open(self, config: ConnectionConfig) -> SqliteConnection:
        try:
            raw = sqlite3.connect(config.database, timeout=config.timeout, **config.extra)
        except sqlite3.Error as e:
            raise ConnectionError(f"Cannot open SQLite database '{config.database}': {e}") from e
        return SqliteConnection(raw)
