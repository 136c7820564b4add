"""Shared test fixtures.

The fakes below implement the capability protocols in memory so the mapping
engine can be tested without a database.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from row_reflect.adapters.sqlite import SqliteConnection
from row_reflect.core.connection import ConnectionConfig, ConnectionManager
from row_reflect.core.enums import CommandKind


class FakeRecord:
    """A single row built from (column name, value) pairs."""

    def __init__(self, columns: list[tuple[str, Any]]) -> None:
        self._names = [name for name, _ in columns]
        self._values = [value for _, value in columns]
        self.get_value_calls = 0

    @property
    def field_count(self) -> int:
        return len(self._names)

    def get_name(self, ordinal: int) -> str:
        return self._names[ordinal]

    def get_value(self, ordinal: int) -> Any:
        self.get_value_calls += 1
        return self._values[ordinal]


class FakeReader:
    """A forward-only reader over a fixed list of rows."""

    def __init__(self, names: list[str], rows: list[tuple[Any, ...]]) -> None:
        self._names = names
        self._rows = rows
        self._position = -1
        self.read_calls = 0
        self.closed = False

    @property
    def field_count(self) -> int:
        return len(self._names)

    def read(self) -> bool:
        self.read_calls += 1
        self._position += 1
        return self._position < len(self._rows)

    def get_name(self, ordinal: int) -> str:
        return self._names[ordinal]

    def get_value(self, ordinal: int) -> Any:
        return self._rows[self._position][ordinal]

    def close(self) -> None:
        self.closed = True


class FakeParameter:
    def __init__(self) -> None:
        self.name = ""
        self.value: Any = None


class FakeCommand:
    def __init__(self) -> None:
        self.text = ""
        self.kind = CommandKind.STORED_PROCEDURE
        self.transaction: Any = None
        self._parameters: list[FakeParameter] = []

    @property
    def parameters(self) -> list[FakeParameter]:
        return self._parameters

    def create_parameter(self) -> FakeParameter:
        return FakeParameter()

    def values(self) -> dict[str, Any]:
        return {p.name: p.value for p in self._parameters}


class FakeConnection:
    def __init__(self) -> None:
        self.commands: list[FakeCommand] = []

    def create_command(self) -> FakeCommand:
        command = FakeCommand()
        self.commands.append(command)
        return command


class FakeTransaction:
    def commit(self) -> None:
        pass

    def rollback(self) -> None:
        pass


@pytest.fixture
def make_record():
    """Build a FakeRecord.

    Usage:
        make_record(("Id", 1), ("Name", "Ann"))
    """

    def _make(*columns: tuple[str, Any]) -> FakeRecord:
        return FakeRecord(list(columns))

    return _make


@pytest.fixture
def make_reader():
    """Build a FakeReader from column names and row tuples."""

    def _make(names: list[str], rows: list[tuple[Any, ...]]) -> FakeReader:
        return FakeReader(names, rows)

    return _make


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def fake_transaction() -> FakeTransaction:
    return FakeTransaction()


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")


@pytest.fixture
def sqlite_connection(sqlite_config: ConnectionConfig) -> Iterator[SqliteConnection]:
    """An open in-memory SQLite connection, closed after the test."""
    with ConnectionManager(sqlite_config).get_connection() as conn:
        yield conn
