"""Contract tests for capability protocol compliance."""

from __future__ import annotations

import pytest

from row_reflect.adapters.protocol import (
    DataReader,
    DataRecord,
    DbCommand,
    DbConnection,
    DbParameter,
    DbTransaction,
)
from row_reflect.adapters.sqlite import SqliteConnection
from row_reflect.core.dbnull import DBNull
from row_reflect.core.enums import CommandKind
from row_reflect.core.exceptions import AdapterError


class TestSqliteCapabilities:
    def test_connection(self, sqlite_connection: SqliteConnection) -> None:
        assert isinstance(sqlite_connection, DbConnection)

    def test_command_and_parameter(self, sqlite_connection: SqliteConnection) -> None:
        command = sqlite_connection.create_command()
        assert isinstance(command, DbCommand)
        assert command.kind is CommandKind.TEXT
        assert command.parameters == []

        parameter = command.create_parameter()
        assert isinstance(parameter, DbParameter)
        assert parameter.value is DBNull
        assert command.parameters == []

    def test_reader_is_record(self, sqlite_connection: SqliteConnection) -> None:
        command = sqlite_connection.create_command()
        command.text = "SELECT 1 AS val, NULL AS missing"
        with command.execute_reader() as reader:
            assert isinstance(reader, DataReader)
            assert isinstance(reader, DataRecord)
            assert reader.field_count == 2
            assert reader.read() is True
            assert reader.get_name(0) == "val"
            assert reader.get_value(0) == 1
            assert reader.get_value(1) is DBNull
            assert reader.read() is False
        assert reader.is_closed

    def test_transaction(self, sqlite_connection: SqliteConnection) -> None:
        tx = sqlite_connection.begin_transaction()
        assert isinstance(tx, DbTransaction)
        tx.rollback()

    def test_get_value_before_read_fails(self, sqlite_connection: SqliteConnection) -> None:
        command = sqlite_connection.create_command()
        command.text = "SELECT 1 AS val"
        reader = command.execute_reader()
        with pytest.raises(AdapterError):
            reader.get_value(0)
        reader.close()

    def test_read_after_close_fails(self, sqlite_connection: SqliteConnection) -> None:
        command = sqlite_connection.create_command()
        command.text = "SELECT 1 AS val"
        reader = command.execute_reader()
        reader.close()
        with pytest.raises(AdapterError):
            reader.read()

    def test_stored_procedure_kind_is_rejected(
        self, sqlite_connection: SqliteConnection
    ) -> None:
        command = sqlite_connection.create_command()
        command.text = "do_something"
        command.kind = CommandKind.STORED_PROCEDURE
        with pytest.raises(AdapterError):
            command.execute_non_query()

    def test_execute_scalar(self, sqlite_connection: SqliteConnection) -> None:
        command = sqlite_connection.create_command()
        command.text = "SELECT 40 + 2"
        assert command.execute_scalar() == 42
