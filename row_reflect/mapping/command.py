"""Parameterized command building.

Commands are only created and populated here; executing them is the
caller's job through the command capability.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from row_reflect.adapters.protocol import DbCommand, DbConnection, DbTransaction
from row_reflect.core.dbnull import DBNull
from row_reflect.core.enums import CommandKind
from row_reflect.core.exceptions import InvalidKeyError, NullInputError

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = "@"


def parameter_name(key: str) -> str:
    """Normalize a key to a parameter name: prefix with ``@`` unless already prefixed.

    Raises:
        InvalidKeyError: If the key is empty or whitespace, with or without the prefix.
    """
    if not key or not key.removeprefix(PARAMETER_PREFIX).strip():
        raise InvalidKeyError(key)
    if key.startswith(PARAMETER_PREFIX):
        return key
    return PARAMETER_PREFIX + key


def check_command_args(connection: DbConnection | None, sql: str | None) -> None:
    if connection is None:
        raise NullInputError("connection")
    if not sql:
        raise NullInputError("sql", "sql cannot be None or empty")


def new_command(
    connection: DbConnection,
    sql: str,
    kind: CommandKind = CommandKind.TEXT,
    transaction: DbTransaction | None = None,
) -> DbCommand:
    """Create a command on *connection* with its text, kind and transaction set."""
    command = connection.create_command()
    command.text = sql
    command.kind = kind
    if transaction is not None:
        command.transaction = transaction
    return command


def add_parameter(command: DbCommand, name: str, value: Any) -> None:
    """Append a parameter, binding None as DBNull."""
    parameter = command.create_parameter()
    parameter.name = name
    parameter.value = DBNull if value is None else value
    command.parameters.append(parameter)


def build_command_from_mapping(
    connection: DbConnection | None,
    params: Mapping[str, Any] | None,
    sql: str | None,
    transaction: DbTransaction | None = None,
) -> DbCommand:
    """Build a text command whose parameters come from a name -> value mapping.

    Every key is validated before the command is created, so an invalid key
    never leaves a half-populated command behind.

    Args:
        connection: Connection used as the command factory.
        params: Parameter values keyed by name, with or without ``@``.
        sql: Parameterized SQL text.
        transaction: Optional transaction to attach.

    Raises:
        NullInputError: If connection, params or sql is missing.
        InvalidKeyError: If any key is empty or whitespace.
    """
    check_command_args(connection, sql)
    if params is None:
        raise NullInputError("params")

    names = [(parameter_name(key), value) for key, value in params.items()]

    command = new_command(connection, sql, CommandKind.TEXT, transaction)  # type: ignore[arg-type]
    for name, value in names:
        add_parameter(command, name, value)

    logger.debug("Built command with %d parameters from mapping", len(names))
    return command
