"""One-shot helpers.

Each call builds a fresh Reflector, so nothing is cached between calls. Hold
on to a Reflector when mapping the same class repeatedly.
"""

from __future__ import annotations

from typing import TypeVar

from row_reflect.adapters.protocol import (
    DataReader,
    DataRecord,
    DbCommand,
    DbConnection,
    DbTransaction,
)
from row_reflect.mapping.reflector import Reflector

T = TypeVar("T")


def to_model(cls: type[T], source: DataRecord | DataReader, read_first: bool = False) -> T | None:
    """Create an instance of *cls* from a record.

    With *read_first*, *source* must be a reader: it is advanced once and
    None is returned if it has no row.
    """
    reflector = Reflector(cls)
    if read_first:
        return reflector.materialize_next(source, read_first=True)  # type: ignore[arg-type]
    return reflector.materialize(source)


def to_model_collection(cls: type[T], reader: DataReader) -> list[T]:
    """Create instances of *cls* from every remaining row of *reader*."""
    return Reflector(cls).materialize_all(reader)


def create_command(
    connection: DbConnection,
    sql: str,
    model: T,
    transaction: DbTransaction | None = None,
) -> DbCommand:
    """Create a text command from *sql* with one parameter per field of *model*."""
    return Reflector(type(model)).build_command(connection, sql, model, transaction)
