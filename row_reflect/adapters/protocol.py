"""Database access capability protocols.

The mapping engine only talks to these interfaces. Any driver wrapper that
provides them can be used with Reflector; the sqlite adapter is one.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_reflect.core.enums import CommandKind


@runtime_checkable
class DbTransaction(Protocol):
    """Opaque transaction handle attached to commands."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@runtime_checkable
class DbParameter(Protocol):
    """A single bound parameter."""

    name: str
    value: Any


@runtime_checkable
class DbCommand(Protocol):
    """A mutable parameterized command."""

    text: str
    kind: CommandKind
    transaction: DbTransaction | None

    @property
    def parameters(self) -> list[DbParameter]:
        """Ordered parameter collection."""
        ...

    def create_parameter(self) -> DbParameter:
        """Create an unattached parameter for this command."""
        ...


@runtime_checkable
class DbConnection(Protocol):
    """Connection capability: the command factory."""

    def create_command(self) -> DbCommand:
        """Create a new command bound to this connection."""
        ...


@runtime_checkable
class DataRecord(Protocol):
    """One row: ordered named columns with positional values."""

    @property
    def field_count(self) -> int:
        """Number of columns in the row."""
        ...

    def get_name(self, ordinal: int) -> str:
        """Column name at ordinal."""
        ...

    def get_value(self, ordinal: int) -> Any:
        """Raw value at ordinal; None or DBNull for SQL NULL."""
        ...


@runtime_checkable
class DataReader(DataRecord, Protocol):
    """A forward-only row source; readable as a DataRecord after read()."""

    def read(self) -> bool:
        """Advance to the next row. Returns False once exhausted."""
        ...
