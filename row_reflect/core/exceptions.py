"""RowReflect exception hierarchy.

Every failure raised by the mapping engine derives from RowReflectError and
is propagated to the caller unmodified.
"""

from __future__ import annotations

from typing import Any


class RowReflectError(Exception):
    """Base exception for all RowReflect errors."""


class NullInputError(RowReflectError, ValueError):
    """Raised when a required argument is None (or empty, for SQL text)."""

    def __init__(self, argument: str, detail: str | None = None) -> None:
        self.argument = argument
        super().__init__(detail or f"{argument} cannot be None")


# --- Command building ---


class CommandBuildError(RowReflectError):
    """Base for command building errors."""


class InvalidKeyError(CommandBuildError):
    """Raised when a parameter key is empty or whitespace."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Parameter key cannot be empty or whitespace: {key!r}")


# --- Mapping ---


class MappingError(RowReflectError):
    """Base for mapping errors."""


class ConstructionError(MappingError):
    """Raised when the target class cannot be default-constructed."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"Cannot construct {target_class} without arguments: {detail}")


class ConversionError(MappingError):
    """Raised when a column value cannot be coerced to a field's storage type."""

    def __init__(self, field_name: str, value: Any, target_type: Any) -> None:
        self.field_name = field_name
        self.value = value
        self.target_type = target_type
        type_name = getattr(target_type, "__name__", repr(target_type))
        super().__init__(
            f"Cannot convert {value!r} ({type(value).__name__}) to {type_name} "
            f"for field '{field_name}'"
        )


class DuplicateColumnError(MappingError):
    """Raised when two columns normalize to the same case-insensitive name."""

    def __init__(self, column_name: str, first_ordinal: int, ordinal: int) -> None:
        self.column_name = column_name
        self.first_ordinal = first_ordinal
        self.ordinal = ordinal
        super().__init__(
            f"Duplicate column '{column_name}' at ordinals {first_ordinal} and {ordinal}"
        )


# --- Transaction ---


class TransactionError(RowReflectError):
    """Base for transaction errors."""


class TransactionStateError(TransactionError):
    """Raised on invalid transaction state transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} transaction in state '{current_state}'")


# --- Adapter ---


class AdapterError(RowReflectError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
