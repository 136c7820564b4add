"""Reflection-driven mapper between records and typed objects.

A Reflector converts records into instances of its target class and turns
instances of the target class into parameterized commands. Field metadata
is reflected once per Reflector and reused.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from row_reflect.adapters.protocol import (
    DataReader,
    DataRecord,
    DbCommand,
    DbConnection,
    DbTransaction,
)
from row_reflect.core.dbnull import is_null
from row_reflect.core.enums import CommandKind
from row_reflect.core.exceptions import (
    ConstructionError,
    DuplicateColumnError,
    NullInputError,
)
from row_reflect.mapping.coercion import coerce_value
from row_reflect.mapping.command import (
    PARAMETER_PREFIX,
    add_parameter,
    build_command_from_mapping,
    check_command_args,
    new_command,
)
from row_reflect.mapping.descriptor import TypeDescriptor, describe

logger = logging.getLogger(__name__)

T = TypeVar("T")


def column_lookup(record: DataRecord) -> dict[str, int]:
    """Build an upper-cased column name -> ordinal lookup for *record*.

    Raises:
        DuplicateColumnError: If two columns differ only by case.
    """
    lookup: dict[str, int] = {}
    for ordinal in range(record.field_count):
        key = record.get_name(ordinal).upper()
        if key in lookup:
            raise DuplicateColumnError(key, lookup[key], ordinal)
        lookup[key] = ordinal
    return lookup


class Reflector(Generic[T]):
    """Maps records to instances of *target_class* and instances to commands.

    Matching between columns and fields is by name, case-insensitively.
    Columns without a matching field are ignored; fields without a matching
    column keep their default value.

    Args:
        target_class: The class to materialize and bind.
        factory: Zero-argument callable producing a default instance.
            Defaults to calling ``target_class()``.
    """

    def __init__(
        self,
        target_class: type[T],
        factory: Callable[[], T] | None = None,
    ) -> None:
        self._target_class = target_class
        self._factory = factory
        self._descriptor: TypeDescriptor | None = None

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    @property
    def descriptor(self) -> TypeDescriptor:
        """Type descriptor for the target class, reflected on first access."""
        if self._descriptor is None:
            self._descriptor = describe(self._target_class)
        return self._descriptor

    def _new_instance(self) -> T:
        if self._factory is not None:
            return self._factory()
        try:
            return self._target_class()
        except (TypeError, ValidationError) as e:
            raise ConstructionError(self._target_class.__name__, str(e)) from e

    # --- Materialization ---

    def materialize(self, record: DataRecord | None) -> T:
        """Create an instance of the target class from one record.

        Raises:
            NullInputError: If record is None.
            ConstructionError: If the target class cannot be built without arguments.
            DuplicateColumnError: If two columns differ only by case.
            ConversionError: If a column value cannot be coerced to its field type.
        """
        if record is None:
            raise NullInputError("record")

        model = self._new_instance()
        lookup = column_lookup(record)

        for field in self.descriptor.writable_fields():
            ordinal = lookup.get(field.name.upper())
            if ordinal is None:
                continue
            raw = record.get_value(ordinal)
            if is_null(raw):
                continue
            setattr(model, field.name, coerce_value(raw, field.storage_type, field.name))

        return model

    def materialize_all(self, reader: DataReader | None) -> list[T]:
        """Materialize every remaining row of *reader*, in order.

        The reader is left open; closing it is the caller's responsibility.
        """
        if reader is None:
            raise NullInputError("reader")

        models: list[T] = []
        while reader.read():
            models.append(self.materialize(reader))
        return models

    def materialize_next(self, reader: DataReader | None, read_first: bool = True) -> T | None:
        """Materialize the reader's current row, advancing it first if asked.

        Returns None when *read_first* is set and the reader has no more rows.
        """
        if reader is None:
            raise NullInputError("reader")
        if read_first and not reader.read():
            return None
        return self.materialize(reader)

    # --- Command building ---

    def build_command(
        self,
        connection: DbConnection | None,
        sql: str | None,
        model: T | None,
        transaction: DbTransaction | None = None,
        *,
        kind: CommandKind = CommandKind.TEXT,
    ) -> DbCommand:
        """Create a command whose parameters are the model's mappable fields.

        Each readable mappable field becomes a parameter named ``@<field>``;
        None values are bound as DBNull.

        Raises:
            NullInputError: If connection, sql or model is missing.
        """
        check_command_args(connection, sql)
        if model is None:
            raise NullInputError("model")

        # Unset attributes of plain classes bind as DBNull.
        values = [
            (PARAMETER_PREFIX + field.name, getattr(model, field.name, None))
            for field in self.descriptor.readable_fields()
        ]

        command = new_command(connection, sql, kind, transaction)  # type: ignore[arg-type]
        for name, value in values:
            add_parameter(command, name, value)

        logger.debug(
            "Built command for %s with %d parameters",
            self._target_class.__name__,
            len(values),
        )
        return command

    def build_command_from_mapping(
        self,
        connection: DbConnection | None,
        params: Mapping[str, Any] | None,
        sql: str | None,
        transaction: DbTransaction | None = None,
    ) -> DbCommand:
        """Untyped variant of build_command driven by an explicit mapping."""
        return build_command_from_mapping(connection, params, sql, transaction)

    # --- Mapper protocol ---

    def map_one(self, row: DataRecord) -> T:
        return self.materialize(row)

    def map_many(self, rows: DataReader) -> list[T]:
        return self.materialize_all(rows)
