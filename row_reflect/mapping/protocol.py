"""Mapper protocol.

Mappers turn a record into an object (map_one) and drain a reader into a
list of objects (map_many). Reflector implements it.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from row_reflect.adapters.protocol import DataReader, DataRecord

T_co = TypeVar("T_co", covariant=True)


class Mapper(Protocol[T_co]):
    """Base mapper protocol."""

    def map_one(self, row: DataRecord) -> T_co:
        """Map a single record to a target object."""
        ...

    def map_many(self, rows: DataReader) -> list[T_co]:
        """Map every remaining row of a reader to target objects."""
        ...
