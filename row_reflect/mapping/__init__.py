"""Mapping layer - reflect over classes, materialize records, build commands."""

from __future__ import annotations

from row_reflect.mapping.coercion import coerce_value
from row_reflect.mapping.command import build_command_from_mapping, parameter_name
from row_reflect.mapping.descriptor import (
    FieldDescriptor,
    TypeDescriptor,
    describe,
    is_mappable_type,
    resolve_storage_type,
)
from row_reflect.mapping.protocol import Mapper
from row_reflect.mapping.reflector import Reflector, column_lookup

__all__ = [
    "Reflector",
    "Mapper",
    "describe",
    "TypeDescriptor",
    "FieldDescriptor",
    "resolve_storage_type",
    "is_mappable_type",
    "coerce_value",
    "column_lookup",
    "build_command_from_mapping",
    "parameter_name",
]
