"""RowReflect - reflection-driven mapping between rows, objects and commands."""

from __future__ import annotations

from row_reflect.adapters.protocol import (
    DataReader,
    DataRecord,
    DbCommand,
    DbConnection,
    DbParameter,
    DbTransaction,
)
from row_reflect.core.connection import ConnectionConfig, ConnectionManager
from row_reflect.core.dbnull import DBNull, is_null
from row_reflect.core.enums import CommandKind, DatabaseBackend
from row_reflect.core.exceptions import (
    AdapterError,
    CommandBuildError,
    ConnectionError,  # noqa: A004
    ConstructionError,
    ConversionError,
    DuplicateColumnError,
    InvalidKeyError,
    MappingError,
    NullInputError,
    RowReflectError,
    TransactionError,
    TransactionStateError,
)
from row_reflect.core.transaction import Transaction
from row_reflect.extensions import create_command, to_model, to_model_collection
from row_reflect.mapping.command import build_command_from_mapping
from row_reflect.mapping.descriptor import FieldDescriptor, TypeDescriptor, describe
from row_reflect.mapping.reflector import Reflector

__all__ = [
    # Mapping
    "Reflector",
    "describe",
    "TypeDescriptor",
    "FieldDescriptor",
    "build_command_from_mapping",
    # One-shot helpers
    "to_model",
    "to_model_collection",
    "create_command",
    # Capabilities
    "DbConnection",
    "DbCommand",
    "DbParameter",
    "DbTransaction",
    "DataRecord",
    "DataReader",
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "Transaction",
    # Values
    "DBNull",
    "is_null",
    # Enums
    "CommandKind",
    "DatabaseBackend",
    # Exceptions
    "RowReflectError",
    "NullInputError",
    "CommandBuildError",
    "InvalidKeyError",
    "MappingError",
    "ConstructionError",
    "ConversionError",
    "DuplicateColumnError",
    "TransactionError",
    "TransactionStateError",
    "AdapterError",
    "ConnectionError",
]
