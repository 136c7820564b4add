"""Command kind and database backend enumerations."""

from __future__ import annotations

from enum import Enum


class CommandKind(Enum):
    """How a command's text is interpreted by the driver."""

    TEXT = "text"
    STORED_PROCEDURE = "stored_procedure"


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
