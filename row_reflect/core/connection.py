"""Connection configuration and management.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager resolves the adapter for the configured driver and opens
connections that satisfy the DbConnection capability.
"""

from __future__ import annotations

import importlib
import logging
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel

from row_reflect.core.enums import DatabaseBackend
from row_reflect.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    database: str
    timeout: float = 5.0
    extra: dict[str, Any] = {}


# Adapter module mapping: driver name -> (module_path, adapter_class)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    DatabaseBackend.SQLITE.value: ("row_reflect.adapters.sqlite", "SqliteAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    driver_lower = driver.lower()
    if driver_lower not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[driver_lower]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionManager:
    """Opens and closes connections through the configured adapter."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver)

    @property
    def adapter(self) -> Any:
        return self._adapter

    def open(self) -> Any:
        """Open a new connection. The caller owns it and must close it."""
        logger.debug("Opening %s connection to %s", self.config.driver, self.config.database)
        return self._adapter.open(self.config)

    @contextmanager
    def get_connection(self):  # type: ignore[no-untyped-def]
        """Open a connection as a context manager; closed on exit."""
        connection = self.open()
        try:
            yield connection
        finally:
            connection.close()
