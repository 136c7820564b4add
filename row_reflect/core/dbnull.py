"""The database-null marker."""

from __future__ import annotations

from typing import Any


class _DBNullType:
    """Singleton standing for SQL NULL at the data-access boundary."""

    _instance: _DBNullType | None = None

    def __new__(cls) -> _DBNullType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DBNull"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "DBNull"


DBNull = _DBNullType()


def is_null(value: Any) -> bool:
    """Return True for None and DBNull."""
    return value is None or value is DBNull
