"""Raw column value coercion.

Converts a non-null value read from a record to a field's storage type.
Enums go through an explicit value-then-name lookup; everything else through
a per-type converter table.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import uuid
from typing import Any, Callable

from row_reflect.core.exceptions import ConversionError

_TRUE_STRINGS = frozenset({"true", "1"})
_FALSE_STRINGS = frozenset({"false", "0"})


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"not a boolean literal: {value!r}")
    if isinstance(value, (int, float, decimal.Decimal)):
        return bool(value)
    raise TypeError(f"cannot convert {type(value).__name__} to bool")


def _to_int(value: Any) -> int:
    if isinstance(value, (float, decimal.Decimal)):
        # Banker's rounding, as round() does.
        return int(round(value))
    if isinstance(value, (int, str)):
        return int(value)
    raise TypeError(f"cannot convert {type(value).__name__} to int")


def _to_float(value: Any) -> float:
    if isinstance(value, (int, float, decimal.Decimal, str)):
        return float(value)
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def _to_decimal(value: Any) -> decimal.Decimal:
    if isinstance(value, float):
        return decimal.Decimal(repr(value))
    if isinstance(value, (int, str, decimal.Decimal)):
        return decimal.Decimal(value)
    raise TypeError(f"cannot convert {type(value).__name__} to Decimal")


def _to_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def _to_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    raise TypeError(f"cannot convert {type(value).__name__} to datetime")


def _to_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            return datetime.datetime.fromisoformat(text).date()
        return datetime.date.fromisoformat(text)
    raise TypeError(f"cannot convert {type(value).__name__} to date")


def _to_time(value: Any) -> datetime.time:
    if isinstance(value, datetime.datetime):
        return value.time()
    if isinstance(value, datetime.time):
        return value
    if isinstance(value, str):
        return datetime.time.fromisoformat(value)
    raise TypeError(f"cannot convert {type(value).__name__} to time")


def _to_timedelta(value: Any) -> datetime.timedelta:
    if isinstance(value, datetime.timedelta):
        return value
    if isinstance(value, (int, float, decimal.Decimal)):
        return datetime.timedelta(seconds=float(value))
    raise TypeError(f"cannot convert {type(value).__name__} to timedelta")


def _to_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return uuid.UUID(bytes=bytes(value))
    if isinstance(value, str):
        return uuid.UUID(value)
    raise TypeError(f"cannot convert {type(value).__name__} to UUID")


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"cannot convert {type(value).__name__} to bytes")


# datetime must precede date: datetime is a date subclass.
_CONVERTERS: list[tuple[type, Callable[[Any], Any]]] = [
    (bool, _to_bool),
    (int, _to_int),
    (float, _to_float),
    (decimal.Decimal, _to_decimal),
    (str, _to_str),
    (datetime.datetime, _to_datetime),
    (datetime.date, _to_date),
    (datetime.time, _to_time),
    (datetime.timedelta, _to_timedelta),
    (uuid.UUID, _to_uuid),
    (bytes, _to_bytes),
]


def coerce_enum(value: Any, enum_type: type[enum.Enum], field_name: str) -> enum.Enum:
    """Resolve *value* to a member of *enum_type* by value, then by name."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except (ValueError, TypeError) as exc:
        if isinstance(value, str) and value in enum_type.__members__:
            return enum_type.__members__[value]
        raise ConversionError(field_name, value, enum_type) from exc


def coerce_value(value: Any, storage_type: type, field_name: str) -> Any:
    """Coerce a non-null raw value to *storage_type*.

    Raises:
        ConversionError: If the value is incompatible with the type.
    """
    if issubclass(storage_type, enum.Enum):
        return coerce_enum(value, storage_type, field_name)

    # Exact type match needs no conversion (bool is not accepted for int).
    if type(value) is storage_type:
        return value

    for target, converter in _CONVERTERS:
        if issubclass(storage_type, target):
            try:
                converted = converter(value)
            except (ValueError, TypeError, ArithmeticError) as exc:
                raise ConversionError(field_name, value, storage_type) from exc
            if storage_type is not target:
                # Subclass of a known type, e.g. a str subclass.
                try:
                    return storage_type(converted)
                except (ValueError, TypeError) as exc:
                    raise ConversionError(field_name, value, storage_type) from exc
            return converted

    raise ConversionError(field_name, value, storage_type)
