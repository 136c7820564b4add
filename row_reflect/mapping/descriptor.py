"""Type descriptors.

describe() reflects over a class once and reports which of its public fields
take part in database mapping. Supports dataclasses, Pydantic models, plain
annotated classes and properties.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import inspect
import logging
import sys
import types
import uuid
from dataclasses import dataclass
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float)

_VALUE_TYPES: tuple[type, ...] = (
    decimal.Decimal,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    bytes,
)

_TEXT_TYPE = str


@dataclass(frozen=True)
class FieldDescriptor:
    """Reflected metadata for one field or property."""

    name: str
    declared_type: Any
    storage_type: Any
    is_mappable: bool
    is_writable: bool
    is_readable: bool


@dataclass(frozen=True)
class TypeDescriptor:
    """Ordered field descriptors of a target class."""

    target_class: type
    fields: tuple[FieldDescriptor, ...]

    @property
    def mappable_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.is_mappable)

    def writable_fields(self) -> list[FieldDescriptor]:
        """Mappable fields that materialization can assign."""
        return [f for f in self.fields if f.is_mappable and f.is_writable]

    def readable_fields(self) -> list[FieldDescriptor]:
        """Mappable fields that command building can read."""
        return [f for f in self.fields if f.is_mappable and f.is_readable]

    def field(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


def resolve_storage_type(declared_type: Any) -> Any:
    """Strip one level of Optional / ``X | None`` wrapping."""
    origin = get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(declared_type) if a is not type(None)]
        if len(args) == 1 and len(get_args(declared_type)) == 2:
            return args[0]
    return declared_type


def is_mappable_type(storage_type: Any) -> bool:
    """True for primitives, other value types (including enums) and text."""
    if get_origin(storage_type) is not None or not isinstance(storage_type, type):
        return False
    if issubclass(storage_type, enum.Enum):
        return True
    return (
        issubclass(storage_type, _PRIMITIVE_TYPES)
        or issubclass(storage_type, _VALUE_TYPES)
        or issubclass(storage_type, _TEXT_TYPE)
    )


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return issubclass(cls, BaseModel)
    except ImportError:
        return False


def _resolve_annotation(annotation: Any, namespace: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, namespace)  # noqa: S307
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except NameError:
        # Resolve annotations one by one; the unresolvable ones stay strings.
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            module = sys.modules.get(klass.__module__)
            # Module globals take precedence over class attributes.
            namespace = {**vars(klass), **(vars(module) if module is not None else {})}
            for name, annotation in inspect.get_annotations(klass).items():
                hints[name] = _resolve_annotation(annotation, namespace)
        return hints


def _is_classvar(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


def _attribute_fields(cls: type) -> list[tuple[str, Any, bool]]:
    """Return (name, declared_type, writable) for the class's declared attributes."""
    if _is_pydantic_model(cls):
        frozen = bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
        return [
            (name, info.annotation, not frozen)
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        ]

    hints = _type_hints(cls)

    if dataclasses.is_dataclass(cls):
        frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
        return [
            (f.name, hints.get(f.name, f.type), not frozen)
            for f in dataclasses.fields(cls)
        ]

    return [(name, hint, True) for name, hint in hints.items() if not _is_classvar(hint)]


def _property_fields(cls: type) -> list[tuple[str, Any, bool, bool]]:
    """Return (name, declared_type, readable, writable) for properties along the MRO."""
    found: dict[str, tuple[str, Any, bool, bool]] = {}
    for klass in reversed(cls.__mro__):
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, attr in vars(klass).items():
            if not isinstance(attr, property):
                continue
            declared: Any = Any
            if attr.fget is not None:
                try:
                    declared = get_type_hints(attr.fget).get("return", Any)
                except NameError:
                    declared = attr.fget.__annotations__.get("return", Any)
            found[name] = (name, declared, attr.fget is not None, attr.fset is not None)
    return list(found.values())


def describe(cls: type) -> TypeDescriptor:
    """Reflect over *cls* and describe its public instance fields.

    Non-mappable fields (lists, nested models, ``Any``) are kept in the
    descriptor with ``is_mappable=False``; they are never an error.
    """
    fields: list[FieldDescriptor] = []
    seen: set[str] = set()

    for name, declared, writable in _attribute_fields(cls):
        if name.startswith("_") or name in seen:
            continue
        seen.add(name)
        storage = resolve_storage_type(declared)
        fields.append(
            FieldDescriptor(
                name=name,
                declared_type=declared,
                storage_type=storage,
                is_mappable=is_mappable_type(storage),
                is_writable=writable,
                is_readable=True,
            )
        )

    for name, declared, readable, writable in _property_fields(cls):
        if name.startswith("_") or name in seen:
            continue
        seen.add(name)
        storage = resolve_storage_type(declared)
        fields.append(
            FieldDescriptor(
                name=name,
                declared_type=declared,
                storage_type=storage,
                is_mappable=is_mappable_type(storage),
                is_writable=writable,
                is_readable=readable,
            )
        )

    descriptor = TypeDescriptor(target_class=cls, fields=tuple(fields))
    logger.debug(
        "Described %s: %d fields, %d mappable",
        cls.__name__,
        len(descriptor.fields),
        len(descriptor.mappable_fields),
    )
    return descriptor
