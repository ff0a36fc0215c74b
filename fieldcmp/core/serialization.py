"""Structural serialization used by all-fields comparison."""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
import json
import math
from pathlib import PurePath
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from fieldcmp.core.exceptions import SerializationError
from fieldcmp.core.pretty import pretty_repr

_STRINGIFIED_TYPES = (datetime, date, time, UUID, Decimal, PurePath)


@runtime_checkable
class StructuralSerializer(Protocol):
    """Capability required by all-fields comparison."""

    def to_mapping(self, value: Any) -> dict[str, Any]:
        """Convert a value to an ordered field-name -> serialized-value mapping."""
        ...

    def pretty(self, value: Any) -> str:
        """Render a serialized value for a diff report."""
        ...


class DefaultStructuralSerializer:
    """Reflection-based serializer for common record shapes.

    Records are mappings, dataclasses, named tuples, pydantic-style models
    (``model_dump()``), attrs classes and plain objects with ``__slots__``
    or public instance attributes. Field order follows declaration or
    insertion order.
    """

    name = "default"

    def to_mapping(self, value: Any) -> dict[str, Any]:
        serialized = self.serialize(value)
        if not isinstance(serialized, dict):
            raise SerializationError(
                f"{type(value).__name__} value serialized to "
                f"{_describe_shape(serialized)}, not a keyed record"
            )
        return serialized

    def serialize(self, value: Any) -> Any:
        return _serialize(value, active=frozenset())

    def pretty(self, value: Any, *, indent: int | None = None) -> str:
        return pretty_repr(value, indent=indent)


def structurally_equal(left: Any, right: Any) -> bool:
    """Deep equality over serialized trees.

    Mappings compare by key set and values, sequences in order. Booleans
    never equal numbers, and two NaN floats are equal.
    """
    if isinstance(left, dict) or isinstance(right, dict):
        if not (isinstance(left, dict) and isinstance(right, dict)):
            return False
        if left.keys() != right.keys():
            return False
        return all(structurally_equal(left[key], right[key]) for key in left)

    if isinstance(left, list) or isinstance(right, list):
        if not (isinstance(left, list) and isinstance(right, list)):
            return False
        if len(left) != len(right):
            return False
        return all(structurally_equal(a, b) for a, b in zip(left, right))

    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right

    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True

    return bool(left == right)


def _serialize(value: Any, *, active: frozenset[int]) -> Any:
    if isinstance(value, Enum):
        return _serialize(value.value, active=active)

    if value is None or isinstance(value, (bool, int, float, str, bytes)):
        return value

    if isinstance(value, _STRINGIFIED_TYPES):
        return str(value)

    if id(value) in active:
        raise SerializationError(
            f"cannot serialize self-referencing {type(value).__name__} value"
        )
    nested = active | {id(value)}

    if isinstance(value, Mapping):
        record: dict[str, Any] = {}
        for key, item in value.items():
            name = str(key)
            if name in record:
                raise SerializationError(
                    f"{type(value).__name__} keys collide as {name!r} once converted to strings"
                )
            record[name] = _serialize(item, active=nested)
        return record

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _serialize(getattr(value, field.name), active=nested)
            for field in dataclasses.fields(value)
        }

    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return {name: _serialize(getattr(value, name), active=nested) for name in value._fields}

    if isinstance(value, (list, tuple)):
        return [_serialize(item, active=nested) for item in value]

    if isinstance(value, (set, frozenset)):
        items = [_serialize(item, active=nested) for item in value]
        items.sort(key=_stable_item_sort_key)
        return items

    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump) and not isinstance(value, type):
        return _serialize(model_dump(), active=nested)

    attrs_fields = getattr(type(value), "__attrs_attrs__", None)
    if attrs_fields is not None:
        return {
            attribute.name: _serialize(getattr(value, attribute.name), active=nested)
            for attribute in attrs_fields
        }

    slot_names = _slot_names(value)
    if slot_names:
        return {
            name: _serialize(getattr(value, name), active=nested)
            for name in slot_names
            if hasattr(value, name)
        }

    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict) and not isinstance(value, type):
        return {
            name: _serialize(item, active=nested)
            for name, item in attributes.items()
            if not name.startswith("_")
        }

    return str(value)


def _slot_names(value: Any) -> list[str]:
    names: list[str] = []
    for klass in reversed(type(value).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("_") or name in names:
                continue
            names.append(name)
    return names


def _stable_item_sort_key(item: Any) -> str:
    return json.dumps(item, ensure_ascii=True, separators=(",", ":"), sort_keys=True, default=repr)


def _describe_shape(serialized: Any) -> str:
    if isinstance(serialized, list):
        return "a sequence"
    if serialized is None:
        return "null"
    return f"a scalar ({type(serialized).__name__})"
