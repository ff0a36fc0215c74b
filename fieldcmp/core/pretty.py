"""Pretty multi-line rendering of field values for diff reports."""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from typing import Any

from fieldcmp.config import resolve_pretty_indent


def pretty_repr(value: Any, *, indent: int | None = None) -> str:
    """Render a value across multiple lines, one container element per line.

    Containers always break after the opening bracket and every element
    carries a trailing comma, so nested structures line up vertically.
    Empty containers stay inline. Values that are not containers,
    dataclasses or named tuples fall back to ``repr()``.
    """
    width = resolve_pretty_indent() if indent is None else max(1, indent)
    return _render(value, level=0, width=width, active=frozenset())


def _render(value: Any, *, level: int, width: int, active: frozenset[int]) -> str:
    if _is_dataclass_instance(value):
        if not type(value).__dataclass_params__.repr:
            return repr(value)
        if id(value) in active:
            return f"{type(value).__name__}(...)"
        pairs = [
            (field.name, getattr(value, field.name))
            for field in dataclasses.fields(value)
            if field.repr
        ]
        return _render_keywords(
            type(value).__name__,
            pairs,
            level=level,
            width=width,
            active=active | {id(value)},
        )

    if isinstance(value, tuple) and hasattr(value, "_fields"):
        pairs = [(name, getattr(value, name)) for name in value._fields]
        return _render_keywords(
            type(value).__name__,
            pairs,
            level=level,
            width=width,
            active=active,
        )

    if isinstance(value, Mapping):
        if id(value) in active:
            return "{...}"
        nested = active | {id(value)}
        items = [
            f"{_render(key, level=level + 1, width=width, active=nested)}: "
            f"{_render(item, level=level + 1, width=width, active=nested)}"
            for key, item in value.items()
        ]
        return _wrap(value, dict, _container("{", "}", items, level=level, width=width))

    if isinstance(value, list):
        if id(value) in active:
            return "[...]"
        nested = active | {id(value)}
        items = [_render(item, level=level + 1, width=width, active=nested) for item in value]
        return _wrap(value, list, _container("[", "]", items, level=level, width=width))

    if isinstance(value, tuple):
        items = [_render(item, level=level + 1, width=width, active=active) for item in value]
        return _wrap(value, tuple, _container("(", ")", items, level=level, width=width))

    if isinstance(value, (set, frozenset)):
        if not value:
            return f"{type(value).__name__}()"
        items = sorted(
            _render(item, level=level + 1, width=width, active=active) for item in value
        )
        body = _container("{", "}", items, level=level, width=width)
        if type(value) is set:
            return body
        return f"{type(value).__name__}({body})"

    return repr(value)


def _render_keywords(
    name: str,
    pairs: list[tuple[str, Any]],
    *,
    level: int,
    width: int,
    active: frozenset[int],
) -> str:
    items = [
        f"{key}={_render(item, level=level + 1, width=width, active=active)}"
        for key, item in pairs
    ]
    return name + _container("(", ")", items, level=level, width=width)


def _container(opening: str, closing: str, items: list[str], *, level: int, width: int) -> str:
    if not items:
        return opening + closing
    pad = " " * (width * (level + 1))
    lines = [opening]
    for item in items:
        lines.append(f"{pad}{item},")
    lines.append(" " * (width * level) + closing)
    return "\n".join(lines)


def _wrap(value: Any, builtin: type, body: str) -> str:
    # Subclasses keep their type name.
    if type(value) is builtin:
        return body
    return f"{type(value).__name__}({body})"


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)
