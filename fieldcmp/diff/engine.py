"""Field-level comparison engine for selected-fields and all-fields modes."""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any, Callable

from fieldcmp.config import resolve_pretty_indent
from fieldcmp.core.exceptions import CallerConfigurationError, SerializationError
from fieldcmp.core.pretty import pretty_repr
from fieldcmp.core.serialization import (
    DefaultStructuralSerializer,
    StructuralSerializer,
    structurally_equal,
)
from fieldcmp.diff.models import (
    AllFields,
    ComparisonMode,
    ComparisonRequest,
    DiffReport,
    FieldOutcome,
    SelectedFields,
)
from fieldcmp.plugins import CompareEndEvent, CompareStartEvent, get_active_plugin_manager

_MISSING = object()


def compare(
    expected: Any,
    actual: Any,
    *fields: str,
    serializer: StructuralSerializer | None = None,
) -> DiffReport:
    """Compare the named fields, or every serialized field when none are named."""
    if fields and serializer is not None:
        raise CallerConfigurationError(
            "a serializer only applies when comparing all fields; drop the field names "
            "or the serializer"
        )
    mode: ComparisonMode
    if fields:
        mode = SelectedFields(fields)
    elif serializer is not None:
        mode = AllFields(serializer)
    else:
        mode = AllFields()
    return run_comparison(ComparisonRequest(expected=expected, actual=actual, mode=mode))


def diff_fields(
    expected: Any,
    actual: Any,
    *fields: str,
    serializer: StructuralSerializer | None = None,
) -> tuple[str, bool]:
    """Return ``(report_text, is_clean)`` for the comparison."""
    report = compare(expected, actual, *fields, serializer=serializer)
    return report.text, report.is_clean


def run_comparison(request: ComparisonRequest) -> DiffReport:
    """Run one comparison pass and collect every non-equal field outcome."""
    mode = request.mode
    if not isinstance(mode, (SelectedFields, AllFields)):
        raise CallerConfigurationError(f"unsupported comparison mode {type(mode).__name__}")

    plugin_manager = get_active_plugin_manager()
    plugin_manager.on_compare_start(
        CompareStartEvent(
            mode=mode.name,
            expected_type=type(request.expected).__name__,
            actual_type=type(request.actual).__name__,
            selected_fields=mode.fields if isinstance(mode, SelectedFields) else None,
        )
    )

    width = resolve_pretty_indent()
    try:
        if isinstance(mode, SelectedFields):
            report = _compare_selected(request.expected, request.actual, mode, width=width)
        else:
            report = _compare_all(request.expected, request.actual, mode, width=width)
    except Exception as error:
        plugin_manager.on_compare_end(
            CompareEndEvent(
                mode=mode.name,
                status="error",
                error_type=error.__class__.__name__,
                error_message=str(error),
            )
        )
        raise

    plugin_manager.on_compare_end(
        CompareEndEvent(
            mode=mode.name,
            status="ok",
            clean=report.is_clean,
            fields_checked=report.fields_checked,
            summary=report.summary(),
        )
    )
    return report


def enumerate_fields(
    mode: ComparisonMode,
    expected_mapping: Mapping[str, Any] | None = None,
    actual_mapping: Mapping[str, Any] | None = None,
) -> list[str]:
    """Ordered field names to inspect.

    Selected fields come back verbatim, duplicates included. For all-fields
    mode the result is every key of the expected mapping followed by the
    keys only the actual mapping has.
    """
    if isinstance(mode, SelectedFields):
        return list(mode.fields)

    if expected_mapping is None or actual_mapping is None:
        raise CallerConfigurationError("all-fields enumeration needs both serialized mappings")
    names = list(expected_mapping)
    names.extend(key for key in actual_mapping if key not in expected_mapping)
    return names


def classify_field(
    name: str,
    expected_value: Any,
    actual_value: Any,
    *,
    equals: Callable[[Any, Any], bool],
    render: Callable[[Any], str],
) -> FieldOutcome:
    """Turn field presence and an equality verdict into a ``FieldOutcome``."""
    if expected_value is _MISSING:
        return FieldOutcome(
            name=name,
            status="missing_in_expected",
            actual_repr=render(actual_value),
        )
    if actual_value is _MISSING:
        return FieldOutcome(
            name=name,
            status="missing_in_actual",
            expected_repr=render(expected_value),
        )
    if equals(expected_value, actual_value):
        return FieldOutcome(name=name, status="equal")
    return FieldOutcome(
        name=name,
        status="mismatch",
        expected_repr=render(expected_value),
        actual_repr=render(actual_value),
    )


def _compare_selected(expected: Any, actual: Any, mode: SelectedFields, *, width: int) -> DiffReport:
    values = _read_selected_fields(expected, actual, mode.fields)
    render = partial(pretty_repr, indent=width)

    outcomes: list[FieldOutcome] = []
    for name in enumerate_fields(mode):
        expected_value, actual_value = values[name]
        outcome = classify_field(
            name,
            expected_value,
            actual_value,
            equals=lambda left, right, field_name=name: _native_equal(field_name, left, right),
            render=render,
        )
        if outcome.status != "equal":
            outcomes.append(outcome)

    return DiffReport(mode=mode.name, fields_checked=len(mode.fields), outcomes=outcomes)


def _compare_all(expected: Any, actual: Any, mode: AllFields, *, width: int) -> DiffReport:
    serializer = mode.serializer
    expected_mapping = _serialize_side(serializer, expected, side="expected")
    actual_mapping = _serialize_side(serializer, actual, side="actual")
    names = enumerate_fields(mode, expected_mapping, actual_mapping)

    if structurally_equal(expected_mapping, actual_mapping):
        return DiffReport(mode=mode.name, fields_checked=len(names))

    render: Callable[[Any], str] = serializer.pretty
    if isinstance(serializer, DefaultStructuralSerializer):
        render = partial(serializer.pretty, indent=width)

    outcomes: list[FieldOutcome] = []
    for name in names:
        outcome = classify_field(
            name,
            expected_mapping.get(name, _MISSING),
            actual_mapping.get(name, _MISSING),
            equals=structurally_equal,
            render=render,
        )
        if outcome.status != "equal":
            outcomes.append(outcome)

    return DiffReport(mode=mode.name, fields_checked=len(names), outcomes=outcomes)


def _read_selected_fields(
    expected: Any,
    actual: Any,
    fields: tuple[str, ...],
) -> dict[str, tuple[Any, Any]]:
    """Read each distinct field once from both sides, failing on any absent one."""
    values: dict[str, tuple[Any, Any]] = {}
    problems: list[str] = []
    for name in dict.fromkeys(fields):
        pair = (_read_field(expected, name), _read_field(actual, name))
        absent = [
            side
            for side, value in zip(("expected", "actual"), pair)
            if value is _MISSING
        ]
        if absent:
            problems.append(f"field {name!r} does not exist on {' or '.join(absent)}")
        values[name] = pair
    if problems:
        raise CallerConfigurationError("; ".join(problems))
    return values


def _read_field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value[name] if name in value else _MISSING
    return getattr(value, name, _MISSING)


def _native_equal(name: str, left: Any, right: Any) -> bool:
    for side, value in (("expected", left), ("actual", right)):
        if getattr(type(value), "__eq__", None) is None:
            raise CallerConfigurationError(
                f"field {name!r} on {side} ({type(value).__name__}) does not support equality"
            )

    try:
        result = left == right
    except TypeError as error:
        raise CallerConfigurationError(
            f"field {name!r} cannot be compared for equality: {error}"
        ) from error

    if isinstance(result, bool):
        return result
    try:
        return bool(result)
    except (TypeError, ValueError) as error:
        raise CallerConfigurationError(
            f"field {name!r} equality returned {type(result).__name__}, "
            f"which has no single truth value: {error}"
        ) from error


def _serialize_side(serializer: StructuralSerializer, value: Any, *, side: str) -> dict[str, Any]:
    try:
        mapping = serializer.to_mapping(value)
    except (SerializationError, TypeError, ValueError) as error:
        raise SerializationError(f"could not serialize {side} value: {error}") from error

    if not isinstance(mapping, Mapping):
        raise SerializationError(
            f"could not serialize {side} value: serializer returned "
            f"{type(mapping).__name__}, not a keyed record"
        )
    return dict(mapping)
