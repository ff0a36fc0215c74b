"""Assertion helpers that turn diff reports into test failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fieldcmp.core.serialization import StructuralSerializer
from fieldcmp.diff.engine import compare
from fieldcmp.diff.models import DiffReport


class FieldMismatchError(AssertionError):
    """Raised when a field-level comparison is not clean."""

    def __init__(self, report_text: str, report: DiffReport | None = None) -> None:
        super().__init__(report_text)
        self.report = report


@dataclass(slots=True)
class AssertionResult:
    """Outcome of an expected vs actual field comparison."""

    report: DiffReport

    @property
    def passed(self) -> bool:
        return self.report.is_clean

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    @property
    def message(self) -> str:
        return self.report.text

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "pass" if self.passed else "fail",
            "exit_code": self.exit_code,
            **self.report.to_dict(),
        }


def assert_clean(is_clean: bool, report_text: str, *, report: DiffReport | None = None) -> None:
    """Fail the current test with ``report_text`` unless the comparison was clean."""
    if is_clean:
        return
    raise FieldMismatchError(report_text, report)


def check_structs(
    expected: Any,
    actual: Any,
    *fields: str,
    serializer: StructuralSerializer | None = None,
) -> AssertionResult:
    """Compare two values and return the assertion outcome without raising."""
    return AssertionResult(report=compare(expected, actual, *fields, serializer=serializer))


def compare_structs(
    expected: Any,
    actual: Any,
    *fields: str,
    serializer: StructuralSerializer | None = None,
) -> None:
    """Assert two records match field by field.

    With field names, only those fields are compared (natively, in order).
    Without them, every field of both values is compared through the
    structural serializer and fields present on only one side are reported.

    Raises:
        FieldMismatchError: one line per differing field, e.g.
            ``b: 'str' != 'diff str'``.
        CallerConfigurationError: a named field is missing or not comparable.
        SerializationError: a value is not a keyed record (all-fields mode).
    """
    report = compare(expected, actual, *fields, serializer=serializer)
    assert_clean(report.is_clean, report.text, report=report)
