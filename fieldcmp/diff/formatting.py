"""Text rendering for diff reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldcmp.diff.models import DiffReport, FieldOutcome


def render_outcome(outcome: FieldOutcome) -> str:
    """Render one non-equal outcome as a newline-terminated report line."""
    if outcome.status == "mismatch":
        return f"{outcome.name}: {outcome.expected_repr} != {outcome.actual_repr}\n"
    if outcome.status == "missing_in_actual":
        return f"{outcome.name}: field missing from actual: {outcome.expected_repr}\n"
    if outcome.status == "missing_in_expected":
        return f"{outcome.name}: field missing from expected: {outcome.actual_repr}\n"
    return ""


def render_report(report: DiffReport) -> str:
    return "".join(render_outcome(outcome) for outcome in report.outcomes)


def render_summary(report: DiffReport) -> str:
    summary = report.summary()
    return (
        f"mode={report.mode} fields={report.fields_checked} "
        f"mismatch={summary['mismatch']} "
        f"missing_in_actual={summary['missing_in_actual']} "
        f"missing_in_expected={summary['missing_in_expected']}"
    )
