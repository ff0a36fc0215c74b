"""Diff subsystem for fieldcmp."""

from fieldcmp.core.exceptions import CallerConfigurationError, CompareError, SerializationError
from fieldcmp.diff.assertion import (
    AssertionResult,
    FieldMismatchError,
    assert_clean,
    check_structs,
    compare_structs,
)
from fieldcmp.diff.engine import (
    classify_field,
    compare,
    diff_fields,
    enumerate_fields,
    run_comparison,
)
from fieldcmp.diff.formatting import render_outcome, render_report, render_summary
from fieldcmp.diff.models import (
    AllFields,
    ComparisonMode,
    ComparisonRequest,
    DiffReport,
    FieldOutcome,
    OutcomeStatus,
    SelectedFields,
)

__all__ = [
    "CompareError",
    "CallerConfigurationError",
    "SerializationError",
    "OutcomeStatus",
    "SelectedFields",
    "AllFields",
    "ComparisonMode",
    "ComparisonRequest",
    "FieldOutcome",
    "DiffReport",
    "enumerate_fields",
    "classify_field",
    "run_comparison",
    "compare",
    "diff_fields",
    "render_outcome",
    "render_report",
    "render_summary",
    "AssertionResult",
    "FieldMismatchError",
    "assert_clean",
    "check_structs",
    "compare_structs",
]
