"""Stable public API surface for fieldcmp.

This module is the supported import path for library users.
"""

from __future__ import annotations

from fieldcmp.core import (
    CallerConfigurationError,
    CompareError,
    DefaultStructuralSerializer,
    SerializationError,
    StructuralSerializer,
    pretty_repr,
)
from fieldcmp.diff import (
    AllFields,
    AssertionResult,
    ComparisonRequest,
    DiffReport,
    FieldMismatchError,
    FieldOutcome,
    SelectedFields,
    assert_clean,
    check_structs,
    compare,
    compare_structs,
    diff_fields,
    run_comparison,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompareError",
    "CallerConfigurationError",
    "SerializationError",
    "FieldMismatchError",
    "StructuralSerializer",
    "DefaultStructuralSerializer",
    "SelectedFields",
    "AllFields",
    "ComparisonRequest",
    "FieldOutcome",
    "DiffReport",
    "AssertionResult",
    "pretty_repr",
    "run_comparison",
    "compare",
    "diff_fields",
    "assert_clean",
    "check_structs",
    "compare_structs",
]
