"""Data models for field-level comparison and diff reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from fieldcmp.core.exceptions import CallerConfigurationError
from fieldcmp.core.serialization import DefaultStructuralSerializer, StructuralSerializer
from fieldcmp.diff.formatting import render_report

OutcomeStatus = Literal["equal", "mismatch", "missing_in_actual", "missing_in_expected"]
ModeName = Literal["selected_fields", "all_fields"]


@dataclass(slots=True)
class SelectedFields:
    """Compare only the named fields, in the order given."""

    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.fields, str):
            raise CallerConfigurationError(
                f"fields must be a sequence of field names, got the string {self.fields!r}"
            )
        self.fields = tuple(self.fields)
        if not self.fields:
            raise CallerConfigurationError("at least one field name is required")
        for position, name in enumerate(self.fields, start=1):
            if not isinstance(name, str) or not name:
                raise CallerConfigurationError(
                    f"field #{position} must be a non-empty string, got {name!r}"
                )

    @property
    def name(self) -> ModeName:
        return "selected_fields"


@dataclass(slots=True)
class AllFields:
    """Compare every field of both serialized values."""

    serializer: StructuralSerializer = field(default_factory=DefaultStructuralSerializer)

    def __post_init__(self) -> None:
        if not isinstance(self.serializer, StructuralSerializer):
            raise CallerConfigurationError(
                f"serializer {type(self.serializer).__name__} must provide "
                "to_mapping() and pretty()"
            )

    @property
    def name(self) -> ModeName:
        return "all_fields"


ComparisonMode = Union[SelectedFields, AllFields]


@dataclass(frozen=True, slots=True)
class ComparisonRequest:
    """Two values and how to compare them."""

    expected: Any
    actual: Any
    mode: ComparisonMode


@dataclass(frozen=True, slots=True)
class FieldOutcome:
    """Result of comparing a single field."""

    name: str
    status: OutcomeStatus
    expected_repr: str | None = None
    actual_repr: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "expected": self.expected_repr,
            "actual": self.actual_repr,
        }


@dataclass(slots=True)
class DiffReport:
    """Ordered non-equal field outcomes for one comparison."""

    mode: ModeName
    fields_checked: int
    outcomes: list[FieldOutcome] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.outcomes

    @property
    def text(self) -> str:
        return render_report(self)

    def summary(self) -> dict[str, int]:
        counts = {
            "mismatch": 0,
            "missing_in_actual": 0,
            "missing_in_expected": 0,
        }
        for outcome in self.outcomes:
            counts[outcome.status] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "fields_checked": self.fields_checked,
            "clean": self.is_clean,
            "summary": self.summary(),
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
            "report": self.text,
        }
