"""Redaction of salary figures in compensation audit trails.

The audit log records which field changed, never the amounts involved:
any field in ``SENSITIVE_FIELDS`` is written as ``REDACTED``.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, NamedTuple, Optional

REDACTED = "REDACTED"

SENSITIVE_FIELDS = frozenset({
    "base_salary",
    "min_salary",
    "mid_salary",
    "max_salary",
    "current_salary",
    "proposed_salary",
    "approved_salary",
    "value",
    "employer_contribution",
    "employee_contribution",
    "budget_total",
    "budget_remaining",
    "calculation_value",
    "amount",
    "calculated_amount",
    "base_amount",
})


class FieldChange(NamedTuple):
    field: str
    old_value: Optional[str]
    new_value: Optional[str]


def redact_value(field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if field in SENSITIVE_FIELDS:
        return REDACTED
    return str(value)


def field_changes(old: Mapping[str, Any], new: Mapping[str, Any]) -> Iterator[FieldChange]:
    """Changed fields between two versions of a record, already redacted."""
    for field, value in new.items():
        previous = old.get(field)
        if str(previous) == str(value):
            continue
        yield FieldChange(field, redact_value(field, previous), redact_value(field, value))
