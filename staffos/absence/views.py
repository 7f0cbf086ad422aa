"""Absence display logic — insight labels, badges, pattern details, leave colours."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, NamedTuple, Optional

from staffos.absence.schemas import Insight, LeaveRequest
from staffos.common.constants import AbsenceCategory, InsightStatus
from staffos.common.formatting import format_date

PATTERN_LABELS = {
    "frequency": "High Frequency",
    "monday_friday": "Monday/Friday Pattern",
    "post_holiday": "Post-Holiday",
    "duration_trend": "Duration Trend",
    "short_notice": "Short Notice",
    "recurring_reason": "Recurring Reason",
    "seasonal": "Seasonal",
}

PATTERN_ICONS = {
    "frequency": "📊",
    "monday_friday": "📅",
    "post_holiday": "🏖️",
    "duration_trend": "📈",
    "short_notice": "⏰",
    "recurring_reason": "🔄",
    "seasonal": "🍂",
}
DEFAULT_PATTERN_ICON = "📋"

PRIORITY_COLOURS = {
    "high": "#f44336",
    "medium": "#ff9800",
    "low": "#4caf50",
}
DEFAULT_PRIORITY_COLOUR = "#555"


class Badge(NamedTuple):
    label: str
    background: str
    colour: str


STATUS_BADGES = {
    "new": Badge("New", "#e3f2fd", "#1565c0"),
    "pending_review": Badge("Pending", "#fff3e0", "#e65100"),
    "reviewed": Badge("Reviewed", "#e8f5e9", "#2e7d32"),
    "action_taken": Badge("Actioned", "#f3e5f5", "#7b1fa2"),
    "dismissed": Badge("Dismissed", "#f5f5f5", "#616161"),
}

# Insight list tabs → server-side status filter (pending filters client-side)
INSIGHT_TABS = {
    "pending": None,
    "reviewed": InsightStatus.reviewed.value,
    "actioned": InsightStatus.action_taken.value,
    "dismissed": InsightStatus.dismissed.value,
}
PENDING_STATUSES = frozenset({InsightStatus.new.value, InsightStatus.pending_review.value})

BRADFORD_EXPLANATION = (
    "Bradford Factor = S² × D (Spells squared × Days). "
    "Higher scores indicate more frequent short absences."
)

CATEGORY_COLOURS = {
    "sick": "#f44336",
    "maternity": "#9c27b0",
    "paternity": "#3f51b5",
    "adoption": "#9c27b0",
    "bereavement": "#607d8b",
    "jury_duty": "#795548",
    "compassionate": "#ff9800",
    "toil": "#4caf50",
    "unpaid": "#9e9e9e",
}
DEFAULT_CATEGORY_COLOUR = "#9e9e9e"

SICK_REASONS = {
    "illness": "Illness (cold, flu, etc.)",
    "medical_appointment": "Medical Appointment",
    "injury": "Injury",
    "mental_health": "Mental Health Day",
    "hospital": "Hospital Visit/Stay",
    "covid": "COVID-19",
    "other": "Other",
}


# ── Insight labels ────────────────────────────────────────────────────


def pattern_label(pattern_type: str) -> str:
    return PATTERN_LABELS.get(pattern_type, pattern_type)


def pattern_icon(pattern_type: str) -> str:
    return PATTERN_ICONS.get(pattern_type, DEFAULT_PATTERN_ICON)


def priority_colour(priority: Optional[str]) -> str:
    return PRIORITY_COLOURS.get(priority or "", DEFAULT_PRIORITY_COLOUR)


def status_badge(status: Optional[str]) -> Badge:
    """Badge for an insight status; unknown statuses show as pending."""
    return STATUS_BADGES.get(status or "", STATUS_BADGES["pending_review"])


def bradford_colour(score: int) -> str:
    if score >= 500:
        return "#f44336"
    if score >= 200:
        return "#ff9800"
    return "#4caf50"


def filter_pending(insights: Iterable[Insight]) -> list[Insight]:
    return [i for i in insights if i.status in PENDING_STATUSES]


def empty_state(tab: str) -> tuple[str, str]:
    """Heading and message shown when an insight tab has nothing in it."""
    if tab == "pending":
        return (
            "All caught up!",
            "There are no absence patterns requiring review at this time.",
        )
    return f"No {tab} insights", f"No insights have been {tab}."


# ── Pattern details ───────────────────────────────────────────────────


def _detail(label: str, value: Any) -> str:
    return f"{label} {value}"


def render_pattern_details(pattern_type: str, data: Optional[Mapping[str, Any]]) -> list[str]:
    """Human-readable lines for an insight's ``pattern_data``.

    Unknown pattern types fall back to the raw data as indented JSON.
    """
    if not data:
        return []

    if pattern_type == "frequency":
        return [
            _detail("Absences:", f"{data.get('count')} in {data.get('period_days')} days"),
            _detail("Threshold:", f"{data.get('threshold')} absences"),
        ]
    if pattern_type == "monday_friday":
        return [
            _detail("Monday absences:", data.get("monday_count")),
            _detail("Friday absences:", data.get("friday_count")),
            _detail("Total absences:", data.get("total_absences")),
            _detail("Percentage:", f"{data.get('percentage')}%"),
        ]
    if pattern_type == "post_holiday":
        occurrences = data.get("occurrences") or []
        lines = [_detail("Occurrences:", len(occurrences))]
        lines.extend(
            f"Holiday ended {format_date(o.get('holiday_end'))} → "
            f"Absent {format_date(o.get('absence_start'))}"
            for o in occurrences
        )
        return lines
    if pattern_type == "duration_trend":
        return [
            _detail("First period avg:", f"{data.get('first_period_avg')} days"),
            _detail("Last period avg:", f"{data.get('last_period_avg')} days"),
            _detail("Increase:", f"+{data.get('increase_percentage')}%"),
        ]
    if pattern_type == "short_notice":
        return [
            _detail("Same-day reports:", data.get("same_day_count")),
            _detail("Total absences:", data.get("total_absences")),
            _detail("Percentage:", f"{data.get('percentage')}%"),
        ]
    if pattern_type == "recurring_reason":
        return [
            _detail("Reason:", data.get("reason_label")),
            _detail("Count:", f"{data.get('count')} times"),
        ]
    return json.dumps(data, indent=2, default=str).splitlines()


# ── Leave / sickness ──────────────────────────────────────────────────


def non_annual(requests: Iterable[LeaveRequest]) -> list[LeaveRequest]:
    """Absence dashboard rows: anything with a category other than annual leave."""
    return [
        r for r in requests
        if r.absence_category and r.absence_category != AbsenceCategory.annual.value
    ]


def category_colour(category: Optional[str]) -> str:
    return CATEGORY_COLOURS.get(category or "", DEFAULT_CATEGORY_COLOUR)


def sick_reason_label(reason: Optional[str]) -> str:
    if not reason:
        return ""
    return SICK_REASONS.get(reason, reason)
