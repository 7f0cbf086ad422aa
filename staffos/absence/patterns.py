"""Absence pattern detection — wellbeing insights from an employee's leave history.

Business logic:
  - Only sick, bereavement and compassionate absences from the last
    12 months count; cancelled requests are ignored
  - Six detectors (frequency, Monday/Friday, post-holiday, duration trend,
    short notice, recurring reason), each with its own thresholds
  - A detector stays quiet when a non-dismissed insight of the same type
    already covers the period (30 day tolerance)
  - Bradford factor: S² × D over the same 12 month window
"""

from __future__ import annotations

import calendar
import math
from collections import Counter
from datetime import date, timedelta
from typing import Any, Iterable, NamedTuple, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from staffos.common.constants import AbsenceCategory, LeaveStatus, PatternType, Priority
from staffos.common.formatting import DateLike, parse_date, percentage
from staffos.config import settings

THRESHOLDS: dict[str, dict[str, int]] = {
    "frequency": {"absences_per_90_days": 3, "absences_per_year": 6},
    "monday_friday": {"percentage": 50, "min_absences": 4},
    "post_holiday": {"occurrences": 2, "days_after": 2},
    "duration_trend": {"increase_percentage": 50, "min_periods": 2},
    "short_notice": {"same_day_count": 3, "percentage": 40},
}

TRACKED_CATEGORIES = frozenset({
    AbsenceCategory.sick.value,
    AbsenceCategory.bereavement.value,
    AbsenceCategory.compassionate.value,
})

SICK_REASON_LABELS = {
    "illness": "General illness",
    "injury": "Injury",
    "mental_health": "Mental health",
    "medical_appointment": "Medical appointments",
    "other": "Other reasons",
}

RECENT_DAYS = 90
DUPLICATE_WINDOW_DAYS = 30
MONDAY, FRIDAY = 0, 4


class Absence(BaseModel):
    """One leave request as the detectors see it."""

    model_config = ConfigDict(extra="ignore")

    id: int
    absence_category: str
    leave_start_date: date
    leave_end_date: Optional[date] = None
    status: str = LeaveStatus.approved.value
    sick_reason: Optional[str] = None
    notice_days: Optional[int] = None

    @property
    def duration_days(self) -> int:
        """Inclusive day count; open-ended absences count as one day."""
        if self.leave_end_date is None:
            return 1
        return (self.leave_end_date - self.leave_start_date).days + 1 or 1


class DetectedPattern(BaseModel):
    employee_id: Optional[int] = None
    pattern_type: str
    priority: str
    period_start: date
    period_end: date
    pattern_data: dict[str, Any] = Field(default_factory=dict)
    related_absence_ids: list[int] = []
    summary: str


class AbsenceSummary(NamedTuple):
    total_absences: int
    total_days: int
    avg_duration: float
    monday_count: int
    friday_count: int
    same_day_count: int
    bradford_factor: int
    last_absence_date: Optional[date]
    last_absence_duration: Optional[int]
    last_absence_reason: Optional[str]


# ── Date helpers ──────────────────────────────────────────────────────


def months_before(day: date, months: int) -> date:
    """Calendar month arithmetic; the day is clamped to the target month's end."""
    index = day.year * 12 + day.month - 1 - months
    year, month = divmod(index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def _round_half_up(value: float, places: int = 0) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def quarter_key(day: date) -> str:
    return f"{day.year}-Q{(day.month - 1) // 3 + 1}"


# ── Input shaping ─────────────────────────────────────────────────────


def _coerce(absences: Iterable[Any]) -> list[Absence]:
    return [a if isinstance(a, Absence) else Absence.model_validate(a) for a in absences]


def tracked_absences(absences: Iterable[Any], today: date) -> list[Absence]:
    """Sick/bereavement/compassionate absences in the last 12 months, newest first."""
    since = months_before(today, 12)
    rows = [
        a for a in _coerce(absences)
        if a.absence_category in TRACKED_CATEGORIES
        and a.leave_start_date >= since
        and a.status != LeaveStatus.cancelled.value
    ]
    return sorted(rows, key=lambda a: a.leave_start_date, reverse=True)


def approved_holidays(absences: Iterable[Any], today: date) -> list[Absence]:
    """Approved annual leave that ended in the last 12 months, latest first."""
    since = months_before(today, 12)
    rows = [
        a for a in _coerce(absences)
        if a.absence_category == AbsenceCategory.annual.value
        and a.status == LeaveStatus.approved.value
        and a.leave_end_date is not None
        and a.leave_end_date >= since
    ]
    return sorted(rows, key=lambda a: a.leave_end_date, reverse=True)


class _Existing(NamedTuple):
    pattern_type: str
    period_start: date


def _existing_periods(existing: Iterable[Any]) -> list[_Existing]:
    rows = []
    for insight in existing:
        data = insight if isinstance(insight, dict) else insight.model_dump()
        start = parse_date(data.get("period_start"))
        if data.get("status") == "dismissed" or start is None:
            continue
        rows.append(_Existing(data["pattern_type"], start))
    return rows


def _already_flagged(existing: Sequence[_Existing], pattern_type: str, period_start: date) -> bool:
    floor = period_start - timedelta(days=DUPLICATE_WINDOW_DAYS)
    return any(e.pattern_type == pattern_type and e.period_start >= floor for e in existing)


# ═════════════════════════════════════════════════════════════════════
# Detectors
# ═════════════════════════════════════════════════════════════════════


def detect_frequency(absences: Sequence[Absence], today: date) -> Optional[DetectedPattern]:
    since = today - timedelta(days=RECENT_DAYS)
    recent = [a for a in absences if a.leave_start_date >= since]
    threshold = THRESHOLDS["frequency"]["absences_per_90_days"]
    if len(recent) < threshold:
        return None
    return DetectedPattern(
        pattern_type=PatternType.frequency.value,
        priority=Priority.high.value if len(recent) >= 5 else Priority.medium.value,
        period_start=since,
        period_end=today,
        pattern_data={"count": len(recent), "period_days": RECENT_DAYS, "threshold": threshold},
        related_absence_ids=[a.id for a in recent],
        summary=f"{len(recent)} absences in the last {RECENT_DAYS} days (threshold: {threshold})",
    )


def detect_monday_friday(absences: Sequence[Absence], today: date) -> Optional[DetectedPattern]:
    minimum = THRESHOLDS["monday_friday"]["min_absences"]
    if len(absences) < minimum:
        return None
    since = months_before(today, 6)
    recent = [a for a in absences if a.leave_start_date >= since]
    if len(recent) < minimum:
        return None

    mondays = [a for a in recent if a.leave_start_date.weekday() == MONDAY]
    fridays = [a for a in recent if a.leave_start_date.weekday() == FRIDAY]
    adjacent = len(mondays) + len(fridays)
    pct = percentage(adjacent, len(recent))
    if pct < THRESHOLDS["monday_friday"]["percentage"]:
        return None

    return DetectedPattern(
        pattern_type=PatternType.monday_friday.value,
        priority=Priority.high.value if pct >= 70 else Priority.medium.value,
        period_start=since,
        period_end=today,
        pattern_data={
            "monday_count": len(mondays),
            "friday_count": len(fridays),
            "total_absences": len(recent),
            "percentage": pct,
        },
        related_absence_ids=[
            a.id for a in recent if a.leave_start_date.weekday() in (MONDAY, FRIDAY)
        ],
        summary=f"{pct}% of absences ({adjacent}/{len(recent)}) fall on Monday or Friday",
    )


def detect_post_holiday(
    absences: Sequence[Absence],
    holidays: Sequence[Absence],
    today: date,
) -> Optional[DetectedPattern]:
    window = THRESHOLDS["post_holiday"]["days_after"]
    occurrences = []
    for holiday in holidays:
        for absence in absences:
            days_after = (absence.leave_start_date - holiday.leave_end_date).days
            if 0 <= days_after <= window:
                occurrences.append({
                    "holiday_end": holiday.leave_end_date.isoformat(),
                    "absence_start": absence.leave_start_date.isoformat(),
                    "absence_id": absence.id,
                    "days_after": days_after,
                })
                # once per holiday
                break

    threshold = THRESHOLDS["post_holiday"]["occurrences"]
    if len(occurrences) < threshold:
        return None
    return DetectedPattern(
        pattern_type=PatternType.post_holiday.value,
        priority=Priority.high.value if len(occurrences) >= 3 else Priority.medium.value,
        period_start=months_before(today, 12),
        period_end=today,
        pattern_data={"occurrences": occurrences, "threshold": threshold, "days_window": window},
        related_absence_ids=[o["absence_id"] for o in occurrences],
        summary=(
            f"Absent within {window} day(s) of returning from annual leave "
            f"on {len(occurrences)} occasions"
        ),
    )


def detect_duration_trend(absences: Sequence[Absence], today: date) -> Optional[DetectedPattern]:
    totals: dict[str, list[int]] = {}
    for absence in absences:
        bucket = totals.setdefault(quarter_key(absence.leave_start_date), [0, 0])
        bucket[0] += absence.duration_days
        bucket[1] += 1

    periods = [
        {"period": key, "avg_days": _round_half_up(days / count, 1)}
        for key, (days, count) in sorted(totals.items())
    ]
    if len(periods) < THRESHOLDS["duration_trend"]["min_periods"]:
        return None

    first_avg = periods[0]["avg_days"]
    last_avg = periods[-1]["avg_days"]
    if not (first_avg > 0 and last_avg > first_avg):
        return None
    increase = int(_round_half_up((last_avg - first_avg) / first_avg * 100))
    if increase < THRESHOLDS["duration_trend"]["increase_percentage"]:
        return None

    return DetectedPattern(
        pattern_type=PatternType.duration_trend.value,
        priority=Priority.high.value if increase >= 100 else Priority.medium.value,
        period_start=months_before(today, 12),
        period_end=today,
        pattern_data={
            "periods": periods,
            "first_period_avg": first_avg,
            "last_period_avg": last_avg,
            "increase_percentage": increase,
        },
        related_absence_ids=[a.id for a in absences],
        summary=(
            f"Average absence duration increased by {increase}% "
            f"(from {first_avg:g} to {last_avg:g} days)"
        ),
    )


def detect_short_notice(absences: Sequence[Absence], today: date) -> Optional[DetectedPattern]:
    since = today - timedelta(days=RECENT_DAYS)
    recent = [a for a in absences if a.leave_start_date >= since]
    if len(recent) < 3:
        return None

    same_day = [a for a in recent if a.notice_days is not None and a.notice_days <= 0]
    pct = percentage(len(same_day), len(recent))
    limits = THRESHOLDS["short_notice"]
    if len(same_day) < limits["same_day_count"] and pct < limits["percentage"]:
        return None

    return DetectedPattern(
        pattern_type=PatternType.short_notice.value,
        priority=Priority.high.value if pct >= 60 else Priority.medium.value,
        period_start=since,
        period_end=today,
        pattern_data={
            "same_day_count": len(same_day),
            "total_absences": len(recent),
            "percentage": pct,
            "threshold_count": limits["same_day_count"],
            "threshold_percentage": limits["percentage"],
        },
        related_absence_ids=[a.id for a in same_day],
        summary=f"{len(same_day)} same-day absence reports ({pct}% of recent absences)",
    )


def detect_recurring_reason(absences: Sequence[Absence], today: date) -> Optional[DetectedPattern]:
    sick = [
        a for a in absences
        if a.absence_category == AbsenceCategory.sick.value and a.sick_reason
    ]
    if len(sick) < 3:
        return None

    counts = Counter(a.sick_reason for a in sick)
    # Counter keeps first-seen order, so the newest absence's reason wins ties
    for reason, count in counts.items():
        if count < 3:
            continue
        label = SICK_REASON_LABELS.get(reason, reason)
        return DetectedPattern(
            pattern_type=PatternType.recurring_reason.value,
            priority=Priority.high.value if count >= 5 else Priority.low.value,
            period_start=months_before(today, 12),
            period_end=today,
            pattern_data={
                "reason": reason,
                "reason_label": label,
                "count": count,
                "total_sick_absences": len(sick),
            },
            related_absence_ids=[a.id for a in sick if a.sick_reason == reason],
            summary=f'{count} absences citing "{label}" in the last 12 months',
        )
    return None


# ═════════════════════════════════════════════════════════════════════
# Entry points
# ═════════════════════════════════════════════════════════════════════


def detect_patterns(
    absences: Iterable[Any],
    today: DateLike = None,
    *,
    employee_id: Optional[int] = None,
    existing: Iterable[Any] = (),
) -> list[DetectedPattern]:
    """Run every detector over an employee's leave history.

    ``absences`` may mix annual leave (used for the post-holiday check) with
    sickness records; ``existing`` holds insights already raised so the same
    pattern is not reported twice.
    """
    today = parse_date(today) or settings.today()
    history = _coerce(absences)
    tracked = tracked_absences(history, today)
    if not tracked:
        return []

    holidays = approved_holidays(history, today)
    flagged = _existing_periods(existing)
    candidates = [
        detect_frequency(tracked, today),
        detect_monday_friday(tracked, today),
        detect_post_holiday(tracked, holidays, today) if holidays else None,
        detect_duration_trend(tracked, today),
        detect_short_notice(tracked, today),
        detect_recurring_reason(tracked, today),
    ]

    found = []
    for pattern in candidates:
        if pattern is None:
            continue
        if _already_flagged(flagged, pattern.pattern_type, pattern.period_start):
            continue
        pattern.employee_id = employee_id
        found.append(pattern)
    return found


def bradford_factor(spells: int, total_days: int) -> int:
    """S² × D — weights frequent short absences above one long one."""
    return spells * spells * total_days


def summarise_absences(absences: Iterable[Any], today: DateLike = None) -> AbsenceSummary:
    """12 month statistics for the employee absence summary card."""
    today = parse_date(today) or settings.today()
    tracked = tracked_absences(absences, today)
    total_days = sum(a.duration_days for a in tracked)
    spells = len(tracked)
    last = tracked[0] if tracked else None
    return AbsenceSummary(
        total_absences=spells,
        total_days=total_days,
        avg_duration=round(total_days / spells, 2) if spells else 0.0,
        monday_count=sum(1 for a in tracked if a.leave_start_date.weekday() == MONDAY),
        friday_count=sum(1 for a in tracked if a.leave_start_date.weekday() == FRIDAY),
        same_day_count=sum(1 for a in tracked if a.notice_days is not None and a.notice_days <= 0),
        bradford_factor=bradford_factor(spells, total_days),
        last_absence_date=last.leave_start_date if last else None,
        last_absence_duration=last.duration_days if last else None,
        last_absence_reason=last.sick_reason if last else None,
    )
