"""Compensation display logic — band position, pay review board, CSV export."""

from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, NamedTuple, Optional, Sequence

from staffos.common.constants import HR_ROLES, CycleStatus, ReviewStatus
from staffos.common.formatting import format_currency
from staffos.common.pagination import PaginationMeta, build_meta
from staffos.compensation.schemas import AuditPage, BonusScheme, PayReview, ReviewCycle

BENEFIT_TYPES = ["pension", "healthcare", "car", "bonus", "stock", "allowance", "other"]
BENEFIT_FREQUENCIES = ["monthly", "annual", "one_off"]

STATUS_ORDER = [s.value for s in ReviewStatus]
STATUS_LABELS = {
    ReviewStatus.draft.value: "Draft",
    ReviewStatus.submitted.value: "Submitted",
    ReviewStatus.hr_review.value: "HR Review",
    ReviewStatus.approved.value: "Approved",
    ReviewStatus.rejected.value: "Rejected",
    ReviewStatus.applied.value: "Applied",
}
# Columns shown on the board even when empty
ALWAYS_SHOWN = (ReviewStatus.draft.value, ReviewStatus.submitted.value)

ASSIGNMENT_BADGES = {
    "pending": "amber",
    "approved": "green",
    "applied": "blue",
    "rejected": "red",
}
DEFAULT_BADGE = "grey"

AUDIT_ACTIONS = ["view", "create", "update", "export", "download"]
EMPTY_CELL = "—"

REPORTS = {
    "gender-pay-gap": "Pay by band",
    "department-costs": "Department costs",
}


class ReviewAction(NamedTuple):
    status: str
    label: str
    sends_approved_salary: bool = False


class CycleAction(NamedTuple):
    status: str
    label: str


class KanbanColumn(NamedTuple):
    status: str
    label: str
    reviews: list


# ── Salary / bands ──────────────────────────────────────────────────

def band_position(current: Any, band_min: Any, band_max: Any) -> float:
    """Where a salary sits in its band, 0-100; 50 when the band is unknown."""
    if not current or not band_min or not band_max:
        return 50.0
    cur, lo, hi = Decimal(str(current)), Decimal(str(band_min)), Decimal(str(band_max))
    if hi == lo:
        return 50.0
    position = float((cur - lo) / (hi - lo) * 100)
    return min(100.0, max(0.0, position))


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def assignment_badge(status: Optional[str]) -> str:
    return ASSIGNMENT_BADGES.get(status or "", DEFAULT_BADGE)


def scheme_value(scheme: BonusScheme) -> str:
    """``10%`` for percentage schemes, otherwise a currency amount."""
    if scheme.calculation_type == "percentage":
        return f"{scheme.calculation_value.normalize():f}%"
    return format_currency(scheme.calculation_value)


# ── Pay review workflow ─────────────────────────────────────────────

def is_hr(role_name: Optional[str]) -> bool:
    return role_name in HR_ROLES


def review_actions(status: str, role_name: Optional[str]) -> list[ReviewAction]:
    """Buttons for a review card.  Anyone may submit a draft; the rest is HR only."""
    if status == ReviewStatus.draft.value:
        return [ReviewAction(ReviewStatus.submitted.value, "Submit")]
    if not is_hr(role_name):
        return []
    if status == ReviewStatus.submitted.value:
        return [ReviewAction(ReviewStatus.hr_review.value, "Review")]
    if status == ReviewStatus.hr_review.value:
        return [
            ReviewAction(ReviewStatus.approved.value, "Approve", sends_approved_salary=True),
            ReviewAction(ReviewStatus.rejected.value, "Reject"),
        ]
    if status == ReviewStatus.approved.value:
        return [ReviewAction(ReviewStatus.applied.value, "Apply")]
    return []


def kanban(reviews: Iterable[PayReview]) -> list[KanbanColumn]:
    """Reviews grouped by status in workflow order; empty columns are hidden."""
    grouped: dict[str, list[PayReview]] = {status: [] for status in STATUS_ORDER}
    for review in reviews:
        grouped.setdefault(review.status, []).append(review)
    return [
        KanbanColumn(status, STATUS_LABELS[status], grouped[status])
        for status in STATUS_ORDER
        if grouped[status] or status in ALWAYS_SHOWN
    ]


def cycle_action(status: str) -> Optional[CycleAction]:
    if status == CycleStatus.planning.value:
        return CycleAction(CycleStatus.open.value, "Open Cycle")
    if status == CycleStatus.open.value:
        return CycleAction(CycleStatus.in_review.value, "Close Submissions")
    if status == CycleStatus.in_review.value:
        return CycleAction(CycleStatus.complete.value, "Complete Cycle")
    return None


def auto_select_cycle(cycles: Sequence[ReviewCycle]) -> Optional[ReviewCycle]:
    """The first cycle still taking reviews, else the first cycle."""
    for cycle in cycles:
        if cycle.status in (CycleStatus.open.value, CycleStatus.in_review.value):
            return cycle
    return cycles[0] if cycles else None


def budget_text(cycle: ReviewCycle) -> Optional[str]:
    if not cycle.budget_total:
        return None
    return (
        f"Budget: {format_currency(cycle.budget_remaining)} / "
        f"{format_currency(cycle.budget_total)} remaining"
    )


# ── Reports / audit ─────────────────────────────────────────────────

def to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Header from the first row's keys; every value quoted, blanks for falsy."""
    if not rows:
        return ""
    headers = list(rows[0].keys())
    buffer = io.StringIO()
    buffer.write(",".join(headers) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow([row.get(h) or "" for h in headers])
    return buffer.getvalue().rstrip("\n")


def export_filename(report: str, today: date) -> str:
    return f"{report}_{today.isoformat()}.csv"


def audit_paging(page: AuditPage) -> PaginationMeta:
    return build_meta(page.offset, page.limit, page.total)


def audit_cell(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_CELL
    return str(value)
