"""Offboarding display logic — termination labels, leaving-date badges, progress."""

from __future__ import annotations

from datetime import date
from typing import NamedTuple, Optional, Sequence

from staffos.common.constants import TerminationType, WorkflowStatus
from staffos.common.formatting import DateLike, format_date, parse_date, percentage
from staffos.offboarding.schemas import ChecklistItem, ExitInterview

TERMINATION_LABELS = {
    TerminationType.resignation.value: "Resignation",
    TerminationType.termination.value: "Termination",
    TerminationType.redundancy.value: "Redundancy",
    TerminationType.retirement.value: "Retirement",
    TerminationType.end_of_contract.value: "End of Contract",
    TerminationType.tupe_transfer.value: "TUPE Transfer",
    TerminationType.death_in_service.value: "Death in Service",
}

STATUS_COLOURS = {
    WorkflowStatus.pending.value: "#ff9800",
    WorkflowStatus.in_progress.value: "#2196f3",
    WorkflowStatus.completed.value: "#4caf50",
    WorkflowStatus.cancelled.value: "#9e9e9e",
}
DEFAULT_COLOUR = "#555"

PRIORITY_COLOURS = {"high": "#f44336", "medium": "#ff9800"}
LOW_PRIORITY_COLOUR = "#4caf50"

# Dashboard tab → status filter
WORKFLOW_TABS = {
    "active": [WorkflowStatus.pending.value, WorkflowStatus.in_progress.value],
    "completed": [WorkflowStatus.completed.value],
    "cancelled": [WorkflowStatus.cancelled.value],
}

HANDOVER_TYPES = ["project", "client", "document", "system_access", "responsibility", "other"]

URGENT_DAYS = 7


class Transition(NamedTuple):
    status: str
    label: str


class DaysBadge(NamedTuple):
    days: int
    text: str
    urgent: bool
    past: bool


def termination_label(termination_type: str) -> str:
    return TERMINATION_LABELS.get(termination_type, termination_type)


def status_colour(status: str) -> str:
    return STATUS_COLOURS.get(status, DEFAULT_COLOUR)


def handover_priority_colour(priority: str) -> str:
    return PRIORITY_COLOURS.get(priority, LOW_PRIORITY_COLOUR)


def allowed_transitions(status: str) -> list[Transition]:
    """Status-change options for a workflow; cancelling is always offered."""
    options = []
    if status == WorkflowStatus.pending.value:
        options.append(Transition(WorkflowStatus.in_progress.value, "Start Processing"))
    elif status == WorkflowStatus.in_progress.value:
        options.append(Transition(WorkflowStatus.completed.value, "Mark Completed"))
    options.append(Transition(WorkflowStatus.cancelled.value, "Cancel"))
    return options


def days_badge(last_working_day: DateLike, today: date) -> Optional[DaysBadge]:
    """Countdown to the leaving date; None when there is no date."""
    target = parse_date(last_working_day)
    if target is None:
        return None
    days = (target - today).days
    if days < 0:
        text = f"{abs(days)} days ago"
    elif days == 0:
        text = "Today"
    elif days == 1:
        text = "Tomorrow"
    else:
        text = f"{days} days"
    return DaysBadge(days, text, 0 <= days <= URGENT_DAYS, days < 0)


def checklist_progress(items: Sequence[ChecklistItem]) -> int:
    done = sum(1 for item in items if item.completed)
    return percentage(done, len(items))


def exit_interview_summary(interview: Optional[ExitInterview]) -> str:
    if interview is not None and interview.completed:
        return "Completed"
    if interview is not None and interview.scheduled_date:
        return f"Scheduled: {format_date(interview.scheduled_date)}"
    return "Not Scheduled"


def experience_stars(rating: Optional[int]) -> str:
    if not rating:
        return ""
    return "★" * rating + "☆" * (5 - rating)


def handover_status_text(status: Optional[str]) -> str:
    return (status or "").replace("_", " ", 1)
