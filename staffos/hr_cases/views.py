"""HR case display logic — labels, outcome options, PIP progress and guidance."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional

from staffos.common.constants import CaseStatus, CaseType, ObjectiveStatus
from staffos.common.formatting import percentage
from staffos.hr_cases.schemas import HRCase, MyPip, Objective, PipProgress

CASE_TYPE_LABELS = {
    CaseType.pip.value: "Performance Improvement Plan",
    CaseType.disciplinary.value: "Disciplinary",
    CaseType.grievance.value: "Grievance",
}

CASE_TYPE_SHORT = {
    CaseType.pip.value: "PIP",
    CaseType.disciplinary.value: "Disciplinary",
    CaseType.grievance.value: "Grievance",
}

CASE_TYPE_COLOURS = {
    CaseType.pip.value: "#ff9800",
    CaseType.disciplinary.value: "#f44336",
    CaseType.grievance.value: "#9c27b0",
}

STATUS_LABELS = {
    "draft": "Draft",
    "open": "Open",
    "investigation": "Investigation",
    "hearing_scheduled": "Hearing Scheduled",
    "awaiting_decision": "Awaiting Decision",
    "appeal": "Appeal",
    "closed": "Closed",
}

# Softer wording on the employee's own view
EMPLOYEE_STATUS_LABELS = {
    "draft": "Setting Up",
    "open": "Active",
    "investigation": "In Review",
    "hearing_scheduled": "Meeting Scheduled",
    "awaiting_decision": "Under Review",
    "appeal": "Appeal",
    "closed": "Completed",
}

STATUS_COLOURS = {
    "draft": "#9e9e9e",
    "open": "#2196f3",
    "investigation": "#ff9800",
    "hearing_scheduled": "#9c27b0",
    "awaiting_decision": "#f44336",
    "appeal": "#e91e63",
    "closed": "#4caf50",
}
DEFAULT_COLOUR = "#666"

ACTIVE_STATUSES = [
    CaseStatus.open.value,
    CaseStatus.investigation.value,
    CaseStatus.hearing_scheduled.value,
    CaseStatus.awaiting_decision.value,
    CaseStatus.appeal.value,
]

# Dashboard tab → list query
CASE_TABS = {
    "active": {"status": ACTIVE_STATUSES},
    "draft": {"status": [CaseStatus.draft.value]},
    "closed": {"status": [CaseStatus.closed.value], "include_closed": True},
}


class Option(NamedTuple):
    value: str
    label: str


OUTCOME_OPTIONS = {
    CaseType.pip.value: [
        Option("passed", "Passed - Objectives Met"),
        Option("extended", "Extended - More Time Needed"),
        Option("failed", "Failed - Proceed to Disciplinary"),
        Option("cancelled", "Cancelled"),
    ],
    CaseType.disciplinary.value: [
        Option("no_action", "No Action Required"),
        Option("verbal_warning", "Verbal Warning"),
        Option("written_warning", "Written Warning"),
        Option("final_warning", "Final Written Warning"),
        Option("dismissal", "Dismissal"),
    ],
    CaseType.grievance.value: [
        Option("upheld", "Upheld"),
        Option("partially_upheld", "Partially Upheld"),
        Option("not_upheld", "Not Upheld"),
        Option("withdrawn", "Withdrawn"),
    ],
}

MEETING_TYPES = [
    Option("investigation", "Investigation Meeting"),
    Option("hearing", "Formal Hearing"),
    Option("review", "Review Meeting"),
    Option("appeal", "Appeal Hearing"),
]

COMPANION_TYPES = [
    Option("union_rep", "Trade Union Representative"),
    Option("colleague", "Workplace Colleague"),
    Option("other", "Other"),
]

NOTE_TYPES = [
    Option("general", "General"),
    Option("investigation", "Investigation"),
    Option("evidence", "Evidence"),
    Option("decision", "Decision"),
    Option("appeal", "Appeal"),
]

CASE_TYPE_GUIDANCE = {
    CaseType.pip.value: (
        "A PIP should be used when an employee is underperforming but has the "
        "potential to improve. Set clear SMART objectives and provide appropriate support."
    ),
    CaseType.disciplinary.value: (
        "Disciplinary action is appropriate when there has been misconduct. Always "
        "investigate fully before starting formal proceedings. Follow the ACAS Code of Practice."
    ),
    CaseType.grievance.value: (
        "A grievance is a formal complaint raised by an employee about their workplace. "
        "This should be handled confidentially and investigated thoroughly."
    ),
}

ACAS_NOTICE = (
    "All disciplinary and grievance procedures must follow the ACAS Code of Practice. "
    "Employees have the right to be accompanied at formal hearings. "
    "Decisions must be confirmed in writing with the right to appeal."
)

COMPANION_NOTICE = (
    "Right to be accompanied: The employee has the statutory right to be accompanied "
    "by a workplace colleague or trade union representative at any formal "
    "disciplinary or grievance hearing."
)

DEFAULT_STAGE_GUIDANCE = "Follow the ACAS Code of Practice throughout this process."

OBJECTIVE_LABELS = {
    ObjectiveStatus.met.value: "Achieved!",
    ObjectiveStatus.on_track.value: "On Track",
    ObjectiveStatus.at_risk.value: "Needs Focus",
}

ENCOURAGEMENT = [
    (75, "🎉 Excellent work! You're making fantastic progress. Keep it up!"),
    (50, "💪 Great job! You're on track. Continue focusing on your objectives."),
]
ENCOURAGEMENT_STARTED = "🌱 Every step counts. Focus on one objective at a time - you've got this!"
ENCOURAGEMENT_NOT_STARTED = (
    "📚 Your objectives will be discussed with your manager. This is your opportunity to grow."
)


class StatusButton(NamedTuple):
    label: str
    status: Optional[str]  # None opens the meeting form instead of a status change


# ── Labels ────────────────────────────────────────────────────────────


def case_type_label(case_type: str, short: bool = False) -> str:
    labels = CASE_TYPE_SHORT if short else CASE_TYPE_LABELS
    return labels.get(case_type, case_type)


def status_label(status: str, employee_view: bool = False) -> str:
    labels = EMPLOYEE_STATUS_LABELS if employee_view else STATUS_LABELS
    return labels.get(status, status)


def status_colour(status: str) -> str:
    return STATUS_COLOURS.get(status, DEFAULT_COLOUR)


def case_type_colour(case_type: str) -> str:
    return CASE_TYPE_COLOURS.get(case_type, DEFAULT_COLOUR)


def outcome_options(case_type: str) -> list[Option]:
    return list(OUTCOME_OPTIONS.get(case_type, []))


def outcome_display(case: HRCase) -> str:
    """Closed-case outcome as shown on the banner, e.g. ``WRITTEN WARNING``."""
    outcome = case.pip_outcome or case.disciplinary_outcome or case.grievance_outcome or ""
    return outcome.replace("_", " ", 1).upper()


def objective_label(status: str) -> str:
    """Employee-facing objective badge."""
    return OBJECTIVE_LABELS.get(status, "In Progress")


def case_type_guidance(case_type: str) -> str:
    return CASE_TYPE_GUIDANCE.get(case_type, "")


def stage_guidance(case: HRCase) -> Optional[str]:
    """ACAS guidance for the case's current status; None once closed."""
    if not case.guidance or case.status == CaseStatus.closed.value:
        return None
    return (
        case.guidance.get(case.status)
        or case.guidance.get("investigation")
        or DEFAULT_STAGE_GUIDANCE
    )


def status_buttons(status: str) -> list[StatusButton]:
    """Status-change buttons for an open case; none for draft or closed."""
    if status in (CaseStatus.draft.value, CaseStatus.closed.value):
        return []
    buttons = []
    if status != CaseStatus.investigation.value:
        buttons.append(StatusButton("Start Investigation", CaseStatus.investigation.value))
    if status != CaseStatus.hearing_scheduled.value:
        buttons.append(StatusButton("Schedule Hearing", None))
    if status != CaseStatus.awaiting_decision.value:
        buttons.append(StatusButton("Awaiting Decision", CaseStatus.awaiting_decision.value))
    return buttons


# ── PIP progress ──────────────────────────────────────────────────────


def objective_progress(objectives: Iterable[Objective]) -> PipProgress:
    rows = list(objectives)
    met = sum(1 for o in rows if o.status == ObjectiveStatus.met.value)
    on_track = sum(
        1 for o in rows
        if o.status in (ObjectiveStatus.met.value, ObjectiveStatus.on_track.value)
    )
    return PipProgress(
        total=len(rows),
        met=met,
        on_track=on_track,
        on_track_percentage=percentage(on_track, len(rows)),
    )


def pip_progress_percentage(progress: Optional[PipProgress]) -> int:
    """Share of objectives met, as a whole percentage."""
    if progress is None:
        return 0
    return percentage(progress.met, progress.total)


def encouragement(progress: Optional[PipProgress]) -> str:
    progress = progress or PipProgress()
    for threshold, message in ENCOURAGEMENT:
        if progress.on_track_percentage >= threshold:
            return message
    if progress.total > 0:
        return ENCOURAGEMENT_STARTED
    return ENCOURAGEMENT_NOT_STARTED


def progress_colour(pct: int) -> str:
    if pct >= 75:
        return "#4caf50"
    if pct >= 50:
        return "#ff9800"
    return "#2196f3"


def split_pips(pips: Iterable[MyPip]) -> tuple[list[MyPip], list[MyPip]]:
    """(active, completed) development plans for the employee view."""
    rows = list(pips)
    active = [p for p in rows if p.status != CaseStatus.closed.value]
    completed = [p for p in rows if p.status == CaseStatus.closed.value]
    return active, completed
