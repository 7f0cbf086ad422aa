"""Pipeline stage logic — progress steps, per-stage actions, action → request."""

from __future__ import annotations

from typing import Any, NamedTuple, Optional, Sequence

from staffos.common.exceptions import ValidationException
from staffos.common.formatting import humanize
from staffos.recruitment.schemas import StageHistoryEntry

STAGE_ORDER = [
    "application",
    "shortlisted",
    "interview_requested",
    "interview_scheduled",
    "interview_complete",
    "further_assessment",
    "final_shortlist",
    "offer_made",
    "offer_accepted",
]

# Steps drawn on the progress bar (further_assessment has no step of its own)
PROGRESS_STEPS = [
    ("application", "Application"),
    ("shortlisted", "Shortlisted"),
    ("interview_requested", "Interview"),
    ("interview_scheduled", "Scheduled"),
    ("interview_complete", "Interviewed"),
    ("final_shortlist", "Shortlist"),
    ("offer_made", "Offer"),
    ("offer_accepted", "Accepted"),
]

TERMINAL_STAGES = frozenset({"offer_declined", "rejected", "withdrawn"})
NO_WITHDRAW_STAGES = TERMINAL_STAGES | {"offer_accepted"}

REINSTATE_ACTIONS = frozenset({"unreject", "unwithdraw", "reinstate"})
REINSTATE_STAGE = "shortlisted"
REINSTATE_REASON = "Candidate reinstated"

# Actions that open a form instead of calling the API directly
FORM_ACTIONS = frozenset({"schedule_interview", "score_interview", "make_offer"})


class Action(NamedTuple):
    id: str
    label: str
    type: str  # primary | secondary | danger | success


class ProgressStep(NamedTuple):
    stage: str
    label: str
    state: str  # completed | current | future


class ActionRequest(NamedTuple):
    method: str
    path: str
    body: Optional[dict[str, Any]]


_REJECT = Action("reject", "Reject", "danger")
_SCHEDULE = Action("schedule_interview", "Schedule Interview", "primary")
_FINAL = Action("final_shortlist", "Add to Final Shortlist", "secondary")
_REINSTATE_LABEL = "Reinstate Candidate"

STAGE_ACTIONS: dict[str, list[Action]] = {
    "application": [Action("shortlist", "Shortlist", "primary"), _REJECT],
    "shortlisted": [_SCHEDULE, _REJECT],
    "interview_requested": [_SCHEDULE, _REJECT],
    "interview_scheduled": [
        Action("score_interview", "Score Interview", "primary"),
        _FINAL,
        Action("further_assessment", "Needs Further Assessment", "secondary"),
        _REJECT,
    ],
    "interview_complete": [
        _FINAL._replace(type="primary"),
        Action("further_assessment", "Requires Further Assessment", "secondary"),
        Action("schedule_interview", "Schedule Another Interview", "secondary"),
        _REJECT,
    ],
    "further_assessment": [
        Action("schedule_interview", "Schedule Assessment", "primary"),
        _FINAL,
    ],
    "final_shortlist": [Action("make_offer", "Make Offer", "primary"), _REJECT],
    "offer_made": [
        Action("accept_offer", "Mark Accepted", "success"),
        Action("decline_offer", "Mark Declined", "danger"),
    ],
    "rejected": [Action("unreject", _REINSTATE_LABEL, "primary")],
    "withdrawn": [Action("unwithdraw", _REINSTATE_LABEL, "primary")],
    "offer_declined": [Action("reinstate", _REINSTATE_LABEL, "primary")],
}


def stage_display(stage: Optional[str]) -> str:
    return humanize(stage)


def available_actions(stage: str) -> list[Action]:
    """Buttons offered for a candidate at ``stage``, withdraw last."""
    actions = list(STAGE_ACTIONS.get(stage, []))
    if stage not in NO_WITHDRAW_STAGES:
        actions.append(Action("withdraw", "Withdraw", "secondary"))
    return actions


def progress(
    current_stage: str,
    history: Sequence[StageHistoryEntry] = (),
) -> list[ProgressStep]:
    """Progress-bar states for every step.

    A terminal candidate shows only the steps it actually reached.  A stage
    with no step of its own leaves every step in the future.
    """
    if current_stage in TERMINAL_STAGES:
        reached = {h.to_stage for h in history}
        return [
            ProgressStep(stage, label, "completed" if stage in reached else "future")
            for stage, label in PROGRESS_STEPS
        ]

    step_ids = [stage for stage, _ in PROGRESS_STEPS]
    if current_stage in step_ids:
        current_index = step_ids.index(current_stage)
        steps = []
        for index, (stage, label) in enumerate(PROGRESS_STEPS):
            if index < current_index:
                state = "completed"
            elif index == current_index:
                state = "current"
            else:
                state = "future"
            steps.append(ProgressStep(stage, label, state))
        return steps

    return [ProgressStep(stage, label, "future") for stage, label in PROGRESS_STEPS]


def _require_reason(action_id: str, reason: Optional[str]) -> str:
    if not reason or not reason.strip():
        raise ValidationException({"reason": [f"A reason is required to {humanize(action_id).lower()}."]})
    return reason.strip()


def action_request(
    action_id: str,
    candidate_id: int,
    reason: Optional[str] = None,
) -> ActionRequest:
    """Translate a pipeline button into the HTTP call it makes."""
    stage_path = f"/pipeline/candidates/{candidate_id}/stage"

    if action_id in ("shortlist", "final_shortlist", "further_assessment"):
        new_stage = "shortlisted" if action_id == "shortlist" else action_id
        return ActionRequest("PUT", stage_path, {"new_stage": new_stage})
    if action_id == "reject":
        return ActionRequest("PUT", stage_path, {"new_stage": "rejected", "reason": _require_reason(action_id, reason)})
    if action_id == "withdraw":
        return ActionRequest("PUT", stage_path, {"new_stage": "withdrawn", "reason": _require_reason(action_id, reason)})
    if action_id == "accept_offer":
        return ActionRequest("POST", f"/pipeline/candidates/{candidate_id}/accept-offer", None)
    if action_id == "decline_offer":
        return ActionRequest(
            "POST", f"/pipeline/candidates/{candidate_id}/decline-offer",
            {"reason": _require_reason("decline the offer", reason)},
        )
    if action_id in REINSTATE_ACTIONS:
        return ActionRequest("PUT", stage_path, {"new_stage": REINSTATE_STAGE, "reason": REINSTATE_REASON})
    if action_id in FORM_ACTIONS:
        raise ValidationException({"action": [f"'{action_id}' needs its own form."]})
    raise ValidationException({"action": [f"Unknown pipeline action '{action_id}'."]})


def score_label(score: int) -> str:
    if score <= 2:
        return "Poor"
    if score <= 4:
        return "Below Average"
    if score <= 6:
        return "Average"
    if score <= 8:
        return "Good"
    return "Excellent"
