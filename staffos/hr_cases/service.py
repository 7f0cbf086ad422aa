"""HR case service — PIP, disciplinary and grievance case management calls.

Case workflow (draft → open → investigation → hearing → closed) is enforced
by the server; this layer validates required fields and maps each action to
its endpoint.
"""

from __future__ import annotations

import logging
from typing import Optional

from staffos.client import ApiClient
from staffos.common.exceptions import ValidationException, require_fields
from staffos.hr_cases.schemas import (
    CaseAppeal,
    CaseClose,
    CaseNote,
    CaseNoteCreate,
    CaseStats,
    GrievanceSubmit,
    GrievanceSubmitted,
    Guidance,
    HRCase,
    HRCaseCreate,
    HRCaseUpdate,
    Meeting,
    MeetingCreate,
    MeetingOutcome,
    Milestone,
    MilestoneCreate,
    MyPip,
    Objective,
    ObjectiveCreate,
    ObjectiveUpdate,
    Witness,
    WitnessCreate,
)
from staffos.hr_cases.views import CASE_TABS, OUTCOME_OPTIONS

logger = logging.getLogger(__name__)

BASE = "/hr-cases"


class HRCaseService:
    """Async HR case operations."""

    # ── Cases ───────────────────────────────────────────────────────

    @staticmethod
    async def list_cases(
        api: ApiClient,
        tab: str = "active",
        case_type: Optional[str] = None,
    ) -> list[HRCase]:
        """Cases for a dashboard tab (active / draft / closed), optionally one type."""
        if tab not in CASE_TABS:
            raise ValidationException({"tab": [f"Unknown case tab '{tab}'"]})
        params = dict(CASE_TABS[tab])
        if case_type and case_type != "all":
            params["case_type"] = case_type
        body = await api.get(BASE, params=params)
        return [HRCase.model_validate(c) for c in body.get("cases", [])]

    @staticmethod
    async def stats(api: ApiClient) -> CaseStats:
        body = await api.get(f"{BASE}/stats")
        return CaseStats.model_validate(body)

    @staticmethod
    async def create_case(api: ApiClient, data: HRCaseCreate) -> HRCase:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "employee_id": "Please select an employee",
            "case_type": "Please select a case type",
            "summary": "Summary is required",
        })
        body = await api.post(BASE, payload)
        case = HRCase.model_validate(body)
        logger.info("Created %s case %s", case.case_type, case.case_reference or case.id)
        return case

    @staticmethod
    async def get_case(api: ApiClient, case_id: int) -> HRCase:
        body = await api.get(f"{BASE}/{case_id}")
        return HRCase.model_validate(body)

    @staticmethod
    async def update_case(api: ApiClient, case_id: int, data: HRCaseUpdate) -> HRCase:
        body = await api.put(f"{BASE}/{case_id}", data.model_dump(mode="json", exclude_unset=True))
        return HRCase.model_validate(body)

    @staticmethod
    async def delete_case(api: ApiClient, case_id: int) -> dict:
        """Delete a draft case (Admin only on the server)."""
        return await api.delete(f"{BASE}/{case_id}")

    @staticmethod
    async def open_case(api: ApiClient, case_id: int) -> HRCase:
        body = await api.post(f"{BASE}/{case_id}/open")
        return HRCase.model_validate(body)

    @staticmethod
    async def change_status(
        api: ApiClient,
        case_id: int,
        status: str,
        notes: Optional[str] = None,
    ) -> HRCase:
        body = await api.post(f"{BASE}/{case_id}/status", {"status": status, "notes": notes})
        logger.info("Case %s moved to %s", case_id, status)
        return HRCase.model_validate(body)

    @staticmethod
    async def close_case(
        api: ApiClient,
        case_id: int,
        case_type: str,
        outcome: str,
        outcome_notes: Optional[str] = None,
    ) -> HRCase:
        """Close a case with an outcome valid for its type."""
        allowed = {o.value for o in OUTCOME_OPTIONS.get(case_type, [])}
        if not outcome:
            raise ValidationException({"outcome": ["Outcome is required to close case"]})
        if allowed and outcome not in allowed:
            raise ValidationException({"outcome": [f"Invalid {case_type} outcome"]})
        payload = CaseClose(outcome=outcome, outcome_notes=outcome_notes)
        body = await api.post(f"{BASE}/{case_id}/close", payload.model_dump(mode="json"))
        return HRCase.model_validate(body)

    @staticmethod
    async def appeal(
        api: ApiClient,
        case_id: int,
        appeal_reason: str,
        appeal_heard_by: Optional[int] = None,
    ) -> HRCase:
        require_fields({"appeal_reason": appeal_reason}, {"appeal_reason": "Appeal reason is required"})
        payload = CaseAppeal(appeal_reason=appeal_reason, appeal_heard_by=appeal_heard_by)
        body = await api.post(f"{BASE}/{case_id}/appeal", payload.model_dump(mode="json"))
        return HRCase.model_validate(body)

    # ── PIP objectives ──────────────────────────────────────────────

    @staticmethod
    async def list_objectives(api: ApiClient, case_id: int) -> list[Objective]:
        body = await api.get(f"{BASE}/{case_id}/objectives")
        return [Objective.model_validate(o) for o in body.get("objectives", [])]

    @staticmethod
    async def add_objective(api: ApiClient, case_id: int, data: ObjectiveCreate) -> Objective:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "objective": "Objective is required",
            "success_criteria": "Success criteria are required",
            "target_date": "Target date is required",
        })
        body = await api.post(f"{BASE}/{case_id}/objectives", payload)
        return Objective.model_validate(body)

    @staticmethod
    async def update_objective(
        api: ApiClient,
        case_id: int,
        objective_id: int,
        data: ObjectiveUpdate,
    ) -> Objective:
        body = await api.put(
            f"{BASE}/{case_id}/objectives/{objective_id}",
            data.model_dump(mode="json", exclude_unset=True),
        )
        return Objective.model_validate(body)

    @staticmethod
    async def delete_objective(api: ApiClient, case_id: int, objective_id: int) -> dict:
        return await api.delete(f"{BASE}/{case_id}/objectives/{objective_id}")

    # ── Milestones ──────────────────────────────────────────────────

    @staticmethod
    async def list_milestones(api: ApiClient, case_id: int) -> list[Milestone]:
        body = await api.get(f"{BASE}/{case_id}/milestones")
        return [Milestone.model_validate(m) for m in body.get("milestones", [])]

    @staticmethod
    async def add_milestone(api: ApiClient, case_id: int, data: MilestoneCreate) -> Milestone:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "milestone_type": "Milestone type is required",
            "milestone_date": "Milestone date is required",
        })
        body = await api.post(f"{BASE}/{case_id}/milestones", payload)
        return Milestone.model_validate(body)

    @staticmethod
    async def complete_milestone(api: ApiClient, case_id: int, milestone_id: int) -> Milestone:
        body = await api.put(f"{BASE}/{case_id}/milestones/{milestone_id}", {"completed": True})
        return Milestone.model_validate(body)

    # ── Meetings ────────────────────────────────────────────────────

    @staticmethod
    async def list_meetings(api: ApiClient, case_id: int) -> list[Meeting]:
        body = await api.get(f"{BASE}/{case_id}/meetings")
        return [Meeting.model_validate(m) for m in body.get("meetings", [])]

    @staticmethod
    async def schedule_meeting(api: ApiClient, case_id: int, data: MeetingCreate) -> Meeting:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "meeting_type": "Meeting type is required",
            "scheduled_date": "Date is required",
        })
        body = await api.post(f"{BASE}/{case_id}/meetings", payload)
        return Meeting.model_validate(body)

    @staticmethod
    async def record_meeting_outcome(
        api: ApiClient,
        case_id: int,
        meeting_id: int,
        outcome_summary: str,
    ) -> Meeting:
        """Mark a meeting as held today with a short outcome summary."""
        payload = MeetingOutcome(
            held=True,
            held_date=api.config.today(),
            outcome_summary=outcome_summary,
        )
        body = await api.put(
            f"{BASE}/{case_id}/meetings/{meeting_id}",
            payload.model_dump(mode="json", include={"held", "held_date", "outcome_summary"}),
        )
        return Meeting.model_validate(body)

    # ── Notes / witnesses ───────────────────────────────────────────

    @staticmethod
    async def list_notes(api: ApiClient, case_id: int) -> list[CaseNote]:
        body = await api.get(f"{BASE}/{case_id}/notes")
        return [CaseNote.model_validate(n) for n in body.get("notes", [])]

    @staticmethod
    async def add_note(api: ApiClient, case_id: int, data: CaseNoteCreate) -> CaseNote:
        payload = data.model_dump(mode="json")
        require_fields(payload, {"content": "Note content is required"})
        body = await api.post(f"{BASE}/{case_id}/notes", payload)
        return CaseNote.model_validate(body)

    @staticmethod
    async def list_witnesses(api: ApiClient, case_id: int) -> list[Witness]:
        body = await api.get(f"{BASE}/{case_id}/witnesses")
        return [Witness.model_validate(w) for w in body.get("witnesses", [])]

    @staticmethod
    async def add_witness(api: ApiClient, case_id: int, data: WitnessCreate) -> Witness:
        payload = data.model_dump(mode="json")
        require_fields(payload, {"witness_name": "Witness name is required"})
        body = await api.post(f"{BASE}/{case_id}/witnesses", payload)
        return Witness.model_validate(body)

    @staticmethod
    async def update_witness_statement(
        api: ApiClient,
        case_id: int,
        witness_id: int,
        statement: str,
    ) -> Witness:
        body = await api.put(
            f"{BASE}/{case_id}/witnesses/{witness_id}",
            {"statement": statement, "statement_date": api.config.today().isoformat()},
        )
        return Witness.model_validate(body)

    # ── Manager / employee views ────────────────────────────────────

    @staticmethod
    async def my_cases(api: ApiClient) -> list[HRCase]:
        body = await api.get(f"{BASE}/my-cases")
        return [HRCase.model_validate(c) for c in body.get("cases", [])]

    @staticmethod
    async def guidance(api: ApiClient, case_type: str, stage: str) -> Guidance:
        body = await api.get(f"{BASE}/guidance/{case_type}/{stage}")
        return Guidance.model_validate(body)

    @staticmethod
    async def submit_grievance(
        api: ApiClient,
        summary: str,
        background: Optional[str] = None,
    ) -> GrievanceSubmitted:
        require_fields({"summary": summary}, {"summary": "Grievance summary is required"})
        payload = GrievanceSubmit(summary=summary, background=background)
        body = await api.post(f"{BASE}/grievance/submit", payload.model_dump(mode="json"))
        result = GrievanceSubmitted.model_validate(body)
        logger.info("Grievance submitted (%s)", result.case_reference)
        return result

    @staticmethod
    async def my_grievances(api: ApiClient) -> list[HRCase]:
        body = await api.get(f"{BASE}/grievance/my-grievances")
        return [HRCase.model_validate(g) for g in body.get("grievances", [])]

    @staticmethod
    async def my_pips(api: ApiClient) -> list[MyPip]:
        body = await api.get(f"{BASE}/pip/my-pips")
        return [MyPip.model_validate(p) for p in body.get("pips", [])]
