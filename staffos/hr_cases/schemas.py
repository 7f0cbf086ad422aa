"""HR case Pydantic v2 schemas — PIP, disciplinary and grievance cases."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from staffos.common.constants import CaseType


# ═════════════════════════════════════════════════════════════════════
# Case
# ═════════════════════════════════════════════════════════════════════


class HRCaseCreate(BaseModel):
    employee_id: Optional[int] = None
    case_type: Optional[CaseType] = None
    summary: str = ""
    background: Optional[str] = None
    target_close_date: Optional[date] = None
    case_owner_id: Optional[int] = None


class HRCaseUpdate(BaseModel):
    summary: Optional[str] = None
    background: Optional[str] = None
    target_close_date: Optional[date] = None
    case_owner_id: Optional[int] = None
    confidential: Optional[bool] = None
    legal_hold: Optional[bool] = None


class PipProgress(BaseModel):
    total: int = 0
    met: int = 0
    on_track: int = 0
    on_track_percentage: int = 0


class HRCase(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    case_reference: Optional[str] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    manager_id: Optional[int] = None
    case_owner_id: Optional[int] = None
    case_type: str
    status: str = "draft"
    summary: Optional[str] = None
    background: Optional[str] = None
    opened_date: Optional[date] = None
    target_close_date: Optional[date] = None
    closed_date: Optional[date] = None
    confidential: bool = False
    legal_hold: bool = False
    pip_outcome: Optional[str] = None
    disciplinary_outcome: Optional[str] = None
    grievance_outcome: Optional[str] = None
    outcome_notes: Optional[str] = None
    appeal_requested: bool = False
    appeal_reason: Optional[str] = None
    guidance: Optional[Dict[str, str]] = None
    employee_view: bool = False
    pip_progress: Optional[PipProgress] = None
    notes_count: Optional[int] = None
    milestones_count: Optional[int] = None
    witnesses_count: Optional[int] = None
    created_at: Optional[datetime] = None


class CaseStats(BaseModel):
    active_cases: int = 0
    active_pips: int = 0
    active_disciplinary: int = 0
    active_grievances: int = 0
    draft_cases: int = 0
    closed_this_month: int = 0
    pending_appeals: int = 0


class CaseClose(BaseModel):
    outcome: str
    outcome_notes: Optional[str] = None


class CaseAppeal(BaseModel):
    appeal_reason: str
    appeal_heard_by: Optional[int] = None


class Guidance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    guidance: str
    case_type: str = Field(alias="caseType")
    stage: str


# ═════════════════════════════════════════════════════════════════════
# Objectives / milestones / meetings / notes / witnesses
# ═════════════════════════════════════════════════════════════════════


class ObjectiveCreate(BaseModel):
    objective: str = ""
    success_criteria: str = ""
    support_provided: Optional[str] = None
    target_date: Optional[date] = None


class ObjectiveUpdate(BaseModel):
    status: Optional[str] = None
    review_notes: Optional[str] = None
    objective: Optional[str] = None
    success_criteria: Optional[str] = None
    support_provided: Optional[str] = None
    target_date: Optional[date] = None


class Objective(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    case_id: Optional[int] = None
    objective: str
    success_criteria: Optional[str] = None
    support_provided: Optional[str] = None
    target_date: Optional[date] = None
    status: str = "pending"
    review_notes: Optional[str] = None


class MilestoneCreate(BaseModel):
    milestone_type: str = ""
    milestone_date: Optional[date] = None
    description: Optional[str] = None


class Milestone(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    milestone_type: str
    milestone_date: Optional[date] = None
    description: Optional[str] = None
    completed: bool = False


class MeetingCreate(BaseModel):
    meeting_type: str = ""
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    location: Optional[str] = None
    attendees: List[Any] = []
    companion_name: Optional[str] = None
    companion_type: Optional[str] = None


class MeetingOutcome(BaseModel):
    held: bool = True
    held_date: Optional[date] = None
    minutes: Optional[str] = None
    outcome_summary: Optional[str] = None
    adjourned: Optional[bool] = None
    adjourn_reason: Optional[str] = None


class Meeting(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    meeting_type: str
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    location: Optional[str] = None
    companion_name: Optional[str] = None
    companion_type: Optional[str] = None
    held: bool = False
    held_date: Optional[date] = None
    outcome_summary: Optional[str] = None


class CaseNoteCreate(BaseModel):
    note_type: str = "general"
    content: str = ""
    visible_to_employee: bool = False


class CaseNote(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    note_type: str = "general"
    content: str
    visible_to_employee: bool = False
    created_by_name: Optional[str] = None
    created_at: Optional[datetime] = None


class WitnessCreate(BaseModel):
    witness_name: str = ""
    witness_id: Optional[int] = None
    relationship: Optional[str] = None
    statement: Optional[str] = None
    statement_date: Optional[date] = None


class Witness(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    witness_name: str
    relationship: Optional[str] = None
    statement: Optional[str] = None
    statement_date: Optional[date] = None


# ═════════════════════════════════════════════════════════════════════
# Employee self-service
# ═════════════════════════════════════════════════════════════════════


class GrievanceSubmit(BaseModel):
    summary: str = ""
    background: Optional[str] = None


class GrievanceSubmitted(BaseModel):
    message: str = ""
    case_reference: Optional[str] = None


class MyPip(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    case_reference: Optional[str] = None
    status: str = "open"
    pip_outcome: Optional[str] = None
    total_objectives: int = 0
    objectives_met: int = 0
    objectives_on_track: int = 0
    target_close_date: Optional[date] = None
