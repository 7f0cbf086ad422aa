"""Offboarding Pydantic v2 schemas — workflows, checklists, exit interviews, handovers."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from staffos.common.constants import TerminationType


class OffboardingCreate(BaseModel):
    employee_id: Optional[int] = None
    termination_type: TerminationType = TerminationType.resignation
    notice_date: Optional[date] = None
    last_working_day: Optional[date] = None
    reason: str = ""
    eligible_for_rehire: Optional[bool] = None
    reference_agreed: bool = True


class Workflow(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    employee_number: Optional[str] = None
    email: Optional[str] = None
    termination_type: str
    notice_date: Optional[date] = None
    last_working_day: Optional[date] = None
    reason: Optional[str] = None
    status: str = "pending"
    eligible_for_rehire: Optional[bool] = None
    reference_agreed: Optional[bool] = None
    total_items: int = 0
    completed_items: int = 0
    days_until: Optional[int] = None
    completed_at: Optional[datetime] = None


class WorkflowCreated(BaseModel):
    message: str = ""
    workflow: Workflow
    checklist_items_created: int = 0


class OffboardingStats(BaseModel):
    pending: int = 0
    in_progress: int = 0
    completed_this_month: int = 0
    leaving_this_week: int = 0


class ChecklistItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    item_name: str
    description: Optional[str] = None
    category: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None
    completed: bool = False
    completion_notes: Optional[str] = None


class ChecklistItemCreate(BaseModel):
    item_name: str = ""
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None


class ExitInterview(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    interviewer_id: Optional[int] = None
    interviewer_name: Optional[str] = None
    overall_experience: Optional[int] = Field(default=None, ge=1, le=5)
    would_recommend_employer: Optional[bool] = None
    would_consider_return: Optional[bool] = None
    reason_for_leaving: Optional[str] = None
    feedback_management: Optional[str] = None
    feedback_role: Optional[str] = None
    feedback_culture: Optional[str] = None
    feedback_improvements: Optional[str] = None
    additional_comments: Optional[str] = None
    hr_notes: Optional[str] = None
    completed: bool = False


class Handover(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    item_name: str
    item_type: str
    description: Optional[str] = None
    priority: str = "medium"
    status: str = "pending"
    handover_to: Optional[int] = None
    handover_to_name: Optional[str] = None
    notes: Optional[str] = None


class HandoverCreate(BaseModel):
    item_name: str = ""
    item_type: str = ""
    description: Optional[str] = None
    priority: str = "medium"
    handover_to: Optional[int] = None


class WorkflowDetail(BaseModel):
    """Everything the detail screen shows for one workflow."""

    workflow: Workflow
    checklist: List[ChecklistItem] = []
    exit_interview: Optional[ExitInterview] = None
    handovers: List[Handover] = []


class MyOffboardingTasks(BaseModel):
    checklist_items: List[Dict[str, Any]] = []
    handovers: List[Dict[str, Any]] = []


class DeadlineCheck(BaseModel):
    message: str = ""
    notifications_created: int = 0
    details: List[Dict[str, Any]] = []
