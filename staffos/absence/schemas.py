"""Absence Pydantic v2 schemas — leave requests, sick reports, absence insights."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ═════════════════════════════════════════════════════════════════════
# Leave / sickness
# ═════════════════════════════════════════════════════════════════════


class LeaveRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    absence_category: Optional[str] = None
    leave_start_date: Optional[date] = None
    leave_end_date: Optional[date] = None
    total_days: Optional[float] = None
    status: str = "pending"
    sick_reason: Optional[str] = None
    notice_days: Optional[int] = None


class SickLeaveReport(BaseModel):
    """POST /sick-leave/report — ongoing sickness leaves ``end_date`` empty."""

    start_date: date
    end_date: Optional[date] = None
    sick_reason: str = "illness"
    sick_notes: str = ""
    is_ongoing: bool = True

    @model_validator(mode="after")
    def _end_date_for_closed_spells(self) -> "SickLeaveReport":
        if self.is_ongoing:
            self.end_date = None
        elif self.end_date is None:
            raise ValueError("End date is required unless ongoing")
        elif self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class SickLeaveReported(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str = ""
    leave_request: Optional[LeaveRequest] = None
    fit_note_required: bool = False
    fit_note_message: Optional[str] = None


# ═════════════════════════════════════════════════════════════════════
# Absence insights
# ═════════════════════════════════════════════════════════════════════


class Insight(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    employee_number: Optional[str] = None
    pattern_type: str
    priority: str = "medium"
    status: str = "new"
    summary: Optional[str] = None
    pattern_data: Optional[Dict[str, Any]] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    detection_date: Optional[date] = None
    review_notes: Optional[str] = None
    action_taken: Optional[str] = None
    follow_up_date: Optional[date] = None
    created_at: Optional[datetime] = None


class InsightListResponse(BaseModel):
    insights: List[Insight] = []
    counts: Dict[str, int] = {}
    pagination: Dict[str, int] = {}


class InsightOverview(BaseModel):
    pending_count: int = 0
    new_count: int = 0
    high_priority_count: int = 0
    recent_count: int = 0


class PatternCount(BaseModel):
    pattern_type: str
    count: int = 0


class BradfordScore(BaseModel):
    model_config = ConfigDict(extra="allow")

    employee_id: int
    employee_name: Optional[str] = None
    bradford_factor: int = 0
    total_absences_12m: int = 0
    total_sick_days_12m: int = 0


class InsightDashboard(BaseModel):
    overview: InsightOverview = Field(default_factory=InsightOverview)
    pattern_breakdown: List[PatternCount] = []
    high_priority_insights: List[Insight] = []
    top_bradford_scores: List[BradfordScore] = []


class InsightAction(BaseModel):
    action_taken: str
    follow_up_date: Optional[date] = None


class EmployeeInsights(BaseModel):
    insights: List[Insight] = []
    summary: Optional[Dict[str, Any]] = None


class DetectionResult(BaseModel):
    message: str = ""
    insights: List[Dict[str, Any]] = []
