"""Recruitment pipeline Pydantic v2 schemas."""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PipelineCandidate(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    full_name: str
    email: Optional[str] = None
    recruitment_stage: str = "application"
    recruitment_stage_updated_at: Optional[datetime] = None
    recruitment_request_id: Optional[int] = None
    role_title: Optional[str] = None


class PipelineOverview(BaseModel):
    """GET /pipeline — counts and candidates grouped by stage."""

    counts: Dict[str, int] = {}
    pipeline: Dict[str, List[PipelineCandidate]] = {}
    stages: List[str] = []


class StageChange(BaseModel):
    new_stage: str
    reason: Optional[str] = None


class StageChangeResult(BaseModel):
    message: str = ""
    previous_stage: Optional[str] = None
    new_stage: str


class StageHistoryEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    from_stage: Optional[str] = None
    to_stage: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


# ═════════════════════════════════════════════════════════════════════
# Interviews
# ═════════════════════════════════════════════════════════════════════


class InterviewCreate(BaseModel):
    interview_type: str = Field(..., min_length=1)
    scheduled_date: date
    scheduled_time: str = Field(..., min_length=1)
    duration_minutes: int = 60
    location: Optional[str] = None
    interviewer_ids: List[int] = []


class InterviewScore(BaseModel):
    """Scorecard submitted after an interview (score 1-10)."""

    status: str = "completed"
    score: int = Field(5, ge=1, le=10)
    notes: str = ""
    recommend_next_stage: bool = True


class Interview(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    candidate_id: Optional[int] = None
    interview_type: Optional[str] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    status: str = "scheduled"
    score: Optional[int] = None
    notes: Optional[str] = None
    recommend_next_stage: Optional[bool] = None


# ═════════════════════════════════════════════════════════════════════
# Notes & offers
# ═════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1)
    note_type: str = "general"
    is_private: bool = False


class CandidateNote(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    content: str
    note_type: str = "general"
    is_private: bool = False
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None


class OfferDetails(BaseModel):
    offer_salary: float
    offer_start_date: date
    offer_expiry_date: Optional[date] = None


class OfferAccepted(BaseModel):
    message: str = ""
    user_id: Optional[int] = None
