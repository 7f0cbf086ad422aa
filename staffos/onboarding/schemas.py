"""Onboarding Pydantic v2 schemas — candidate lifecycle transport shapes."""

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# ═════════════════════════════════════════════════════════════════════
# Candidate
# ═════════════════════════════════════════════════════════════════════


class CandidateSummary(BaseModel):
    """Row on the onboarding dashboard."""

    model_config = ConfigDict(extra="allow")

    id: int
    full_name: str
    email: Optional[str] = None
    stage: str = "candidate"
    proposed_role_name: Optional[str] = None
    proposed_tier: Optional[int] = None
    proposed_start_date: Optional[date] = None
    actual_start_date: Optional[date] = None
    contract_signed: bool = False
    verified_refs: int = 0
    pending_required_checks: int = 0
    pending_required_tasks: int = 0

    @field_validator("verified_refs", "pending_required_checks", "pending_required_tasks", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int:
        # Postgres COUNT(*) arrives as a string
        return int(v or 0)


class StageCounts(BaseModel):
    candidate: int = 0
    pre_colleague: int = 0
    active: int = 0

    @field_validator("*", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int:
        return int(v or 0)


class CandidateListResponse(BaseModel):
    candidates: List[CandidateSummary] = []
    counts: StageCounts = Field(default_factory=StageCounts)


class CandidateCreate(BaseModel):
    """Fields accepted by POST /onboarding/candidates."""

    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    dob: Optional[date] = None
    proposed_start_date: Optional[date] = None
    proposed_role_id: Optional[int] = None
    proposed_tier: Optional[int] = None
    proposed_salary: Optional[float] = None
    proposed_hours: Optional[str] = "40"
    skills_experience: Optional[str] = None
    notes: Optional[str] = None
    contract_signed: bool = False
    contract_signed_date: Optional[date] = None


class CandidateUpdate(BaseModel):
    """Partial update — only fields that are set are sent."""

    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    dob: Optional[date] = None
    proposed_start_date: Optional[date] = None
    proposed_role_id: Optional[int] = None
    proposed_tier: Optional[int] = None
    proposed_salary: Optional[float] = None
    proposed_hours: Optional[str] = None
    skills_experience: Optional[str] = None
    notes: Optional[str] = None
    contract_signed: Optional[bool] = None
    contract_signed_date: Optional[date] = None


class Candidate(CandidateSummary):
    phone: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    dob: Optional[date] = None
    proposed_salary: Optional[float] = None
    proposed_hours: Optional[str] = None
    skills_experience: Optional[str] = None
    notes: Optional[str] = None
    contract_signed_date: Optional[date] = None
    arrival_confirmed: Optional[bool] = None


# ═════════════════════════════════════════════════════════════════════
# References & background checks
# ═════════════════════════════════════════════════════════════════════


class ReferenceCreate(BaseModel):
    reference_name: str = Field(..., min_length=1)
    reference_company: Optional[str] = None
    reference_email: Optional[str] = None
    reference_phone: Optional[str] = None
    relationship: Optional[str] = None


class Reference(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    reference_name: str
    reference_company: Optional[str] = None
    reference_email: Optional[str] = None
    relationship: Optional[str] = None
    status: str = "pending"
    received_date: Optional[date] = None
    reference_notes: Optional[str] = None


class BackgroundCheckCreate(BaseModel):
    check_type: str
    check_type_other: Optional[str] = None
    required: bool = True


class BackgroundCheck(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    check_type: str
    check_type_other: Optional[str] = None
    required: bool = True
    status: str = "pending"
    certificate_number: Optional[str] = None
    expiry_date: Optional[date] = None
    completed_date: Optional[date] = None


class CandidateDetail(BaseModel):
    """GET /onboarding/candidates/{id}."""

    candidate: Candidate
    references: List[Reference] = []
    background_checks: List[BackgroundCheck] = []
    onboarding_tasks: List[dict[str, Any]] = []
    policies: List[dict[str, Any]] = []
    day_one_items: List[dict[str, Any]] = []


# ═════════════════════════════════════════════════════════════════════
# Promotion / arrival
# ═════════════════════════════════════════════════════════════════════


class PromotionStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    current_stage: str
    next_stage: Optional[str] = None
    can_promote: bool = False
    requirements: List[dict[str, Any]] = []
    completed: List[str] = []
    missing: List[str] = []


class PromotionResult(BaseModel):
    message: str = ""
    new_stage: Optional[str] = None


class ArrivalResult(BaseModel):
    message: str = ""
    confirmed_at: Optional[datetime] = None
    activated: bool = False


class DayOneItemCreate(BaseModel):
    time_slot: str
    activity: str
    location: Optional[str] = None
    meeting_with: Optional[str] = None
    notes: Optional[str] = None


# ═════════════════════════════════════════════════════════════════════
# Pre-colleague portal
# ═════════════════════════════════════════════════════════════════════


class OnboardingProgress(BaseModel):
    tasks_completed: int = 0
    tasks_total: int = 0
    policies_acknowledged: int = 0
    policies_total: int = 0
    percentage: int = 0


class MyTasksResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    stage: Optional[str] = None
    start_date: Optional[date] = None
    days_until_start: Optional[int] = None
    tasks: List[dict[str, Any]] = []
    policies: List[dict[str, Any]] = []
    day_one_plan: List[dict[str, Any]] = []
    progress: OnboardingProgress = Field(default_factory=OnboardingProgress)
