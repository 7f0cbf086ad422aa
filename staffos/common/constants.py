"""Enums and constants for StaffOS — matching the API's string values."""

from __future__ import annotations

import enum

DEFAULT_LIST_LIMIT = 100
DEFAULT_AUDIT_PAGE_SIZE = 50
CURRENCY_SYMBOL = "£"
EMPTY_DATE = "-"
EMPTY_MONEY = "—"


# ── Onboarding ──────────────────────────────────────────────────────

class OnboardingStage(str, enum.Enum):
    candidate = "candidate"
    pre_colleague = "pre_colleague"
    active = "active"


class CheckType(str, enum.Enum):
    dbs_basic = "dbs_basic"
    dbs_enhanced = "dbs_enhanced"
    right_to_work = "right_to_work"
    qualification_verify = "qualification_verify"
    other = "other"


class ReferenceStatus(str, enum.Enum):
    pending = "pending"
    requested = "requested"
    received = "received"
    verified = "verified"
    failed = "failed"


class CheckStatus(str, enum.Enum):
    pending = "pending"
    submitted = "submitted"
    in_progress = "in_progress"
    cleared = "cleared"
    failed = "failed"


# ── Recruitment pipeline ────────────────────────────────────────────

class PipelineStage(str, enum.Enum):
    application = "application"
    shortlisted = "shortlisted"
    interview_requested = "interview_requested"
    interview_scheduled = "interview_scheduled"
    interview_complete = "interview_complete"
    further_assessment = "further_assessment"
    final_shortlist = "final_shortlist"
    offer_made = "offer_made"
    offer_accepted = "offer_accepted"
    offer_declined = "offer_declined"
    rejected = "rejected"
    withdrawn = "withdrawn"


class InterviewStatus(str, enum.Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no_show"


# ── Absence ─────────────────────────────────────────────────────────

class AbsenceCategory(str, enum.Enum):
    annual = "annual"
    sick = "sick"
    maternity = "maternity"
    paternity = "paternity"
    adoption = "adoption"
    bereavement = "bereavement"
    jury_duty = "jury_duty"
    compassionate = "compassionate"
    toil = "toil"
    unpaid = "unpaid"


class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"


class PatternType(str, enum.Enum):
    frequency = "frequency"
    monday_friday = "monday_friday"
    post_holiday = "post_holiday"
    duration_trend = "duration_trend"
    short_notice = "short_notice"
    recurring_reason = "recurring_reason"
    seasonal = "seasonal"


class InsightStatus(str, enum.Enum):
    new = "new"
    pending_review = "pending_review"
    reviewed = "reviewed"
    action_taken = "action_taken"
    dismissed = "dismissed"


class Priority(str, enum.Enum):
    high = "high"
    medium = "medium"
    low = "low"


# ── HR cases ────────────────────────────────────────────────────────

class CaseType(str, enum.Enum):
    pip = "pip"
    disciplinary = "disciplinary"
    grievance = "grievance"


class CaseStatus(str, enum.Enum):
    draft = "draft"
    open = "open"
    investigation = "investigation"
    hearing_scheduled = "hearing_scheduled"
    awaiting_decision = "awaiting_decision"
    appeal = "appeal"
    closed = "closed"


class ObjectiveStatus(str, enum.Enum):
    pending = "pending"
    on_track = "on_track"
    at_risk = "at_risk"
    met = "met"
    not_met = "not_met"


# ── Offboarding ─────────────────────────────────────────────────────

class WorkflowStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class TerminationType(str, enum.Enum):
    resignation = "resignation"
    termination = "termination"
    redundancy = "redundancy"
    retirement = "retirement"
    end_of_contract = "end_of_contract"
    tupe_transfer = "tupe_transfer"
    death_in_service = "death_in_service"


# ── Compensation ────────────────────────────────────────────────────

class ReviewStatus(str, enum.Enum):
    draft = "draft"
    submitted = "submitted"
    hr_review = "hr_review"
    approved = "approved"
    rejected = "rejected"
    applied = "applied"


class CycleStatus(str, enum.Enum):
    planning = "planning"
    open = "open"
    in_review = "in_review"
    complete = "complete"


HR_ROLES = frozenset({"Admin", "HR", "Finance"})


# ── Notifications ───────────────────────────────────────────────────

class NotificationCategory(str, enum.Enum):
    performance = "performance"
    leave = "leave"
    team = "team"
    other = "other"
