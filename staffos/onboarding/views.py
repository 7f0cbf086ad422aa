"""Onboarding display logic — status indicators, labels and start-date countdown."""

from __future__ import annotations

from datetime import date
from typing import Iterable, NamedTuple, Optional, Sequence

from staffos.common.constants import OnboardingStage
from staffos.common.formatting import DateLike, parse_date
from staffos.onboarding.schemas import BackgroundCheck, CandidateSummary, Reference

STAGE_LABELS = {
    OnboardingStage.candidate.value: "Candidates",
    OnboardingStage.pre_colleague.value: "Pre-Colleagues",
    OnboardingStage.active.value: "Recent Starters",
}

CHECK_TYPE_LABELS = {
    "dbs_basic": "DBS Basic",
    "dbs_enhanced": "DBS Enhanced",
    "right_to_work": "Right to Work",
    "qualification_verify": "Qualification Verification",
    "other": "Other",
}

STATUS_COLOURS = {
    "pending": "gray",
    "not_started": "gray",
    "requested": "amber",
    "submitted": "amber",
    "received": "blue",
    "in_progress": "blue",
    "verified": "green",
    "cleared": "green",
    "completed": "green",
    "failed": "red",
}

REQUIRED_VERIFIED_REFERENCES = 2
URGENT_DAYS = 7


class Indicator(NamedTuple):
    colour: str
    text: str


class Countdown(NamedTuple):
    days: int
    text: str
    tone: str  # overdue | today | urgent | normal


class Readiness(NamedTuple):
    verified_references: int
    required_checks_cleared: int
    required_checks_total: int

    @property
    def references_text(self) -> str:
        return f"{self.verified_references}/{REQUIRED_VERIFIED_REFERENCES} verified"

    @property
    def checks_text(self) -> str:
        return f"{self.required_checks_cleared}/{self.required_checks_total} required cleared"


# ── Dashboard ───────────────────────────────────────────────────────

def filter_by_stage(
    candidates: Iterable[CandidateSummary],
    stage: Optional[str],
) -> list[CandidateSummary]:
    if not stage:
        return list(candidates)
    return [c for c in candidates if c.stage == stage]


def status_indicator(candidate: CandidateSummary) -> Indicator:
    """Traffic-light for a candidate row, based on its stage."""
    if candidate.stage == OnboardingStage.candidate.value:
        has_refs = candidate.verified_refs >= REQUIRED_VERIFIED_REFERENCES
        has_checks = candidate.pending_required_checks == 0
        if has_refs and has_checks and candidate.contract_signed:
            return Indicator("green", "Ready to promote")
        if has_refs or has_checks:
            return Indicator("amber", "In progress")
        return Indicator("red", "Pending")
    if candidate.stage == OnboardingStage.pre_colleague.value:
        if candidate.pending_required_tasks == 0:
            return Indicator("green", "Ready to activate")
        return Indicator("amber", "Onboarding")
    return Indicator("green", "Active")


# ── Profile ─────────────────────────────────────────────────────────

def check_type_label(check_type: str) -> str:
    return CHECK_TYPE_LABELS.get(check_type, check_type)


def status_colour(status: Optional[str]) -> str:
    return STATUS_COLOURS.get(status or "", "gray")


def readiness(
    references: Sequence[Reference],
    checks: Sequence[BackgroundCheck],
) -> Readiness:
    required = [c for c in checks if c.required]
    return Readiness(
        verified_references=sum(1 for r in references if r.status == "verified"),
        required_checks_cleared=sum(1 for c in required if c.status == "cleared"),
        required_checks_total=len(required),
    )


def days_until(target: DateLike, today: date) -> Optional[int]:
    """Whole days from ``today`` to ``target`` (negative when past)."""
    parsed = parse_date(target)
    if parsed is None:
        return None
    return (parsed - today).days


def start_countdown(start_date: DateLike, today: date) -> Optional[Countdown]:
    days = days_until(start_date, today)
    if days is None:
        return None
    if days < 0:
        return Countdown(days, f"{abs(days)} days overdue", "overdue")
    if days == 0:
        return Countdown(days, "TODAY", "today")
    if days <= URGENT_DAYS:
        suffix = "s" if days > 1 else ""
        return Countdown(days, f"{days} day{suffix} away", "urgent")
    return Countdown(days, f"{days} days away", "normal")


def start_date_label(stage: str) -> str:
    return "Proposed Start Date" if stage == OnboardingStage.candidate.value else "Start Date"
