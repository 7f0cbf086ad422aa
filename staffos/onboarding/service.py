"""Onboarding service — candidate, reference, check and portal API calls."""

from __future__ import annotations

import logging
from typing import Optional

from staffos.client import ApiClient
from staffos.common.constants import CheckStatus, ReferenceStatus
from staffos.onboarding.schemas import (
    ArrivalResult,
    BackgroundCheck,
    BackgroundCheckCreate,
    Candidate,
    CandidateCreate,
    CandidateDetail,
    CandidateListResponse,
    CandidateUpdate,
    DayOneItemCreate,
    MyTasksResponse,
    PromotionResult,
    PromotionStatus,
    Reference,
    ReferenceCreate,
)

logger = logging.getLogger(__name__)

BASE = "/onboarding"

# Statuses that stamp a date on the record when set
REFERENCE_RECEIVED = {ReferenceStatus.received.value, ReferenceStatus.verified.value}
CHECK_FINISHED = {CheckStatus.cleared.value, CheckStatus.failed.value}


class OnboardingService:
    """Async onboarding operations."""

    # ── Candidates ──────────────────────────────────────────────────

    @staticmethod
    async def list_candidates(
        api: ApiClient,
        stage: Optional[str] = None,
    ) -> CandidateListResponse:
        """Return candidates (optionally one stage) with per-stage counts."""
        body = await api.get(f"{BASE}/candidates", params={"stage": stage})
        return CandidateListResponse.model_validate(body)

    @staticmethod
    async def get_candidate(api: ApiClient, candidate_id: int) -> CandidateDetail:
        body = await api.get(f"{BASE}/candidates/{candidate_id}")
        return CandidateDetail.model_validate(body)

    @staticmethod
    async def create_candidate(api: ApiClient, data: CandidateCreate) -> Candidate:
        body = await api.post(f"{BASE}/candidates", data.model_dump(mode="json"))
        candidate = Candidate.model_validate(body["candidate"])
        logger.info("Created candidate %s (%s)", candidate.id, candidate.full_name)
        return candidate

    @staticmethod
    async def update_candidate(
        api: ApiClient,
        candidate_id: int,
        data: CandidateUpdate,
    ) -> Candidate:
        body = await api.put(
            f"{BASE}/candidates/{candidate_id}",
            data.model_dump(mode="json", exclude_unset=True),
        )
        return Candidate.model_validate(body["candidate"])

    # ── References ──────────────────────────────────────────────────

    @staticmethod
    async def add_reference(
        api: ApiClient,
        candidate_id: int,
        data: ReferenceCreate,
    ) -> Reference:
        body = await api.post(
            f"{BASE}/candidates/{candidate_id}/references",
            data.model_dump(mode="json"),
        )
        return Reference.model_validate(body["reference"])

    @staticmethod
    async def update_reference_status(
        api: ApiClient,
        reference_id: int,
        status: str,
        notes: Optional[str] = None,
    ) -> Reference:
        """Set a reference status; received/verified also stamps today's date."""
        payload: dict = {"status": status}
        if status in REFERENCE_RECEIVED:
            payload["received_date"] = api.config.today().isoformat()
        if notes:
            payload["reference_notes"] = notes
        body = await api.put(f"{BASE}/references/{reference_id}", payload)
        return Reference.model_validate(body["reference"])

    # ── Background checks ───────────────────────────────────────────

    @staticmethod
    async def add_check(
        api: ApiClient,
        candidate_id: int,
        data: BackgroundCheckCreate,
    ) -> BackgroundCheck:
        body = await api.post(
            f"{BASE}/candidates/{candidate_id}/checks",
            data.model_dump(mode="json"),
        )
        return BackgroundCheck.model_validate(body["check"])

    @staticmethod
    async def update_check_status(
        api: ApiClient,
        check_id: int,
        status: str,
        certificate_number: Optional[str] = None,
    ) -> BackgroundCheck:
        """Set a check status; cleared/failed also stamps the completion date."""
        payload: dict = {"status": status}
        if status in CHECK_FINISHED:
            payload["completed_date"] = api.config.today().isoformat()
        if certificate_number:
            payload["certificate_number"] = certificate_number
        body = await api.put(f"{BASE}/checks/{check_id}", payload)
        return BackgroundCheck.model_validate(body["check"])

    # ── Promotion ───────────────────────────────────────────────────

    @staticmethod
    async def promotion_status(api: ApiClient, candidate_id: int) -> PromotionStatus:
        body = await api.get(f"{BASE}/candidates/{candidate_id}/promotion-status")
        return PromotionStatus.model_validate(body)

    @staticmethod
    async def promote(api: ApiClient, candidate_id: int) -> PromotionResult:
        body = await api.post(f"{BASE}/candidates/{candidate_id}/promote")
        result = PromotionResult.model_validate(body)
        logger.info("Candidate %s promoted to %s", candidate_id, result.new_stage)
        return result

    @staticmethod
    async def confirm_arrival(
        api: ApiClient,
        candidate_id: int,
        password: str,
    ) -> ArrivalResult:
        """Confirm a pre-colleague has arrived (the server re-checks the password)."""
        body = await api.post(
            f"{BASE}/candidates/{candidate_id}/confirm-arrival",
            {"password": password},
        )
        return ArrivalResult.model_validate(body)

    @staticmethod
    async def add_day_one_item(
        api: ApiClient,
        candidate_id: int,
        data: DayOneItemCreate,
    ) -> dict:
        body = await api.post(
            f"{BASE}/candidates/{candidate_id}/day-one",
            data.model_dump(mode="json"),
        )
        return body.get("item", {})

    # ── Pre-colleague portal ────────────────────────────────────────

    @staticmethod
    async def my_tasks(api: ApiClient) -> MyTasksResponse:
        body = await api.get(f"{BASE}/my-tasks")
        return MyTasksResponse.model_validate(body)

    @staticmethod
    async def complete_task(api: ApiClient, task_id: int) -> dict:
        body = await api.put(f"{BASE}/tasks/{task_id}/complete")
        return body.get("task", {})

    @staticmethod
    async def list_policies(api: ApiClient) -> list[dict]:
        body = await api.get(f"{BASE}/policies")
        return body.get("policies", [])

    @staticmethod
    async def acknowledge_policy(api: ApiClient, policy_id: int) -> dict:
        body = await api.post(f"{BASE}/policies/{policy_id}/acknowledge")
        return body.get("acknowledgment", {})
