"""Recruitment pipeline service — stage moves, interviews, notes, offers."""

from __future__ import annotations

import logging
from typing import Any, Optional

from staffos.client import ApiClient
from staffos.recruitment.schemas import (
    CandidateNote,
    Interview,
    InterviewCreate,
    InterviewScore,
    NoteCreate,
    OfferAccepted,
    OfferDetails,
    PipelineOverview,
    StageChange,
    StageChangeResult,
    StageHistoryEntry,
)
from staffos.recruitment.stages import action_request

logger = logging.getLogger(__name__)

BASE = "/pipeline"


class PipelineService:
    """Async recruitment pipeline operations."""

    @staticmethod
    async def overview(
        api: ApiClient,
        recruitment_request_id: Optional[int] = None,
    ) -> PipelineOverview:
        body = await api.get(f"{BASE}/", params={"recruitment_request_id": recruitment_request_id})
        return PipelineOverview.model_validate(body)

    @staticmethod
    async def move_stage(
        api: ApiClient,
        candidate_id: int,
        change: StageChange,
    ) -> StageChangeResult:
        body = await api.put(
            f"{BASE}/candidates/{candidate_id}/stage",
            change.model_dump(mode="json", exclude_none=True),
        )
        return StageChangeResult.model_validate(body)

    @staticmethod
    async def history(api: ApiClient, candidate_id: int) -> list[StageHistoryEntry]:
        body = await api.get(f"{BASE}/candidates/{candidate_id}/history")
        return [StageHistoryEntry.model_validate(h) for h in body.get("history", [])]

    @staticmethod
    async def perform_action(
        api: ApiClient,
        candidate_id: int,
        action_id: str,
        reason: Optional[str] = None,
    ) -> Any:
        """Run a pipeline button; raises ``ValidationException`` before any call
        when a required reason is missing."""
        req = action_request(action_id, candidate_id, reason)
        logger.info("Pipeline action %s on candidate %s", action_id, candidate_id)
        return await api.request(req.method, req.path, req.body)

    # ── Interviews ──────────────────────────────────────────────────

    @staticmethod
    async def schedule_interview(
        api: ApiClient,
        candidate_id: int,
        data: InterviewCreate,
    ) -> Interview:
        body = await api.post(
            f"{BASE}/candidates/{candidate_id}/interviews",
            data.model_dump(mode="json", exclude_none=True),
        )
        return Interview.model_validate(body["interview"])

    @staticmethod
    async def list_interviews(api: ApiClient, candidate_id: int) -> list[Interview]:
        body = await api.get(f"{BASE}/candidates/{candidate_id}/interviews")
        return [Interview.model_validate(i) for i in body.get("interviews", [])]

    @staticmethod
    async def score_interview(
        api: ApiClient,
        interview_id: int,
        scorecard: InterviewScore,
    ) -> Interview:
        body = await api.put(f"{BASE}/interviews/{interview_id}", scorecard.model_dump(mode="json"))
        return Interview.model_validate(body["interview"])

    # ── Notes ───────────────────────────────────────────────────────

    @staticmethod
    async def add_note(api: ApiClient, candidate_id: int, data: NoteCreate) -> CandidateNote:
        body = await api.post(f"{BASE}/candidates/{candidate_id}/notes", data.model_dump(mode="json"))
        return CandidateNote.model_validate(body["note"])

    @staticmethod
    async def list_notes(api: ApiClient, candidate_id: int) -> list[CandidateNote]:
        body = await api.get(f"{BASE}/candidates/{candidate_id}/notes")
        return [CandidateNote.model_validate(n) for n in body.get("notes", [])]

    # ── Offers ──────────────────────────────────────────────────────

    @staticmethod
    async def make_offer(api: ApiClient, candidate_id: int, offer: OfferDetails) -> dict:
        body = await api.put(
            f"{BASE}/candidates/{candidate_id}/offer",
            offer.model_dump(mode="json", exclude_none=True),
        )
        return body.get("candidate", {})

    @staticmethod
    async def accept_offer(api: ApiClient, candidate_id: int) -> OfferAccepted:
        body = await api.post(f"{BASE}/candidates/{candidate_id}/accept-offer")
        return OfferAccepted.model_validate(body)

    @staticmethod
    async def decline_offer(api: ApiClient, candidate_id: int, reason: str) -> dict:
        return await PipelineService.perform_action(api, candidate_id, "decline_offer", reason)
