"""Absence service — sickness reporting, return-to-work queues and absence insights."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from staffos.absence.schemas import (
    DetectionResult,
    EmployeeInsights,
    Insight,
    InsightAction,
    InsightDashboard,
    InsightListResponse,
    LeaveRequest,
    SickLeaveReport,
    SickLeaveReported,
)
from staffos.absence.views import INSIGHT_TABS, filter_pending, non_annual
from staffos.client import ApiClient
from staffos.common.constants import DEFAULT_LIST_LIMIT
from staffos.common.exceptions import ValidationException

logger = logging.getLogger(__name__)

INSIGHTS = "/absence-insights"
DEFAULT_DISMISS_REASON = "Not concerning"


# ═════════════════════════════════════════════════════════════════════
# LeaveService
# ═════════════════════════════════════════════════════════════════════


class LeaveService:
    """Non-annual absence views and sickness reporting."""

    @staticmethod
    async def my_absences(api: ApiClient) -> list[LeaveRequest]:
        body = await api.get("/leave/my-requests")
        rows = [LeaveRequest.model_validate(r) for r in body.get("leave_requests", [])]
        return non_annual(rows)

    @staticmethod
    async def team_absences(api: ApiClient) -> list[LeaveRequest]:
        body = await api.get("/leave/team")
        rows = [LeaveRequest.model_validate(r) for r in body.get("leave_requests", [])]
        return non_annual(rows)

    @staticmethod
    async def pending_rtw(api: ApiClient) -> list[dict[str, Any]]:
        """Return-to-work interviews still to be held."""
        body = await api.get("/sick-leave/rtw/pending")
        return body.get("pending_rtw", [])

    @staticmethod
    async def rtw_follow_ups(api: ApiClient) -> list[dict[str, Any]]:
        body = await api.get("/sick-leave/rtw/follow-ups")
        return body.get("pending_follow_ups", [])

    @staticmethod
    async def report_sick(
        api: ApiClient,
        sick_reason: str = "illness",
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        notes: str = "",
        is_ongoing: bool = True,
    ) -> SickLeaveReported:
        """Report sickness starting ``start_date`` (today by default)."""
        report = SickLeaveReport(
            start_date=start_date or api.config.today(),
            end_date=end_date,
            sick_reason=sick_reason,
            sick_notes=notes,
            is_ongoing=is_ongoing,
        )
        body = await api.post("/sick-leave/report", report.model_dump(mode="json"))
        result = SickLeaveReported.model_validate(body)
        if result.fit_note_required:
            logger.info("Sickness reported; fit note required: %s", result.fit_note_message)
        return result


# ═════════════════════════════════════════════════════════════════════
# InsightsService
# ═════════════════════════════════════════════════════════════════════


class InsightsService:
    """Absence pattern insights for HR wellbeing review."""

    @staticmethod
    async def list_insights(
        api: ApiClient,
        tab: str = "pending",
        pattern_type: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> InsightListResponse:
        """Insights for a dashboard tab.

        The API takes a single status, so the pending tab (new plus
        pending_review) fetches everything and filters here.
        """
        if tab not in INSIGHT_TABS:
            raise ValidationException({"tab": [f"Unknown insight tab '{tab}'"]})
        params = {"limit": limit, "status": INSIGHT_TABS[tab], "pattern_type": pattern_type}
        body = await api.get(INSIGHTS, params=params)
        result = InsightListResponse.model_validate(body)
        if tab == "pending":
            result.insights = filter_pending(result.insights)
        return result

    @staticmethod
    async def dashboard(api: ApiClient) -> InsightDashboard:
        body = await api.get(f"{INSIGHTS}/dashboard")
        return InsightDashboard.model_validate(body)

    @staticmethod
    async def get_insight(api: ApiClient, insight_id: int) -> Insight:
        body = await api.get(f"{INSIGHTS}/{insight_id}")
        return Insight.model_validate(body["insight"])

    @staticmethod
    async def review(api: ApiClient, insight_id: int, notes: str = "") -> Insight:
        body = await api.put(f"{INSIGHTS}/{insight_id}/review", {"notes": notes})
        return Insight.model_validate(body["insight"])

    @staticmethod
    async def record_action(
        api: ApiClient,
        insight_id: int,
        action_taken: str,
        follow_up_date: Optional[date] = None,
    ) -> Insight:
        if not action_taken or not action_taken.strip():
            raise ValidationException({"action_taken": ["Please describe the action taken"]})
        payload = InsightAction(action_taken=action_taken, follow_up_date=follow_up_date)
        body = await api.put(f"{INSIGHTS}/{insight_id}/action", payload.model_dump(mode="json"))
        logger.info("Recorded action on insight %s", insight_id)
        return Insight.model_validate(body["insight"])

    @staticmethod
    async def dismiss(api: ApiClient, insight_id: int, notes: str = "") -> Insight:
        body = await api.put(
            f"{INSIGHTS}/{insight_id}/dismiss",
            {"reason": notes or DEFAULT_DISMISS_REASON},
        )
        return Insight.model_validate(body["insight"])

    @staticmethod
    async def for_employee(api: ApiClient, employee_id: int) -> EmployeeInsights:
        body = await api.get(f"{INSIGHTS}/employee/{employee_id}")
        return EmployeeInsights.model_validate(body)

    @staticmethod
    async def run_detection(api: ApiClient, employee_id: int) -> DetectionResult:
        """Ask the server to re-run pattern detection for one employee."""
        body = await api.post(f"{INSIGHTS}/run-detection/{employee_id}")
        result = DetectionResult.model_validate(body)
        logger.info("Detection for employee %s: %d insight(s)", employee_id, len(result.insights))
        return result

    @staticmethod
    async def pending_follow_ups(api: ApiClient) -> list[Insight]:
        body = await api.get(f"{INSIGHTS}/follow-ups/pending")
        return [Insight.model_validate(f) for f in body.get("follow_ups", [])]
