"""Offboarding service — leaver workflows, checklists, exit interviews, handovers."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Optional

from staffos.client import ApiClient
from staffos.common.constants import DEFAULT_LIST_LIMIT
from staffos.common.exceptions import AppException, ValidationException, require_fields
from staffos.offboarding.schemas import (
    ChecklistItem,
    ChecklistItemCreate,
    DeadlineCheck,
    ExitInterview,
    Handover,
    HandoverCreate,
    MyOffboardingTasks,
    OffboardingCreate,
    OffboardingStats,
    Workflow,
    WorkflowCreated,
    WorkflowDetail,
)
from staffos.offboarding.views import WORKFLOW_TABS, allowed_transitions

logger = logging.getLogger(__name__)

BASE = "/offboarding"


class OffboardingService:
    """Async offboarding operations."""

    # ── Workflows ───────────────────────────────────────────────────

    @staticmethod
    async def list_workflows(
        api: ApiClient,
        tab: str = "active",
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Workflow]:
        if tab not in WORKFLOW_TABS:
            raise ValidationException({"tab": [f"Unknown offboarding tab '{tab}'"]})
        body = await api.get(BASE, params={"limit": limit, "status": WORKFLOW_TABS[tab]})
        return [Workflow.model_validate(w) for w in body.get("workflows", [])]

    @staticmethod
    async def stats(api: ApiClient) -> OffboardingStats:
        body = await api.get(f"{BASE}/stats")
        return OffboardingStats.model_validate(body)

    @staticmethod
    async def upcoming(api: ApiClient, days: int = 30) -> list[Workflow]:
        """Active workflows whose last working day falls in the next ``days`` days."""
        body = await api.get(f"{BASE}/upcoming", params={"days": days})
        return [Workflow.model_validate(w) for w in body.get("upcoming", [])]

    @staticmethod
    async def initiate(api: ApiClient, data: OffboardingCreate) -> WorkflowCreated:
        if data.notice_date is None:
            data = data.model_copy(update={"notice_date": api.config.today()})
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "employee_id": "Please select an employee",
            "last_working_day": "Please specify the last working day",
        })
        body = await api.post(BASE, payload)
        created = WorkflowCreated.model_validate(body)
        logger.info(
            "Offboarding initiated for employee %s (%d checklist items)",
            data.employee_id, created.checklist_items_created,
        )
        return created

    @staticmethod
    async def get_workflow(api: ApiClient, workflow_id: int) -> Workflow:
        body = await api.get(f"{BASE}/{workflow_id}")
        return Workflow.model_validate(body["workflow"])

    @staticmethod
    async def detail(api: ApiClient, workflow_id: int) -> WorkflowDetail:
        """Workflow, checklist, exit interview and handovers fetched together.

        A missing exit interview is normal (not yet scheduled) and comes
        back as None rather than an error.
        """

        async def _exit_interview() -> Optional[ExitInterview]:
            try:
                return await OffboardingService.get_exit_interview(api, workflow_id)
            except AppException as exc:
                logger.debug("No exit interview for workflow %s: %s", workflow_id, exc.detail)
                return None

        workflow, checklist, interview, handovers = await asyncio.gather(
            OffboardingService.get_workflow(api, workflow_id),
            OffboardingService.checklist(api, workflow_id),
            _exit_interview(),
            OffboardingService.handovers(api, workflow_id),
        )
        return WorkflowDetail(
            workflow=workflow,
            checklist=checklist,
            exit_interview=interview,
            handovers=handovers,
        )

    @staticmethod
    async def update_status(
        api: ApiClient,
        workflow_id: int,
        current_status: str,
        new_status: str,
    ) -> Workflow:
        allowed = {t.status for t in allowed_transitions(current_status)}
        if new_status not in allowed:
            raise ValidationException(
                {"status": [f"Cannot move a {current_status} workflow to {new_status}"]}
            )
        body = await api.put(f"{BASE}/{workflow_id}", {"status": new_status})
        logger.info("Offboarding %s: %s -> %s", workflow_id, current_status, new_status)
        return Workflow.model_validate(body["workflow"])

    @staticmethod
    async def complete(api: ApiClient, workflow_id: int) -> Workflow:
        """Finish the workflow; the server refuses while checklist items are open."""
        body = await api.post(f"{BASE}/{workflow_id}/complete")
        return Workflow.model_validate(body["workflow"])

    @staticmethod
    async def cancel(api: ApiClient, workflow_id: int) -> dict:
        return await api.delete(f"{BASE}/{workflow_id}")

    # ── Checklist ───────────────────────────────────────────────────

    @staticmethod
    async def checklist(api: ApiClient, workflow_id: int) -> list[ChecklistItem]:
        body = await api.get(f"{BASE}/{workflow_id}/checklist")
        return [ChecklistItem.model_validate(i) for i in body.get("checklist", [])]

    @staticmethod
    async def toggle_item(
        api: ApiClient,
        workflow_id: int,
        item_id: int,
        completed: bool,
    ) -> ChecklistItem:
        """Flip an item's completed flag (``completed`` is its current state)."""
        body = await api.put(
            f"{BASE}/{workflow_id}/checklist/{item_id}",
            {"completed": not completed},
        )
        return ChecklistItem.model_validate(body["item"])

    @staticmethod
    async def add_item(
        api: ApiClient,
        workflow_id: int,
        data: ChecklistItemCreate,
    ) -> ChecklistItem:
        payload = data.model_dump(mode="json")
        require_fields(payload, {"item_name": "Item name required"})
        body = await api.post(f"{BASE}/{workflow_id}/checklist", payload)
        return ChecklistItem.model_validate(body["item"])

    # ── Exit interview ──────────────────────────────────────────────

    @staticmethod
    async def get_exit_interview(api: ApiClient, workflow_id: int) -> ExitInterview:
        body = await api.get(f"{BASE}/{workflow_id}/exit-interview")
        return ExitInterview.model_validate(body["exit_interview"])

    @staticmethod
    async def schedule_exit_interview(
        api: ApiClient,
        workflow_id: int,
        scheduled_date: date,
        existing: Optional[ExitInterview] = None,
    ) -> dict[str, Any]:
        """Create the interview, or move it when one is already on file."""
        payload = {"scheduled_date": scheduled_date.isoformat()}
        endpoint = f"{BASE}/{workflow_id}/exit-interview"
        if existing is not None:
            return await api.put(endpoint, payload)
        return await api.post(endpoint, payload)

    @staticmethod
    async def record_exit_interview(
        api: ApiClient,
        workflow_id: int,
        data: ExitInterview,
    ) -> ExitInterview:
        body = await api.put(
            f"{BASE}/{workflow_id}/exit-interview",
            data.model_dump(mode="json", exclude_unset=True, exclude={"id"}),
        )
        return ExitInterview.model_validate(body["exit_interview"])

    # ── Handovers ───────────────────────────────────────────────────

    @staticmethod
    async def handovers(api: ApiClient, workflow_id: int) -> list[Handover]:
        body = await api.get(f"{BASE}/{workflow_id}/handovers")
        return [Handover.model_validate(h) for h in body.get("handovers", [])]

    @staticmethod
    async def add_handover(api: ApiClient, workflow_id: int, data: HandoverCreate) -> Handover:
        payload = data.model_dump(mode="json")
        require_fields(payload, {
            "item_name": "Item name and type required",
            "item_type": "Item name and type required",
        })
        body = await api.post(f"{BASE}/{workflow_id}/handovers", payload)
        return Handover.model_validate(body["handover"])

    @staticmethod
    async def update_handover(
        api: ApiClient,
        workflow_id: int,
        item_id: int,
        status: Optional[str] = None,
        notes: Optional[str] = None,
        handover_to: Optional[int] = None,
    ) -> Handover:
        payload = {"status": status, "notes": notes, "handover_to": handover_to}
        body = await api.put(
            f"{BASE}/{workflow_id}/handovers/{item_id}",
            {k: v for k, v in payload.items() if v is not None},
        )
        return Handover.model_validate(body["handover"])

    # ── Self-service / scheduled ────────────────────────────────────

    @staticmethod
    async def my_tasks(api: ApiClient) -> MyOffboardingTasks:
        body = await api.get(f"{BASE}/my-tasks/pending")
        return MyOffboardingTasks.model_validate(body)

    @staticmethod
    async def check_deadlines(api: ApiClient) -> DeadlineCheck:
        body = await api.post(f"{BASE}/check-deadlines")
        result = DeadlineCheck.model_validate(body)
        logger.info("%s; %d notification(s) created", result.message, result.notifications_created)
        return result
