"""Notification service — list, unread count, mark read, dismiss."""

from __future__ import annotations

import logging

from staffos.client import ApiClient
from staffos.notifications.schemas import Notification, NotificationList, ReadAllResult
from staffos.notifications.views import INBOX_LIMIT

logger = logging.getLogger(__name__)

BASE = "/notifications"


class NotificationService:
    """Async notification operations for the signed-in user."""

    @staticmethod
    async def list_notifications(
        api: ApiClient,
        limit: int = INBOX_LIMIT,
        offset: int = 0,
        unread_only: bool = False,
    ) -> NotificationList:
        body = await api.get(BASE, params={
            "limit": limit,
            "offset": offset or None,
            "unread_only": unread_only or None,
        })
        return NotificationList.model_validate(body)

    @staticmethod
    async def unread_count(api: ApiClient) -> int:
        body = await api.get(f"{BASE}/unread-count")
        return int(body.get("unread_count", 0))

    @staticmethod
    async def mark_read(api: ApiClient, notification_id: int) -> Notification:
        body = await api.put(f"{BASE}/{notification_id}/read")
        return Notification.model_validate(body["notification"])

    @staticmethod
    async def mark_all_read(api: ApiClient) -> ReadAllResult:
        body = await api.put(f"{BASE}/read-all")
        result = ReadAllResult.model_validate(body)
        logger.info("Marked %d notification(s) as read", result.count)
        return result

    @staticmethod
    async def delete(api: ApiClient, notification_id: int) -> dict:
        return await api.delete(f"{BASE}/{notification_id}")

    @staticmethod
    async def check_overdue(api: ApiClient) -> str:
        """Ask the server to raise overdue-snapshot notifications for the user."""
        body = await api.post(f"{BASE}/check-overdue")
        return body.get("message", "")
