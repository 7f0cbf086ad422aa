"""Notification display logic — icons, categories, filters and relative times."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from staffos.common.constants import NotificationCategory
from staffos.common.formatting import format_date, format_datetime
from staffos.notifications.schemas import Notification

ICONS = {
    "manager_snapshot_committed": "📊",
    "snapshot_overdue": "⚠️",
    "self_reflection_overdue": "⚠️",
    "leave_request_pending": "🏖️",
    "leave_request_approved": "✅",
    "leave_request_rejected": "❌",
    "employee_transferred": "👥",
    "new_direct_report": "👥",
    "kpi_revealed": "📊",
}
DEFAULT_ICON = "🔔"

CATEGORY_TYPES = {
    NotificationCategory.performance.value: frozenset({
        "manager_snapshot_committed", "snapshot_overdue", "self_reflection_overdue", "kpi_revealed",
    }),
    NotificationCategory.leave.value: frozenset({
        "leave_request_pending", "leave_request_approved", "leave_request_rejected",
    }),
    NotificationCategory.team.value: frozenset({"employee_transferred", "new_direct_report"}),
}

FILTERS = ["all", "unread"] + [c.value for c in NotificationCategory if c is not NotificationCategory.other]

BELL_LIMIT = 10
INBOX_LIMIT = 100
BADGE_MAX = 99


def icon(notification_type: str) -> str:
    return ICONS.get(notification_type, DEFAULT_ICON)


def category(notification_type: str) -> str:
    for name, types in CATEGORY_TYPES.items():
        if notification_type in types:
            return name
    return NotificationCategory.other.value


def apply_filter(notifications: Iterable[Notification], selected: str = "all") -> list[Notification]:
    """``all``, ``unread`` or a category name."""
    if selected == "all":
        return list(notifications)
    if selected == "unread":
        return [n for n in notifications if not n.is_read]
    return [n for n in notifications if category(n.type) == selected]


def unread(notifications: Iterable[Notification]) -> int:
    return sum(1 for n in notifications if not n.is_read)


def badge_text(count: int) -> Optional[str]:
    """Bell badge; hidden at zero, capped at ``99+``."""
    if count <= 0:
        return None
    return f"{BADGE_MAX}+" if count > BADGE_MAX else str(count)


def relative_time(created_at: datetime, now: datetime, short: bool = True) -> str:
    """``5m ago`` in the bell, ``5 minutes ago`` in the inbox; a date after a week."""
    if created_at.tzinfo is None and now.tzinfo is not None:
        created_at = created_at.replace(tzinfo=now.tzinfo)
    elif created_at.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=created_at.tzinfo)
    seconds = (now - created_at).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago" if short else f"{minutes} minutes ago"
    if hours < 24:
        return f"{hours}h ago" if short else f"{hours} hours ago"
    if days < 7:
        return f"{days}d ago" if short else f"{days} days ago"
    return format_date(created_at) if short else format_datetime(created_at)


class Inbox:
    """Loaded notifications plus the bell's unread counter, kept in step locally."""

    def __init__(self, notifications: Iterable[Notification] = (), unread_count: Optional[int] = None):
        self.notifications = list(notifications)
        self.unread_count = unread(self.notifications) if unread_count is None else unread_count

    def mark_read(self, notification_id: int) -> None:
        for n in self.notifications:
            if n.id == notification_id and not n.is_read:
                n.is_read = True
                self.unread_count = max(0, self.unread_count - 1)

    def mark_all_read(self) -> None:
        for n in self.notifications:
            n.is_read = True
        self.unread_count = 0

    def remove(self, notification_id: int) -> None:
        removed_unread = unread(n for n in self.notifications if n.id == notification_id)
        self.notifications = [n for n in self.notifications if n.id != notification_id]
        self.unread_count = max(0, self.unread_count - removed_unread)

    def filtered(self, selected: str = "all") -> list[Notification]:
        return apply_filter(self.notifications, selected)
