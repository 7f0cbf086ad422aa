"""Notifications module — the bell, the inbox and overdue checks."""

from staffos.notifications.service import NotificationService

__all__ = ["NotificationService"]
