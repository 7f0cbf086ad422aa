"""Notification Pydantic v2 schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Notification(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    type: str
    title: str = ""
    message: str = ""
    related_id: Optional[int] = None
    related_type: Optional[str] = None
    is_read: bool = False
    created_at: datetime
    read_at: Optional[datetime] = None


class NotificationList(BaseModel):
    notifications: List[Notification] = []
    unread_count: int = 0
    total: int = 0


class ReadAllResult(BaseModel):
    message: str = ""
    count: int = 0
