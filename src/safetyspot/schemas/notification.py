"""Pydantic schemas for notifications."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from .common import CamelModel


class NotificationRead(CamelModel):
    notification_id: UUID
    recipient_user_id: str
    message: str
    type: str
    related_item_id: Optional[str] = None
    triggering_user_id: Optional[str] = None
    is_read: bool
    created_at: datetime


class UnreadCount(CamelModel):
    unread_count: int


class MarkReadRequest(CamelModel):
    requester_id: str


class MarkedRead(CamelModel):
    updated: int
