"""Pydantic schemas for activities."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ActivityRead(CamelModel):
    activity_id: UUID
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: str
    created_at: datetime
    user_has_submitted: Optional[bool] = None


class ActivityCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    requester_id: Optional[str] = None


class ActivityUpdate(ActivityCreate):
    activity_id: UUID


class ActivityToggle(CamelModel):
    activity_id: UUID
    requester_id: Optional[str] = None


class ActivityToggled(CamelModel):
    new_status: str
