"""Pydantic schemas for badges."""

from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class BadgeRead(CamelModel):
    badge_id: UUID
    badge_name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    min_score: Optional[int] = None
    rarity: Optional[str] = None


class UserBadgeRead(CamelModel):
    """Catalog badge from one user's point of view."""

    id: UUID
    name: str
    desc: Optional[str] = None
    img: str
    is_earned: bool


class BadgeWrite(CamelModel):
    badge_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    min_score: Optional[int] = Field(None, ge=0, description="Score that auto-awards this badge.")
    rarity: Optional[Literal["C", "R", "SR", "UR"]] = Field(None, description="Gacha tier; unset draws as C.")
    requester_id: Optional[str] = None


class BadgeAssignment(CamelModel):
    line_user_id: str
    badge_id: UUID
    requester_id: Optional[str] = None


class BadgeAssignmentResult(CamelModel):
    changed: bool


class BadgeSyncSummary(CamelModel):
    recalculated: bool = True
    user_count: int
    granted: int
    removed: int
