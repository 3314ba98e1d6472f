"""Leaderboard and admin statistics response schemas."""

from typing import List, Optional

from pydantic import Field

from .badge import BadgeRead
from .common import CamelModel
from .user import UserRead


class LeaderboardEntry(CamelModel):
    """Aggregated leaderboard entry."""

    rank: int = Field(..., ge=1)
    line_user_id: str
    full_name: str
    picture_url: Optional[str] = None
    total_score: int = Field(..., ge=0)


class OverallStats(CamelModel):
    total_users: int
    total_submissions: int
    submissions_today: int
    most_reported_activity: str


class DashboardStats(CamelModel):
    pending_count: int
    user_count: int
    active_activities_count: int


class ChartData(CamelModel):
    labels: List[str]
    data: List[int]


class UserDetails(CamelModel):
    user: UserRead
    badges: List[BadgeRead]


class ScoreBonusRequest(CamelModel):
    line_user_id: str
    delta_score: int = Field(..., gt=0)
    requester_id: Optional[str] = None


class ScoreBonusResult(CamelModel):
    updated: bool = True
    line_user_id: str
    delta_score: int
    new_total_score: int
