"""Pydantic schemas for user endpoints."""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class UserSummary(CamelModel):
    """Public identity shown next to reports and comments."""

    line_user_id: str
    full_name: str
    picture_url: Optional[str] = None


class UserRead(CamelModel):
    line_user_id: str
    display_name: Optional[str] = None
    picture_url: Optional[str] = None
    full_name: str
    employee_id: str
    total_score: int
    coin_balance: int = 0
    is_admin: bool = False


class ProfileRead(CamelModel):
    registered: bool
    user: Optional[UserRead] = None


class RegisterRequest(CamelModel):
    line_user_id: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    picture_url: Optional[str] = None
    full_name: str = Field(..., min_length=1)
    employee_id: str = Field(..., min_length=1)


class RefreshProfileRequest(CamelModel):
    line_user_id: str
    display_name: Optional[str] = None
    picture_url: Optional[str] = None


class Updated(CamelModel):
    updated: bool = True
