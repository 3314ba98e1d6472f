"""User registration and profile endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db, transaction
from ...core.errors import ServiceError
from ...schemas import (
    ApiResponse,
    ErrorResponse,
    ProfileRead,
    RefreshProfileRequest,
    RegisterRequest,
    Updated,
    UserBadgeRead,
    UserRead,
)
from ...services import badge_service, user_service
from ..deps import http_error

router = APIRouter(prefix="/user", tags=["users"])


@router.get("/profile", response_model=ApiResponse[ProfileRead], summary="Current user profile")
def get_profile(
    line_user_id: Optional[str] = Query(None, alias="lineUserId"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    """Return the profile for a LINE user, or ``registered: false``."""

    user, is_admin = user_service.profile(db, line_user_id)
    if user is None:
        return ApiResponse(data=ProfileRead(registered=False))
    user_read = UserRead.model_validate(user)
    user_read.is_admin = is_admin
    return ApiResponse(data=ProfileRead(registered=True, user=user_read))


@router.post(
    "/register",
    response_model=ApiResponse[UserRead],
    summary="Register a LINE user",
    responses={400: {"model": ErrorResponse, "description": "LINE or employee id already registered"}},
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> ApiResponse:
    """Create a user with a zero score.

    Example request body::

        {
            "lineUserId": "U4af4980629",
            "displayName": "Nok",
            "pictureUrl": "https://profile.line-scdn.net/abc",
            "fullName": "Suda Chaiyaporn",
            "employeeId": "EMP-1042"
        }
    """

    try:
        with transaction(db):
            user = user_service.register(
                db,
                line_user_id=payload.line_user_id,
                display_name=payload.display_name,
                picture_url=payload.picture_url,
                full_name=payload.full_name,
                employee_id=payload.employee_id,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=UserRead.model_validate(user))


@router.post("/refresh-profile", response_model=ApiResponse[Updated], summary="Refresh LINE display fields")
def refresh_profile(payload: RefreshProfileRequest, db: Session = Depends(get_db)) -> ApiResponse:
    try:
        with transaction(db):
            user_service.refresh_profile(
                db,
                line_user_id=payload.line_user_id,
                display_name=payload.display_name,
                picture_url=payload.picture_url,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=Updated())


@router.get("/badges", response_model=ApiResponse[List[UserBadgeRead]], summary="Badge catalog with earned flags")
def get_user_badges(
    line_user_id: Optional[str] = Query(None, alias="lineUserId"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    states = badge_service.badges_for_user(db, line_user_id)
    return ApiResponse(
        data=[
            UserBadgeRead(
                id=state.badge.badge_id,
                name=state.badge.badge_name,
                desc=state.badge.description,
                img=state.image_url,
                is_earned=state.is_earned,
            )
            for state in states
        ]
    )
