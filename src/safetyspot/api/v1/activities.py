"""Public activity listing."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...models import Activity
from ...schemas import ActivityRead, ApiResponse
from ...services import activity_service

router = APIRouter(prefix="/activities", tags=["activities"])


def activity_read(activity: Activity, user_has_submitted: Optional[bool] = None) -> ActivityRead:
    return ActivityRead(
        activity_id=activity.activity_id,
        title=activity.title,
        description=activity.description,
        image_url=activity.image_url,
        status=activity.status.value,
        created_at=activity.created_at,
        user_has_submitted=user_has_submitted,
    )


@router.get("", response_model=ApiResponse[List[ActivityRead]], summary="Active activities")
def list_activities(
    line_user_id: Optional[str] = Query(None, alias="lineUserId", description="Adds the userHasSubmitted flag"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    """Return active activities, newest first."""

    entries = activity_service.list_active(db, line_user_id=line_user_id)
    return ApiResponse(data=[activity_read(activity, flag) for activity, flag in entries])
