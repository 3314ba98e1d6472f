"""Leaderboard endpoint."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ApiResponse, LeaderboardEntry
from ...services import leaderboard_service

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get(
    "",
    response_model=ApiResponse[List[LeaderboardEntry]],
    summary="Top scorers",
    responses={
        200: {
            "description": "Leaderboard entries ordered by total score",
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "data": [
                            {
                                "rank": 1,
                                "lineUserId": "U4af4980629",
                                "fullName": "Suda Chaiyaporn",
                                "pictureUrl": "https://profile.line-scdn.net/abc",
                                "totalScore": 42,
                            }
                        ],
                    }
                }
            },
        }
    },
)
def get_leaderboard(
    page: int = Query(1, ge=1, description="1-based page, 30 users per page"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    """Return ranked users by total score."""

    users = leaderboard_service.leaderboard_page(db, page=page)
    first_rank = (page - 1) * leaderboard_service.PAGE_SIZE + 1
    return ApiResponse(
        data=[
            LeaderboardEntry(
                rank=first_rank + index,
                line_user_id=user.line_user_id,
                full_name=user.full_name,
                picture_url=user.picture_url,
                total_score=user.total_score,
            )
            for index, user in enumerate(users)
        ]
    )
