"""Submission, like and comment endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db, transaction
from ...core.errors import ServiceError
from ...models import Comment, User
from ...schemas import (
    ApiResponse,
    CommentCreate,
    CommentRead,
    ErrorResponse,
    LikeRequest,
    LikeResult,
    SubmissionCreate,
    SubmissionCreated,
    SubmissionRead,
    UserSummary,
)
from ...services import engagement_service, submission_service
from ...services.submission_service import FeedEntry
from ..deps import http_error

router = APIRouter(prefix="/submissions", tags=["submissions"])


def user_summary(user: User) -> UserSummary:
    return UserSummary(line_user_id=user.line_user_id, full_name=user.full_name, picture_url=user.picture_url)


def comment_read(comment: Comment) -> CommentRead:
    return CommentRead(
        comment_id=comment.comment_id,
        comment_text=comment.comment_text,
        created_at=comment.created_at,
        commenter=user_summary(comment.commenter),
    )


def feed_read(entry: FeedEntry) -> SubmissionRead:
    submission = entry.submission
    return SubmissionRead(
        submission_id=submission.submission_id,
        description=submission.description,
        image_url=submission.image_url,
        status=submission.status.value,
        points=submission.points,
        created_at=submission.created_at,
        submitter=user_summary(submission.submitter),
        likes=entry.like_count,
        did_like=entry.did_like,
        comments=[comment_read(comment) for comment in entry.comments],
    )


@router.post(
    "",
    response_model=ApiResponse[SubmissionCreated],
    summary="Submit a report",
    responses={
        200: {
            "description": "Report stored as pending",
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "data": {
                            "submissionId": "5f0c1f7e-3a0e-4c55-9d8e-1d4f1a2b3c4d",
                            "status": "pending",
                            "message": "Submission created.",
                        },
                    }
                }
            },
        },
        400: {"model": ErrorResponse, "description": "Empty, too similar, or already submitted"},
        404: {"model": ErrorResponse, "description": "Activity or user not found"},
    },
)
def create_submission(payload: SubmissionCreate, db: Session = Depends(get_db)) -> ApiResponse:
    """Report against an activity.

    Example request body::

        {
            "activityId": "0b6f3c1e-8a55-4f7a-9b0e-2f3c4d5e6f70",
            "lineUserId": "U4af4980629",
            "description": "broken railing near exit",
            "imageUrl": "https://cdn.example.com/safety-spot/railing.jpg"
        }
    """

    try:
        with transaction(db):
            submission = submission_service.create_submission(
                db,
                activity_id=payload.activity_id,
                line_user_id=payload.line_user_id,
                description=payload.description,
                image_url=payload.image_url,
            )
            created = SubmissionCreated(submission_id=submission.submission_id, status=submission.status.value)
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=created)


@router.get("", response_model=ApiResponse[List[SubmissionRead]], summary="Submissions for an activity")
def list_submissions(
    activity_id: UUID = Query(..., alias="activityId"),
    line_user_id: Optional[str] = Query(None, alias="lineUserId", description="Viewer, for the didLike flag"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    """Pending and approved reports newest first, with like counts and comments."""

    entries = submission_service.list_for_activity(db, activity_id=activity_id, viewer_id=line_user_id)
    return ApiResponse(data=[feed_read(entry) for entry in entries])


@router.post(
    "/like",
    response_model=ApiResponse[LikeResult],
    summary="Like or unlike a report",
    responses={
        200: {
            "description": "New like state",
            "content": {
                "application/json": {
                    "example": {"status": "success", "data": {"status": "liked", "liked": True, "newLikeCount": 4}}
                }
            },
        },
        404: {"model": ErrorResponse, "description": "Submission or user not found"},
    },
)
def toggle_like(payload: LikeRequest, db: Session = Depends(get_db)) -> ApiResponse:
    try:
        with transaction(db):
            liked, count = engagement_service.toggle_like(
                db,
                submission_id=payload.submission_id,
                line_user_id=payload.line_user_id,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=LikeResult(status="liked" if liked else "unliked", liked=liked, new_like_count=count))


@router.post(
    "/comment",
    response_model=ApiResponse[CommentRead],
    summary="Comment on a report",
    responses={
        400: {"model": ErrorResponse, "description": "Empty comment"},
        404: {"model": ErrorResponse, "description": "Submission or user not found"},
    },
)
def add_comment(payload: CommentCreate, db: Session = Depends(get_db)) -> ApiResponse:
    try:
        with transaction(db):
            comment = engagement_service.add_comment(
                db,
                submission_id=payload.submission_id,
                line_user_id=payload.line_user_id,
                comment_text=payload.comment_text,
            )
    except ServiceError as exc:
        raise http_error(exc) from exc
    return ApiResponse(data=comment_read(comment))
