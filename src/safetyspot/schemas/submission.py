"""Pydantic schemas for submissions, likes and comments."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel
from .user import UserSummary


class SubmissionCreate(CamelModel):
    """Request body for reporting against an activity."""

    activity_id: UUID
    line_user_id: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class SubmissionCreated(CamelModel):
    submission_id: UUID
    status: str
    message: str = "Submission created."


class CommentRead(CamelModel):
    comment_id: UUID
    comment_text: str
    created_at: datetime
    commenter: UserSummary


class SubmissionRead(CamelModel):
    """Feed entry for one viewer."""

    submission_id: UUID
    description: str
    image_url: Optional[str] = None
    status: str
    points: Optional[int] = None
    created_at: datetime
    submitter: UserSummary
    likes: int
    did_like: bool
    comments: List[CommentRead] = []


class PendingSubmissionRead(CamelModel):
    submission_id: UUID
    activity_id: UUID
    activity_title: str
    description: str
    image_url: Optional[str] = None
    created_at: datetime
    submitter: UserSummary


class LikeRequest(CamelModel):
    submission_id: UUID
    line_user_id: str


class LikeResult(CamelModel):
    status: str
    liked: bool
    new_like_count: int


class CommentCreate(CamelModel):
    submission_id: UUID
    line_user_id: str
    comment_text: Optional[str] = None


class ApproveRequest(CamelModel):
    submission_id: UUID
    score: int = Field(..., ge=0, description="Points granted to the submitter.")
    requester_id: Optional[str] = None


class RejectRequest(CamelModel):
    submission_id: UUID
    requester_id: Optional[str] = None
