"""Submission creation, feed reads and admin removal."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, joinedload

from ..core.errors import ConflictError, NotFoundError
from ..models import ActivityStatus, Comment, Like, Submission, SubmissionStatus, User
from . import activity_service, similarity_filter

logger = logging.getLogger(__name__)

ALREADY_SUBMITTED = "You have already submitted a report for this activity."
ACTIVITY_CLOSED = "This activity is not accepting reports."


@dataclass
class FeedEntry:
    """A visible submission enriched for one viewer."""

    submission: Submission
    like_count: int
    did_like: bool
    comments: list[Comment] = field(default_factory=list)


def has_active_submission(session: Session, *, activity_id: UUID, line_user_id: str) -> bool:
    stmt = (
        select(Submission.submission_id)
        .where(
            Submission.activity_id == activity_id,
            Submission.line_user_id == line_user_id,
            Submission.status.in_(SubmissionStatus.active_states()),
        )
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none() is not None


def create_submission(
    session: Session,
    *,
    activity_id: UUID,
    line_user_id: str,
    description: Optional[str],
    image_url: Optional[str] = None,
) -> Submission:
    """Insert a pending submission after validation, similarity and one-active checks.

    The active-submission check and the insert are separate statements, so two
    concurrent requests from the same user can both pass it.
    """

    text = similarity_filter.check_duplicate(session, activity_id, description)

    activity = activity_service.ensure_activity(session, activity_id)
    if activity.status is not ActivityStatus.ACTIVE:
        raise ConflictError(ACTIVITY_CLOSED)
    if session.get(User, line_user_id) is None:
        raise NotFoundError(f"User {line_user_id} not found")

    if has_active_submission(session, activity_id=activity_id, line_user_id=line_user_id):
        raise ConflictError(ALREADY_SUBMITTED)

    submission = Submission(
        activity_id=activity_id,
        line_user_id=line_user_id,
        description=text,
        image_url=image_url,
        status=SubmissionStatus.PENDING,
        points=None,
    )
    session.add(submission)
    session.flush()
    logger.info("submission %s created by %s for activity %s", submission.submission_id, line_user_id, activity_id)
    return submission


def list_for_activity(
    session: Session,
    *,
    activity_id: UUID,
    viewer_id: Optional[str] = None,
) -> list[FeedEntry]:
    """Pending and approved submissions newest first, with likes and comments."""

    like_count = (
        select(func.count(Like.like_id))
        .where(Like.submission_id == Submission.submission_id)
        .correlate(Submission)
        .scalar_subquery()
    )
    stmt = (
        select(Submission, like_count)
        .options(joinedload(Submission.submitter))
        .where(
            Submission.activity_id == activity_id,
            Submission.status.in_(SubmissionStatus.active_states()),
        )
        .order_by(Submission.created_at.desc())
    )
    rows = session.execute(stmt).all()
    if not rows:
        return []

    ids = [submission.submission_id for submission, _ in rows]

    liked: set[UUID] = set()
    if viewer_id:
        liked_stmt = select(Like.submission_id).where(
            Like.line_user_id == viewer_id,
            Like.submission_id.in_(ids),
        )
        liked = set(session.execute(liked_stmt).scalars().all())

    comments_stmt = (
        select(Comment)
        .options(joinedload(Comment.commenter))
        .where(Comment.submission_id.in_(ids))
        .order_by(Comment.created_at.asc())
    )
    comments_by_submission: dict[UUID, list[Comment]] = defaultdict(list)
    for comment in session.execute(comments_stmt).scalars().all():
        comments_by_submission[comment.submission_id].append(comment)

    return [
        FeedEntry(
            submission=submission,
            like_count=int(count or 0),
            did_like=submission.submission_id in liked,
            comments=comments_by_submission.get(submission.submission_id, []),
        )
        for submission, count in rows
    ]


def list_pending(session: Session) -> Sequence[Submission]:
    """Moderation queue, oldest first."""

    stmt = (
        select(Submission)
        .options(joinedload(Submission.submitter), joinedload(Submission.activity))
        .where(Submission.status == SubmissionStatus.PENDING)
        .order_by(Submission.created_at.asc())
    )
    return session.execute(stmt).scalars().all()


def delete_submission(session: Session, *, submission_id: UUID) -> None:
    result = session.execute(delete(Submission).where(Submission.submission_id == submission_id))
    if not result.rowcount:
        raise NotFoundError(f"Submission {submission_id} not found")
    logger.info("submission %s deleted", submission_id)
