"""Likes, comments and the points they pay to submission owners.

Each (kind, submission, acting user) pays the owner at most once. The
``engagement_awards`` row is the idempotency key and its unique constraint
makes the store reject a second award even if two requests race past the
existence check. Unliking never takes points back.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..models import Comment, EngagementAward, EngagementKind, Like, NotificationType, Submission, User
from ..utils.text import normalize
from . import notification_service, user_service

logger = logging.getLogger(__name__)

ENGAGEMENT_POINTS = 1

EMPTY_COMMENT = "Comment cannot be empty."
CONCURRENT_UPDATE = "Another request changed this submission at the same time. Please try again."

_NOTIFICATION_TYPES = {
    EngagementKind.LIKE: NotificationType.LIKE,
    EngagementKind.COMMENT: NotificationType.COMMENT,
}
_MESSAGES = {
    EngagementKind.LIKE: "{name} liked your report.",
    EngagementKind.COMMENT: "{name} commented on your report.",
}


def _ensure_submission(session: Session, submission_id: UUID) -> Submission:
    submission = session.get(Submission, submission_id)
    if submission is None:
        raise NotFoundError(f"Submission {submission_id} not found")
    return submission


def _ensure_user(session: Session, line_user_id: str) -> User:
    user = session.get(User, line_user_id)
    if user is None:
        raise NotFoundError(f"User {line_user_id} not found")
    return user


def _flush(session: Session) -> None:
    try:
        session.flush()
    except IntegrityError as exc:
        raise ConflictError(CONCURRENT_UPDATE) from exc


def _already_awarded(session: Session, kind: EngagementKind, submission_id: UUID, actor_id: str) -> bool:
    stmt = (
        select(EngagementAward.award_id)
        .where(
            EngagementAward.kind == kind,
            EngagementAward.submission_id == submission_id,
            EngagementAward.actor_id == actor_id,
        )
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none() is not None


def _award_once(session: Session, kind: EngagementKind, submission: Submission, actor: User) -> bool:
    """Pay the owner for this engagement unless it was paid before.

    Writes the award key, the score increment and the notification in the
    caller's transaction. Returns True when points were awarded.
    """

    if _already_awarded(session, kind, submission.submission_id, actor.line_user_id):
        return False

    session.add(
        EngagementAward(
            kind=kind,
            submission_id=submission.submission_id,
            actor_id=actor.line_user_id,
            recipient_id=submission.line_user_id,
            points=ENGAGEMENT_POINTS,
        )
    )
    _flush(session)

    user_service.add_points(session, submission.line_user_id, ENGAGEMENT_POINTS)
    notification_service.notify(
        session,
        recipient_id=submission.line_user_id,
        message=_MESSAGES[kind].format(name=actor.full_name),
        type_=_NOTIFICATION_TYPES[kind],
        related_item_id=str(submission.submission_id),
        triggering_user_id=actor.line_user_id,
    )
    logger.info(
        "%s award: +%s to %s from %s on %s",
        kind.value,
        ENGAGEMENT_POINTS,
        submission.line_user_id,
        actor.line_user_id,
        submission.submission_id,
    )
    return True


def like_count(session: Session, submission_id: UUID) -> int:
    stmt = select(func.count(Like.like_id)).where(Like.submission_id == submission_id)
    return session.execute(stmt).scalar_one()


def toggle_like(session: Session, *, submission_id: UUID, line_user_id: str) -> tuple[bool, int]:
    """Like or unlike; return ``(liked, new_like_count)``."""

    submission = _ensure_submission(session, submission_id)
    actor = _ensure_user(session, line_user_id)

    existing_stmt = select(Like).where(
        Like.submission_id == submission.submission_id,
        Like.line_user_id == actor.line_user_id,
    )
    existing = session.execute(existing_stmt).scalar_one_or_none()

    if existing is not None:
        session.delete(existing)
        _flush(session)
        liked = False
    else:
        session.add(Like(submission_id=submission.submission_id, line_user_id=actor.line_user_id))
        _flush(session)
        liked = True
        if submission.line_user_id != actor.line_user_id:
            _award_once(session, EngagementKind.LIKE, submission, actor)

    return liked, like_count(session, submission.submission_id)


def _comment_count(session: Session, submission_id: UUID, line_user_id: str) -> int:
    stmt = select(func.count(Comment.comment_id)).where(
        Comment.submission_id == submission_id,
        Comment.line_user_id == line_user_id,
    )
    return session.execute(stmt).scalar_one()


def add_comment(session: Session, *, submission_id: UUID, line_user_id: str, comment_text: str | None) -> Comment:
    """Append a comment; the author's first comment on someone else's report pays once."""

    text = normalize(comment_text)
    if not text:
        raise ValidationError(EMPTY_COMMENT)

    submission = _ensure_submission(session, submission_id)
    actor = _ensure_user(session, line_user_id)

    comment = Comment(submission_id=submission.submission_id, line_user_id=actor.line_user_id, comment_text=text)
    session.add(comment)
    _flush(session)

    if submission.line_user_id != actor.line_user_id:
        if _comment_count(session, submission.submission_id, actor.line_user_id) == 1:
            _award_once(session, EngagementKind.COMMENT, submission, actor)

    return comment
