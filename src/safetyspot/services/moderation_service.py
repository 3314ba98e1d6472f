"""Admin moderation workflows: approve, reject, delete activity.

Callers run each function inside one transaction; nothing here commits.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError
from ..models import Activity, NotificationType, Submission, SubmissionStatus
from . import activity_service, badge_service, notification_service, user_service

logger = logging.getLogger(__name__)


def _lock_submission(session: Session, submission_id: UUID) -> Submission:
    stmt = select(Submission).where(Submission.submission_id == submission_id).with_for_update()
    submission = session.execute(stmt).scalar_one_or_none()
    if submission is None:
        raise NotFoundError("Submission not found")
    return submission


def approve(session: Session, *, submission_id: UUID, score: int, admin_id: str) -> Submission:
    """Approve a pending submission and pay its owner ``score`` points."""

    submission = _lock_submission(session, submission_id)
    submission.transition_to(SubmissionStatus.APPROVED)
    submission.points = score
    session.flush()

    user_service.add_points(session, submission.line_user_id, score)
    notification_service.notify(
        session,
        recipient_id=submission.line_user_id,
        message=f"Your report was approved ({score} points).",
        type_=NotificationType.APPROVED,
        related_item_id=str(submission.submission_id),
        triggering_user_id=admin_id,
    )
    badge_service.sync_score_badges(session, submission.line_user_id)
    logger.info("submission %s approved by %s with %s points", submission.submission_id, admin_id, score)
    return submission


def reject(session: Session, *, submission_id: UUID, admin_id: str) -> Submission:
    submission = _lock_submission(session, submission_id)
    submission.transition_to(SubmissionStatus.REJECTED)
    session.flush()

    notification_service.notify(
        session,
        recipient_id=submission.line_user_id,
        message="Unfortunately, your report did not pass review.",
        type_=NotificationType.REJECTED,
        related_item_id=str(submission.submission_id),
        triggering_user_id=admin_id,
    )
    logger.info("submission %s rejected by %s", submission.submission_id, admin_id)
    return submission


def delete_activity(session: Session, *, activity_id: UUID) -> int:
    """Delete an activity and its submissions; return how many submissions went.

    Likes, comments and notifications that reference those submissions are left in place.
    """

    activity = activity_service.ensure_activity(session, activity_id)
    result = session.execute(delete(Submission).where(Submission.activity_id == activity.activity_id))
    removed = result.rowcount or 0
    session.execute(delete(Activity).where(Activity.activity_id == activity.activity_id))
    logger.info("activity %s deleted with %s submissions", activity_id, removed)
    return removed
