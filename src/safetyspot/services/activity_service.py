"""Activity catalog reads and admin edits."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError
from ..models import Activity, ActivityStatus, Submission, SubmissionStatus


def ensure_activity(session: Session, activity_id: UUID) -> Activity:
    activity = session.get(Activity, activity_id)
    if activity is None:
        raise NotFoundError(f"Activity {activity_id} not found")
    return activity


def list_active(session: Session, *, line_user_id: Optional[str] = None) -> list[tuple[Activity, Optional[bool]]]:
    """Active activities newest first, each with the viewer's has-submitted flag.

    The flag is None when no viewer is given.
    """

    stmt = (
        select(Activity)
        .where(Activity.status == ActivityStatus.ACTIVE)
        .order_by(Activity.created_at.desc())
    )
    activities = session.execute(stmt).scalars().all()
    if not line_user_id:
        return [(activity, None) for activity in activities]

    submitted_stmt = select(Submission.activity_id).where(
        Submission.line_user_id == line_user_id,
        Submission.status.in_(SubmissionStatus.active_states()),
    )
    submitted = set(session.execute(submitted_stmt).scalars().all())
    return [(activity, activity.activity_id in submitted) for activity in activities]


def list_all(session: Session) -> Sequence[Activity]:
    return session.execute(select(Activity).order_by(Activity.created_at.desc())).scalars().all()


def create_activity(
    session: Session,
    *,
    title: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Activity:
    activity = Activity(title=title, description=description, image_url=image_url, status=ActivityStatus.ACTIVE)
    session.add(activity)
    session.flush()
    return activity


def update_activity(
    session: Session,
    *,
    activity_id: UUID,
    title: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Activity:
    activity = ensure_activity(session, activity_id)
    activity.title = title
    activity.description = description
    activity.image_url = image_url
    session.flush()
    return activity


def toggle_status(session: Session, *, activity_id: UUID) -> ActivityStatus:
    activity = ensure_activity(session, activity_id)
    activity.status = activity.status.toggled()
    session.flush()
    return activity.status
