"""Leaderboard and admin statistics aggregation services."""

from __future__ import annotations

from collections import Counter
from datetime import timedelta
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Activity, ActivityStatus, Submission, SubmissionStatus, User
from ..utils.datetime import last_n_days, start_of_day, utcnow

PAGE_SIZE = 30
CHART_DAYS = 7


def leaderboard_page(session: Session, *, page: int = 1) -> Sequence[User]:
    """Return one page of users ordered by score, then name."""

    page = max(1, page)
    stmt = (
        select(User)
        .order_by(User.total_score.desc(), User.full_name.asc())
        .offset((page - 1) * PAGE_SIZE)
        .limit(PAGE_SIZE)
    )
    return session.execute(stmt).scalars().all()


def _count(session: Session, stmt) -> int:
    return int(session.execute(stmt).scalar_one() or 0)


def overall_stats(session: Session) -> dict:
    now = utcnow()
    total_users = _count(session, select(func.count(User.line_user_id)))
    total_submissions = _count(session, select(func.count(Submission.submission_id)))
    submissions_today = _count(
        session,
        select(func.count(Submission.submission_id)).where(Submission.created_at >= start_of_day(now)),
    )

    total = func.count(Submission.submission_id).label("total")
    top_stmt = (
        select(Activity.title, total)
        .join(Submission, Submission.activity_id == Activity.activity_id)
        .group_by(Activity.activity_id, Activity.title)
        .order_by(total.desc())
        .limit(1)
    )
    top = session.execute(top_stmt).first()

    return {
        "total_users": total_users,
        "total_submissions": total_submissions,
        "submissions_today": submissions_today,
        "most_reported_activity": top.title if top else "N/A",
    }


def dashboard_stats(session: Session) -> dict:
    return {
        "pending_count": _count(
            session,
            select(func.count(Submission.submission_id)).where(Submission.status == SubmissionStatus.PENDING),
        ),
        "user_count": _count(session, select(func.count(User.line_user_id))),
        "active_activities_count": _count(
            session,
            select(func.count(Activity.activity_id)).where(Activity.status == ActivityStatus.ACTIVE),
        ),
    }


def chart_data(session: Session, *, days: int = CHART_DAYS) -> dict:
    """Submission counts per day for the last ``days`` days, zero-filled, oldest first."""

    window = last_n_days(days)
    since = start_of_day(utcnow()) - timedelta(days=days - 1)
    stmt = select(Submission.created_at).where(Submission.created_at >= since)
    per_day = Counter(created_at.date() for created_at in session.execute(stmt).scalars().all())
    return {
        "labels": [day.isoformat() for day in window],
        "data": [per_day.get(day, 0) for day in window],
    }
