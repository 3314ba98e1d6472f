"""Registration, profiles, admin user views and score mutations."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..models import NotificationType, ScoreAdjustment, User
from . import admin_service, badge_service, notification_service

logger = logging.getLogger(__name__)


def _ensure_user(session: Session, line_user_id: str) -> User:
    user = session.get(User, line_user_id)
    if user is None:
        raise NotFoundError(f"User {line_user_id} not found")
    return user


def get_user(session: Session, line_user_id: Optional[str]) -> Optional[User]:
    if not line_user_id:
        return None
    return session.get(User, line_user_id)


def register(
    session: Session,
    *,
    line_user_id: str,
    display_name: Optional[str],
    picture_url: Optional[str],
    full_name: str,
    employee_id: str,
) -> User:
    """Create a user with a zero score."""

    stmt = select(User.line_user_id).where(
        or_(User.line_user_id == line_user_id, User.employee_id == employee_id)
    )
    if session.execute(stmt).first() is not None:
        raise ConflictError("LINE user ID or employee ID is already registered.")

    user = User(
        line_user_id=line_user_id,
        display_name=display_name,
        picture_url=picture_url,
        full_name=full_name,
        employee_id=employee_id,
        total_score=0,
    )
    session.add(user)
    session.flush()
    logger.info("user %s registered", line_user_id)
    return user


def profile(session: Session, line_user_id: Optional[str]) -> tuple[Optional[User], bool]:
    """Return ``(user, is_admin)``; user is None when not registered."""

    user = get_user(session, line_user_id)
    if user is None:
        return None, False
    return user, admin_service.is_admin(session, user.line_user_id)


def refresh_profile(
    session: Session,
    *,
    line_user_id: str,
    display_name: Optional[str],
    picture_url: Optional[str],
) -> User:
    user = _ensure_user(session, line_user_id)
    user.display_name = display_name
    user.picture_url = picture_url
    session.flush()
    return user


def add_points(session: Session, line_user_id: str, points: int) -> None:
    """Atomically increase a user's total score in the current transaction."""

    if points < 0:
        raise ValidationError("Score changes must not be negative.")
    if points == 0:
        return
    session.execute(
        update(User)
        .where(User.line_user_id == line_user_id)
        .values(total_score=User.total_score + points)
    )


def list_users(session: Session, *, search: Optional[str] = None, sort_by: Optional[str] = None) -> Sequence[User]:
    stmt = select(User)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(User.full_name.ilike(pattern), User.employee_id.ilike(pattern)))
    if sort_by == "name":
        stmt = stmt.order_by(User.full_name.asc())
    else:
        stmt = stmt.order_by(User.total_score.desc(), User.full_name.asc())
    return session.execute(stmt).scalars().all()


def user_details(session: Session, line_user_id: str):
    user = _ensure_user(session, line_user_id)
    return user, badge_service.earned_badges(session, line_user_id)


def grant_bonus(session: Session, *, line_user_id: str, delta_score: int, requester_id: Optional[str]) -> int:
    """Add admin bonus points, record history, resync badges; return the new total."""

    if delta_score <= 0:
        raise ValidationError("Bonus points must be a positive number.")

    user = _ensure_user(session, line_user_id)
    add_points(session, user.line_user_id, delta_score)
    new_total = session.execute(
        select(User.total_score).where(User.line_user_id == user.line_user_id)
    ).scalar_one()

    session.add(
        ScoreAdjustment(
            line_user_id=user.line_user_id,
            delta_score=delta_score,
            new_total_score=new_total,
            reason="ADMIN_BONUS",
            created_by=requester_id,
        )
    )
    badge_service.sync_score_badges(session, user.line_user_id)
    notification_service.notify(
        session,
        recipient_id=user.line_user_id,
        message=f"You received {delta_score} bonus points (total {new_total}).",
        type_=NotificationType.SCORE,
        triggering_user_id=requester_id,
    )
    logger.info("bonus of %s granted to %s by %s", delta_score, line_user_id, requester_id)
    return new_total
