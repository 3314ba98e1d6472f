"""Badge catalog, manual awards and score-threshold sync."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError
from ..models import Badge, NotificationType, User, UserBadge
from . import notification_service

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://placehold.co/200x200?text=Badge"


@dataclass
class BadgeState:
    """A catalog badge from one user's point of view."""

    badge: Badge
    is_earned: bool

    @property
    def image_url(self) -> str:
        return self.badge.image_url or PLACEHOLDER_IMAGE


def _ensure_badge(session: Session, badge_id: UUID) -> Badge:
    badge = session.get(Badge, badge_id)
    if badge is None:
        raise NotFoundError(f"Badge {badge_id} not found")
    return badge


def _ensure_user(session: Session, line_user_id: str) -> User:
    user = session.get(User, line_user_id)
    if user is None:
        raise NotFoundError(f"User {line_user_id} not found")
    return user


def _held_badge_ids(session: Session, line_user_id: str) -> set[UUID]:
    stmt = select(UserBadge.badge_id).where(UserBadge.line_user_id == line_user_id)
    return set(session.execute(stmt).scalars().all())


def list_catalog(session: Session) -> Sequence[Badge]:
    return session.execute(select(Badge).order_by(Badge.badge_name.asc())).scalars().all()


def badges_for_user(session: Session, line_user_id: Optional[str]) -> list[BadgeState]:
    """Whole catalog with earned flags for the given user."""

    held = _held_badge_ids(session, line_user_id) if line_user_id else set()
    return [BadgeState(badge=badge, is_earned=badge.badge_id in held) for badge in list_catalog(session)]


def earned_badges(session: Session, line_user_id: str) -> Sequence[Badge]:
    stmt = (
        select(Badge)
        .join(UserBadge, UserBadge.badge_id == Badge.badge_id)
        .where(UserBadge.line_user_id == line_user_id)
        .order_by(UserBadge.earned_at.asc())
    )
    return session.execute(stmt).scalars().all()


def create_badge(
    session: Session,
    *,
    badge_name: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    min_score: Optional[int] = None,
    rarity: Optional[str] = None,
) -> Badge:
    badge = Badge(
        badge_name=badge_name,
        description=description,
        image_url=image_url,
        min_score=min_score,
        rarity=rarity,
    )
    session.add(badge)
    session.flush()
    return badge


def update_badge(
    session: Session,
    *,
    badge_id: UUID,
    badge_name: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    min_score: Optional[int] = None,
    rarity: Optional[str] = None,
) -> Badge:
    badge = _ensure_badge(session, badge_id)
    badge.badge_name = badge_name
    badge.description = description
    badge.image_url = image_url
    badge.min_score = min_score
    badge.rarity = rarity
    session.flush()
    return badge


def delete_badge(session: Session, *, badge_id: UUID) -> None:
    badge = _ensure_badge(session, badge_id)
    session.execute(delete(UserBadge).where(UserBadge.badge_id == badge.badge_id))
    session.delete(badge)
    session.flush()


def award_badge(session: Session, *, line_user_id: str, badge_id: UUID, requester_id: Optional[str]) -> bool:
    """Grant a badge. Returns False when the user already holds it (no-op)."""

    user = _ensure_user(session, line_user_id)
    badge = _ensure_badge(session, badge_id)
    if badge.badge_id in _held_badge_ids(session, user.line_user_id):
        return False

    session.add(UserBadge(line_user_id=user.line_user_id, badge_id=badge.badge_id))
    notification_service.notify(
        session,
        recipient_id=user.line_user_id,
        message=f"You received a new badge from an administrator: {badge.badge_name}",
        type_=NotificationType.BADGE,
        related_item_id=str(badge.badge_id),
        triggering_user_id=requester_id,
    )
    logger.info("badge %s awarded to %s by %s", badge.badge_id, user.line_user_id, requester_id)
    return True


def revoke_badge(session: Session, *, line_user_id: str, badge_id: UUID, requester_id: Optional[str]) -> bool:
    """Remove a badge. Returns False when the user did not hold it."""

    badge = _ensure_badge(session, badge_id)
    result = session.execute(
        delete(UserBadge).where(UserBadge.line_user_id == line_user_id, UserBadge.badge_id == badge.badge_id)
    )
    if not result.rowcount:
        return False

    notification_service.notify(
        session,
        recipient_id=line_user_id,
        message=f"Your badge was revoked: {badge.badge_name}",
        type_=NotificationType.BADGE,
        related_item_id=str(badge.badge_id),
        triggering_user_id=requester_id,
    )
    logger.info("badge %s revoked from %s by %s", badge.badge_id, line_user_id, requester_id)
    return True


def sync_score_badges(session: Session, line_user_id: str) -> tuple[int, int]:
    """Reconcile score-threshold badges with the user's current total.

    Returns ``(granted, removed)``. Badges without a threshold are never touched.
    """

    total_score = session.execute(
        select(User.total_score).where(User.line_user_id == line_user_id)
    ).scalar_one_or_none()
    if total_score is None:
        return 0, 0

    threshold_badges = session.execute(select(Badge).where(Badge.min_score.is_not(None))).scalars().all()
    held = _held_badge_ids(session, line_user_id)

    granted = removed = 0
    for badge in threshold_badges:
        qualifies = total_score >= badge.min_score
        if qualifies and badge.badge_id not in held:
            session.add(UserBadge(line_user_id=line_user_id, badge_id=badge.badge_id))
            granted += 1
        elif not qualifies and badge.badge_id in held:
            session.execute(
                delete(UserBadge).where(
                    UserBadge.line_user_id == line_user_id,
                    UserBadge.badge_id == badge.badge_id,
                )
            )
            removed += 1

    session.flush()
    if granted or removed:
        logger.info("badge sync for %s: +%s -%s", line_user_id, granted, removed)
    return granted, removed


def sync_all_users(session: Session) -> dict[str, int]:
    """Run the threshold sync for every user. Summary is useful for logging."""

    summary = {"users_processed": 0, "granted": 0, "removed": 0}
    for line_user_id in session.execute(select(User.line_user_id)).scalars().all():
        granted, removed = sync_score_badges(session, line_user_id)
        summary["users_processed"] += 1
        summary["granted"] += granted
        summary["removed"] += removed
    return summary
