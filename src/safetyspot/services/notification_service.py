"""Notification creation and inbox queries."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..models import Notification, NotificationType

logger = logging.getLogger(__name__)


def notify(
    session: Session,
    *,
    recipient_id: str,
    message: str,
    type_: NotificationType,
    related_item_id: Optional[str] = None,
    triggering_user_id: Optional[str] = None,
) -> Notification:
    """Queue a notification in the caller's transaction."""

    notification = Notification(
        recipient_user_id=recipient_id,
        message=message,
        type=type_,
        related_item_id=related_item_id,
        triggering_user_id=triggering_user_id,
    )
    session.add(notification)
    session.flush()
    logger.debug("notification %s queued for %s", type_.value, recipient_id)
    return notification


def list_for_recipient(session: Session, recipient_id: str, *, limit: int = 100) -> Sequence[Notification]:
    stmt = (
        select(Notification)
        .where(Notification.recipient_user_id == recipient_id)
        .order_by(Notification.created_at.desc())
        .limit(limit)
    )
    return session.execute(stmt).scalars().all()


def unread_count(session: Session, recipient_id: str) -> int:
    stmt = select(func.count(Notification.notification_id)).where(
        Notification.recipient_user_id == recipient_id,
        Notification.is_read.is_(False),
    )
    return session.execute(stmt).scalar_one()


def mark_all_read(session: Session, recipient_id: str) -> int:
    """Mark every unread notification for the recipient as read; return how many changed."""

    result = session.execute(
        update(Notification)
        .where(Notification.recipient_user_id == recipient_id, Notification.is_read.is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
