"""User-facing notification model."""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum as SAEnum, String, Text, Uuid

from ..core.database import Base
from ..utils.datetime import utcnow


class NotificationType(str, enum.Enum):
    LIKE = "like"
    COMMENT = "comment"
    APPROVED = "approved"
    REJECTED = "rejected"
    BADGE = "badge"
    SCORE = "score"
    GAME_QUIZ = "game_quiz"
    GAME_GACHA = "game_gacha"


class Notification(Base):
    """Alert delivered to a recipient.

    ``related_item_id`` points at a submission or a badge depending on type,
    so it is stored as text without a foreign key.
    """

    __tablename__ = "notifications"

    notification_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipient_user_id = Column(String, nullable=False, index=True)
    message = Column(Text, nullable=False)
    type = Column(
        SAEnum(NotificationType, name="notification_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    related_item_id = Column(String)
    triggering_user_id = Column(String)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
