"""Likes, comments and the engagement award ledger."""

import enum
import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class EngagementKind(str, enum.Enum):
    LIKE = "like"
    COMMENT = "comment"


class Like(Base):
    """Toggle row; at most one per (submission, user).

    ``submission_id`` is not a foreign key, so deleting an
    activity removes its submissions but leaves engagement rows in place.
    """

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("submission_id", "line_user_id", name="likes_submission_user_unique"),
    )

    like_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid, nullable=False, index=True)
    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class Comment(Base):
    """Append-only comment on a submission."""

    __tablename__ = "comments"

    comment_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid, nullable=False, index=True)
    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="CASCADE"), nullable=False)
    comment_text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    commenter = relationship("User")


class EngagementAward(Base):
    """Idempotency key for engagement points: one row per (kind, submission, actor)."""

    __tablename__ = "engagement_awards"
    __table_args__ = (
        UniqueConstraint("kind", "submission_id", "actor_id", name="engagement_awards_once"),
    )

    award_id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(
        SAEnum(EngagementKind, name="engagement_kind", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    submission_id = Column(Uuid, nullable=False)
    actor_id = Column(String, nullable=False)
    recipient_id = Column(String, nullable=False)
    points = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
