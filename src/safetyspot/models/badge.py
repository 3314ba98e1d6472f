"""Badge catalog and earned-badge join."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Badge(Base):
    """Catalog entry.

    A non-null ``min_score`` makes it score-awarded. ``rarity`` (C, R, SR, UR)
    steers the gacha draw.
    """

    __tablename__ = "badges"

    badge_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    badge_name = Column(String, nullable=False)
    description = Column(Text)
    image_url = Column(String)
    min_score = Column(Integer)
    rarity = Column(String(2))

    holders = relationship("UserBadge", back_populates="badge", passive_deletes=True)


class UserBadge(Base):
    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("line_user_id", "badge_id", name="user_badges_unique"),)

    user_badge_id = Column(Integer, primary_key=True, autoincrement=True)
    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="CASCADE"), nullable=False)
    badge_id = Column(Uuid, ForeignKey("badges.badge_id", ondelete="CASCADE"), nullable=False)
    earned_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="badges")
    badge = relationship("Badge", back_populates="holders")
