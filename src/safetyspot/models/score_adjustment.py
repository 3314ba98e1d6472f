"""History of admin score bonuses."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String

from ..core.database import Base
from ..utils.datetime import utcnow


class ScoreAdjustment(Base):
    __tablename__ = "score_adjustments"
    __table_args__ = (CheckConstraint("delta_score > 0", name="score_adjustments_positive"),)

    adjustment_id = Column(Integer, primary_key=True, autoincrement=True)
    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="CASCADE"), nullable=False)
    delta_score = Column(Integer, nullable=False)
    new_total_score = Column(Integer, nullable=False)
    reason = Column(String, nullable=False)
    created_by = Column(String)
    created_at = Column(DateTime, default=utcnow, nullable=False)
