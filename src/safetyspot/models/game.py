"""Daily quiz questions, play history and streaks."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from ..core.database import Base
from ..utils.datetime import utcnow


class QuizQuestion(Base):
    """Two-option hazard question. ``correct_option`` is ``"A"`` or ``"B"``."""

    __tablename__ = "kyt_questions"

    question_id = Column(Integer, primary_key=True, autoincrement=True)
    question_text = Column(Text, nullable=False)
    image_url = Column(String)
    option_a = Column(String, nullable=False)
    option_b = Column(String, nullable=False)
    correct_option = Column(String(1), nullable=False)
    score_reward = Column(Integer, nullable=False, default=10)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class GameHistory(Base):
    """One answered quiz; at most one per user per day."""

    __tablename__ = "user_game_history"
    __table_args__ = (UniqueConstraint("line_user_id", "played_on", name="user_game_history_once_per_day"),)

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="CASCADE"), nullable=False)
    # no foreign key: deleting a question keeps the history
    question_id = Column(Integer, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    earned_coins = Column(Integer, nullable=False)
    earned_score = Column(Integer, nullable=False)
    played_on = Column(Date, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class UserStreak(Base):
    __tablename__ = "user_streaks"

    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="CASCADE"), primary_key=True)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_played_date = Column(Date)
