"""User and admin-set models."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class User(Base):
    """A LINE-authenticated participant."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("employee_id", name="users_employee_id_unique"),
        CheckConstraint("total_score >= 0", name="users_total_score_non_negative"),
        CheckConstraint("coin_balance >= 0", name="users_coin_balance_non_negative"),
    )

    line_user_id = Column(String, primary_key=True)
    display_name = Column(String)
    picture_url = Column(String)
    full_name = Column(String, nullable=False)
    employee_id = Column(String, nullable=False)
    total_score = Column(Integer, nullable=False, default=0)
    coin_balance = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    submissions = relationship("Submission", back_populates="submitter")
    badges = relationship("UserBadge", back_populates="user")


class Admin(Base):
    """Membership row in the admin set, keyed by LINE user id."""

    __tablename__ = "admins"

    line_user_id = Column(String, primary_key=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
