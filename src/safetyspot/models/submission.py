"""Submission model and its moderation state machine."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..core.errors import ConflictError
from ..utils.datetime import utcnow


class SubmissionStatus(str, enum.Enum):
    """Moderation states. Approved and rejected are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def active_states(cls) -> tuple["SubmissionStatus", ...]:
        """States that count as the user's one live report for an activity."""
        return (cls.PENDING, cls.APPROVED)

    def can_transition_to(self, target: "SubmissionStatus") -> bool:
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS = {
    SubmissionStatus.PENDING: frozenset({SubmissionStatus.APPROVED, SubmissionStatus.REJECTED}),
    SubmissionStatus.APPROVED: frozenset(),
    SubmissionStatus.REJECTED: frozenset(),
}


class Submission(Base):
    """A user's report against an activity."""

    __tablename__ = "submissions"
    __table_args__ = (
        Index("submissions_activity_created_idx", "activity_id", "created_at"),
        Index("submissions_activity_user_idx", "activity_id", "line_user_id"),
    )

    submission_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    activity_id = Column(Uuid, ForeignKey("activities.activity_id", ondelete="CASCADE"), nullable=False)
    line_user_id = Column(String, ForeignKey("users.line_user_id", ondelete="RESTRICT"), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String)
    status = Column(
        SAEnum(SubmissionStatus, name="submission_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubmissionStatus.PENDING,
    )
    points = Column(Integer)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    activity = relationship("Activity", back_populates="submissions")
    submitter = relationship("User", back_populates="submissions")

    def transition_to(self, target: SubmissionStatus) -> None:
        """Move to ``target`` or raise if the state machine forbids it."""

        if not self.status.can_transition_to(target):
            raise ConflictError(f"Submission is already {self.status.value}.")
        self.status = target
