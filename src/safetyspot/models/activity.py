"""Activity model."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum as SAEnum, String, Text, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class ActivityStatus(str, enum.Enum):
    """Whether an activity accepts reports."""

    ACTIVE = "active"
    INACTIVE = "inactive"

    def toggled(self) -> "ActivityStatus":
        return ActivityStatus.INACTIVE if self is ActivityStatus.ACTIVE else ActivityStatus.ACTIVE


class Activity(Base):
    """A campaign users report against."""

    __tablename__ = "activities"

    activity_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(Text)
    image_url = Column(String)
    status = Column(
        SAEnum(ActivityStatus, name="activity_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ActivityStatus.ACTIVE,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)

    submissions = relationship("Submission", back_populates="activity", passive_deletes=True)
