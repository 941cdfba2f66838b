"""User database model."""
from datetime import date, datetime, timedelta
import uuid

from sqlalchemy import Column, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from codelang.db.base import Base
from codelang.db.types import StringList, UTCDateTime


class User(Base):
    """Represents a learner account; credentials live with the auth provider."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    photo_url = Column(String(1024))

    # Gamification
    current_streak = Column(Integer, default=0, nullable=False)
    last_completion_date = Column(UTCDateTime)
    completed_course_ids = Column(StringList, default=list)

    # Metadata
    created_at = Column(UTCDateTime, server_default=func.now())

    def complete_streak(self, now: datetime) -> bool:
        """Register today's practice; return ``False`` when already done today."""

        today = now.date()
        last_day: date | None = (
            self.last_completion_date.date() if self.last_completion_date else None
        )
        if last_day == today:
            return False

        if last_day is not None and last_day == today - timedelta(days=1):
            self.current_streak = (self.current_streak or 0) + 1
        else:
            self.current_streak = 1
        self.last_completion_date = now
        return True

    def complete_course(self, course_id: str) -> bool:
        """Append ``course_id`` once; return ``False`` if it was already there."""

        completed = list(self.completed_course_ids or [])
        if course_id in completed:
            return False
        completed.append(course_id)
        self.completed_course_ids = completed
        return True
