"""Flashcard review progress models."""
import uuid

from sqlalchemy import Column, Float, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from codelang.db.base import Base
from codelang.db.types import UTCDateTime


class UserFlashcardProgress(Base):
    """Spaced-repetition state of one flashcard for one learner.

    Scheduling values are computed by the client; rows only store them.
    """

    __tablename__ = "user_flashcard_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "card_id", name="uq_user_flashcard_progress_user_card"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Learner id from the access token; no users row is required.
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    deck_id = Column(String(100), nullable=False, index=True)
    card_id = Column(String(100), nullable=False)

    status = Column(String(20), nullable=False, default="new")
    repetitions = Column(Integer, nullable=False, default=0)
    ease_factor = Column(Float, nullable=False, default=2.5)
    interval_days = Column(Integer, nullable=False, default=0)
    next_review_date = Column(UTCDateTime, nullable=False, index=True)
    last_review_date = Column(UTCDateTime, nullable=False)

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now())
