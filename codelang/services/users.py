"""Service layer for learner profile operations."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from codelang.db.models.user import User
from codelang.services.progress import ProgressTracker
from codelang.services.progress_store import SQLAlchemyProgressStore
from codelang.utils.exceptions import InvalidInputError, NotFoundError, StoreUnavailableError


class UserService:
    """Encapsulates reusable user-related data access operations."""

    def __init__(self, db: Session, *, tracker: ProgressTracker | None = None):
        self.db = db
        self.tracker = tracker or ProgressTracker(SQLAlchemyProgressStore(db))

    def get(self, user_id: uuid.UUID) -> User:
        """Return a user by identifier or raise ``NotFoundError``."""

        try:
            user = self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreUnavailableError("Could not load user") from exc
        if not user:
            raise NotFoundError("User not found")
        return user

    def _save(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to save user {user.id}: {exc}")
            raise StoreUnavailableError("Could not save user") from exc
        return user

    def profile(self, user: User) -> dict[str, Any]:
        """Profile payload including the number of cards past the ``new`` stage."""

        return {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "photo_url": user.photo_url,
            "current_streak": user.current_streak or 0,
            "completed_course_ids": list(user.completed_course_ids or []),
            "learned_words_count": self.tracker.count_learned(user_id=user.id),
            "last_completion_date": user.last_completion_date,
            "created_at": user.created_at,
        }

    def update_name(self, user: User, name: str | None) -> User:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidInputError("Name is required")
        user.name = cleaned
        logger.info(f"User name updated: {user.id}")
        return self._save(user)

    def complete_streak(self, user: User, *, now: datetime | None = None) -> User:
        """Record today's practice and extend or restart the streak."""

        now = now or datetime.now(timezone.utc)
        previous = user.current_streak or 0
        if not user.complete_streak(now):
            logger.info(f"Streak already completed today for user {user.id}")
            return user
        logger.info(f"Streak for user {user.id}: {previous} -> {user.current_streak}")
        return self._save(user)

    def complete_course(self, user: User, course_id: str | None) -> User:
        if not course_id:
            raise InvalidInputError("courseId is required")
        if not user.complete_course(course_id):
            logger.info(f"Course {course_id} already completed by user {user.id}")
            return user
        logger.info(f"Course {course_id} marked as completed for user {user.id}")
        return self._save(user)
