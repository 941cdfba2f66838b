"""Keyed persistence for flashcard review progress."""
from __future__ import annotations

import uuid
from typing import Any, Protocol

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from codelang.db.models.progress import UserFlashcardProgress
from codelang.utils.exceptions import StoreUnavailableError


MUTABLE_FIELDS = (
    "status",
    "repetitions",
    "ease_factor",
    "interval_days",
    "next_review_date",
    "last_review_date",
)


class ProgressStore(Protocol):
    """Storage surface the progress tracker depends on."""

    def get(self, user_id: uuid.UUID, card_id: str) -> UserFlashcardProgress | None: ...

    def find(self, user_id: uuid.UUID, *, deck_id: str | None = None) -> list[UserFlashcardProgress]: ...

    def insert(
        self, user_id: uuid.UUID, card_id: str, deck_id: str, values: dict[str, Any]
    ) -> None: ...

    def update(self, row: UserFlashcardProgress, values: dict[str, Any]) -> None: ...

    def count(self, user_id: uuid.UUID, *, exclude_status: str | None = None) -> int: ...


class SQLAlchemyProgressStore:
    """Progress store backed by a request-scoped SQLAlchemy session.

    Every write commits on its own; a failed statement rolls the session
    back and surfaces as :class:`StoreUnavailableError`.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _fail(self, action: str, exc: SQLAlchemyError) -> StoreUnavailableError:
        self.db.rollback()
        logger.error(f"Progress store failed to {action}: {exc}")
        return StoreUnavailableError(f"Could not {action}", {"reason": exc.__class__.__name__})

    def get(self, user_id: uuid.UUID, card_id: str) -> UserFlashcardProgress | None:
        stmt = select(UserFlashcardProgress).where(
            UserFlashcardProgress.user_id == user_id,
            UserFlashcardProgress.card_id == card_id,
        )
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as exc:
            raise self._fail("read card progress", exc) from exc

    def find(self, user_id: uuid.UUID, *, deck_id: str | None = None) -> list[UserFlashcardProgress]:
        stmt = select(UserFlashcardProgress).where(UserFlashcardProgress.user_id == user_id)
        if deck_id is not None:
            stmt = stmt.where(UserFlashcardProgress.deck_id == deck_id)
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as exc:
            raise self._fail("read deck progress", exc) from exc

    def insert(
        self, user_id: uuid.UUID, card_id: str, deck_id: str, values: dict[str, Any]
    ) -> None:
        row = UserFlashcardProgress(user_id=user_id, card_id=card_id, deck_id=deck_id, **values)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail("create card progress", exc) from exc

    def update(self, row: UserFlashcardProgress, values: dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(row, field, value)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail("update card progress", exc) from exc

    def count(self, user_id: uuid.UUID, *, exclude_status: str | None = None) -> int:
        stmt = (
            select(func.count())
            .select_from(UserFlashcardProgress)
            .where(UserFlashcardProgress.user_id == user_id)
        )
        if exclude_status is not None:
            stmt = stmt.where(UserFlashcardProgress.status != exclude_status)
        try:
            return int(self.db.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            raise self._fail("count card progress", exc) from exc
