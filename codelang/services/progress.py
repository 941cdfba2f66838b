"""Business logic for flashcard review progress."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Sequence

from loguru import logger
from pydantic import ValidationError

from codelang.config import settings
from codelang.db.models.progress import UserFlashcardProgress
from codelang.schemas.progress import BatchProgressEntry, ProgressUpdate
from codelang.services.progress_store import MUTABLE_FIELDS, ProgressStore
from codelang.utils.exceptions import CodeLangException, InvalidInputError, NotFoundError


class ReviewStatus(str, Enum):
    """Learning stages reported by the client scheduler."""

    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"


@dataclass(slots=True)
class ReviewState:
    """Review state of one card for one learner."""

    user_id: uuid.UUID
    card_id: str
    deck_id: str | None
    status: str
    repetitions: int
    ease_factor: float
    interval_days: int
    next_review_date: datetime
    last_review_date: datetime

    @classmethod
    def from_row(cls, row: UserFlashcardProgress) -> "ReviewState":
        return cls(
            user_id=row.user_id,
            card_id=row.card_id,
            deck_id=row.deck_id,
            status=row.status,
            repetitions=row.repetitions,
            ease_factor=row.ease_factor,
            interval_days=row.interval_days,
            next_review_date=row.next_review_date,
            last_review_date=row.last_review_date,
        )


@dataclass(slots=True)
class DeckStats:
    """Card counts per learning stage for one deck."""

    new_count: int = 0
    learning_count: int = 0
    reviewing_count: int = 0
    mastered_count: int = 0
    due_for_review_count: int = 0


@dataclass(slots=True)
class BatchResult:
    """Outcome of a batch upload."""

    updated_count: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)


def default_values(now: datetime) -> dict[str, Any]:
    """Scheduling values of a card that was never reviewed."""

    return {
        "status": ReviewStatus.NEW.value,
        "repetitions": 0,
        "ease_factor": settings.DEFAULT_EASE_FACTOR,
        "interval_days": 0,
        "next_review_date": now,
        "last_review_date": now,
    }


def is_due(next_review_date: datetime | None, now: datetime) -> bool:
    """A card is due once its review date is strictly in the past."""

    return next_review_date is not None and now > next_review_date


class ProgressTracker:
    """Persist and aggregate review state computed by the client.

    The tracker trusts the caller's ``status`` and scheduling values; it
    neither validates stage transitions nor recomputes intervals.
    Concurrent upserts of the same card are last-write-wins.
    """

    def __init__(self, store: ProgressStore) -> None:
        self.store = store

    @staticmethod
    def _now(now: datetime | None) -> datetime:
        return now or datetime.now(timezone.utc)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_deck_progress(self, *, user_id: uuid.UUID, deck_id: str) -> list[ReviewState]:
        """Return the stored states of a deck; untracked cards are not included."""

        return [ReviewState.from_row(row) for row in self.store.find(user_id, deck_id=deck_id)]

    def get_card_progress(
        self, *, user_id: uuid.UUID, card_id: str, now: datetime | None = None
    ) -> ReviewState:
        """Return the stored state, or an unsaved default for a never-reviewed card."""

        row = self.store.get(user_id, card_id)
        if row is not None:
            return ReviewState.from_row(row)
        return ReviewState(
            user_id=user_id, card_id=card_id, deck_id=None, **default_values(self._now(now))
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def upsert_card_progress(
        self,
        *,
        user_id: uuid.UUID,
        card_id: str,
        update: ProgressUpdate,
        now: datetime | None = None,
    ) -> ReviewState:
        """Create or overwrite a card's state and return it as stored.

        ``deck_id`` is fixed when the row is created; a different value on a
        later update is ignored.
        """

        if not card_id:
            raise InvalidInputError("cardId is required")

        values = {
            name: value
            for name, value in update.model_dump(include=set(MUTABLE_FIELDS), exclude_unset=True).items()
            if value is not None
        }
        existing = self.store.get(user_id, card_id)
        if existing is None:
            if not update.deck_id:
                raise InvalidInputError("deckId is required", {"cardId": card_id})
            self.store.insert(
                user_id, card_id, update.deck_id, {**default_values(self._now(now)), **values}
            )
            logger.info(f"Created progress for user {user_id} card {card_id} in deck {update.deck_id}")
        else:
            self.store.update(existing, values)
            logger.info(f"Updated progress for user {user_id} card {card_id}")

        stored = self.store.get(user_id, card_id)
        if stored is None:
            raise NotFoundError("Card progress not found after write", {"cardId": card_id})
        return ReviewState.from_row(stored)

    def batch_upsert_card_progress(
        self, *, user_id: uuid.UUID, updates: Any, now: datetime | None = None
    ) -> BatchResult:
        """Apply each entry independently; failed or skipped entries do not stop the rest."""

        if not isinstance(updates, Sequence) or isinstance(updates, (str, bytes)):
            raise InvalidInputError("progressUpdates array is required")

        result = BatchResult()
        for raw in updates:
            card_id = raw.get("cardId", raw.get("card_id")) if isinstance(raw, dict) else None
            card_id = str(card_id) if card_id is not None else None
            try:
                entry = BatchProgressEntry.model_validate(raw)
            except ValidationError as exc:
                logger.warning(f"Skipping malformed batch entry for user {user_id}: {exc.error_count()} errors")
                result.results.append({"card_id": card_id, "success": False, "error": "Invalid entry"})
                continue

            if not entry.card_id or not entry.deck_id:
                logger.warning(f"Skipping batch entry without cardId/deckId for user {user_id}")
                result.results.append(
                    {"card_id": entry.card_id, "success": False, "error": "cardId and deckId are required"}
                )
                continue

            try:
                self.upsert_card_progress(user_id=user_id, card_id=entry.card_id, update=entry, now=now)
            except CodeLangException as exc:
                logger.warning(f"Batch entry {entry.card_id} failed for user {user_id}: {exc.message}")
                result.results.append({"card_id": entry.card_id, "success": False, "error": exc.message})
                continue

            result.updated_count += 1
            result.results.append({"card_id": entry.card_id, "success": True, "error": None})

        logger.info(f"Batch progress for user {user_id}: {result.updated_count}/{len(updates)} applied")
        return result

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    def get_deck_stats(
        self,
        *,
        user_id: uuid.UUID,
        deck_id: str,
        total_cards_in_deck: int = 0,
        now: datetime | None = None,
    ) -> DeckStats:
        """Count tracked cards per stage and due cards; untracked cards count as new."""

        now = self._now(now)
        rows = self.store.find(user_id, deck_id=deck_id)
        stats = DeckStats()
        buckets = {
            ReviewStatus.NEW.value: "new_count",
            ReviewStatus.LEARNING.value: "learning_count",
            ReviewStatus.REVIEWING.value: "reviewing_count",
            ReviewStatus.MASTERED.value: "mastered_count",
        }
        for row in rows:
            bucket = buckets.get(row.status or ReviewStatus.NEW.value)
            if bucket is not None:
                setattr(stats, bucket, getattr(stats, bucket) + 1)
            if is_due(row.next_review_date, now):
                stats.due_for_review_count += 1

        stats.new_count += max(0, (total_cards_in_deck or 0) - len(rows))
        return stats

    def count_learned(self, *, user_id: uuid.UUID) -> int:
        """Number of tracked cards that moved past the ``new`` stage."""

        return self.store.count(user_id, exclude_status=ReviewStatus.NEW.value)
