"""Pydantic models for flashcard review progress endpoints."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from codelang.schemas.common import CamelModel


class ProgressUpdate(CamelModel):
    """Review outcome computed by the client's spaced-repetition algorithm.

    ``deck_id`` is only required when the card has never been tracked.
    Omitted scheduling fields keep their stored value.
    """

    deck_id: Optional[str] = Field(default=None, max_length=100)
    status: Optional[str] = Field(default=None, max_length=20)
    repetitions: Optional[int] = Field(default=None, ge=0)
    ease_factor: Optional[float] = Field(default=None, gt=0)
    interval_days: Optional[int] = Field(default=None, ge=0)
    next_review_date: Optional[datetime] = None
    last_review_date: Optional[datetime] = None


class BatchProgressEntry(ProgressUpdate):
    """One entry of a batch upload; carries its own card identifier."""

    card_id: Optional[str] = Field(default=None, max_length=100)

    @field_validator("card_id", "deck_id", mode="before")
    @classmethod
    def numeric_ids_as_text(cls, value: Any) -> Any:
        """Offline clients may send numeric identifiers."""

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class BatchProgressRequest(CamelModel):
    """Batch upload body; entries are validated one by one by the tracker."""

    progress_updates: Any = None


class ReviewStateRead(CamelModel):
    """Stored or synthesized review state of a card."""

    user_id: uuid.UUID
    deck_id: Optional[str] = None
    card_id: str
    status: str
    repetitions: int
    ease_factor: float
    interval_days: int
    next_review_date: datetime
    last_review_date: datetime


class BatchEntryResult(CamelModel):
    """Outcome of a single batch entry."""

    card_id: Optional[str] = None
    success: bool
    error: Optional[str] = None


class BatchProgressResponse(CamelModel):
    """Summary of a batch upload."""

    updated_count: int
    results: list[BatchEntryResult]


class DeckStatsRead(CamelModel):
    """Per-status card counts for one deck."""

    new_count: int
    learning_count: int
    reviewing_count: int
    mastered_count: int
    due_for_review_count: int
