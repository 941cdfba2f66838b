"""Endpoints for learner flashcard review progress."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from codelang.api.deps import get_current_user_id, get_progress_tracker
from codelang.schemas import (
    BatchProgressRequest,
    BatchProgressResponse,
    DeckStatsRead,
    ProgressUpdate,
    ReviewStateRead,
)
from codelang.services.progress import ProgressTracker


router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/card/{card_id}", response_model=ReviewStateRead)
def get_card_progress(
    *,
    card_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> ReviewStateRead:
    """Return the learner's state for a card, or the initial state if never reviewed."""

    state = tracker.get_card_progress(user_id=user_id, card_id=card_id)
    return ReviewStateRead.model_validate(state)


@router.put("/card/{card_id}", response_model=ReviewStateRead)
def update_card_progress(
    *,
    card_id: str,
    payload: ProgressUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> ReviewStateRead:
    """Store the client's review outcome for a card."""

    state = tracker.upsert_card_progress(user_id=user_id, card_id=card_id, update=payload)
    return ReviewStateRead.model_validate(state)


@router.get("/stats/{deck_id}", response_model=DeckStatsRead)
def get_deck_stats(
    *,
    deck_id: str,
    total_cards: int = Query(0, alias="totalCards", ge=0, description="Number of cards in the deck"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> DeckStatsRead:
    """Return per-stage and due counts for a deck."""

    stats = tracker.get_deck_stats(user_id=user_id, deck_id=deck_id, total_cards_in_deck=total_cards)
    return DeckStatsRead.model_validate(stats)


@router.post("/batch", response_model=BatchProgressResponse)
def batch_update_progress(
    *,
    payload: BatchProgressRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> BatchProgressResponse:
    """Store several review outcomes; each entry succeeds or fails on its own."""

    result = tracker.batch_upsert_card_progress(user_id=user_id, updates=payload.progress_updates)
    return BatchProgressResponse(updated_count=result.updated_count, results=result.results)


@router.get("/{deck_id}", response_model=list[ReviewStateRead])
def get_deck_progress(
    *,
    deck_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> list[ReviewStateRead]:
    """Return every tracked card of a deck for the learner."""

    states = tracker.get_deck_progress(user_id=user_id, deck_id=deck_id)
    return [ReviewStateRead.model_validate(state) for state in states]
