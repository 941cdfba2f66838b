"""Flashcard and deck browsing endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from codelang.api.deps import get_content_service
from codelang.schemas import (
    DeckDetail,
    DeckRead,
    FlashCardCount,
    FlashCardIdsRequest,
    FlashCardRead,
)
from codelang.services.content import ContentService
from codelang.utils.cache import build_cache_key, cache_backend

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


@router.get("/", response_model=list[FlashCardRead])
def list_flashcards(
    page: int = Query(default=0, ge=0),
    limit: int = Query(default=5, ge=1, le=100),
    service: ContentService = Depends(get_content_service),
) -> Any:
    """Return one page of flashcards."""

    return cache_backend.get_or_set(
        "flashcards:list",
        build_cache_key(page=page, limit=limit),
        lambda: service.list_flashcards(page=page, limit=limit),
    )


@router.get("/count", response_model=FlashCardCount)
def count_flashcards(service: ContentService = Depends(get_content_service)) -> FlashCardCount:
    """Return the total number of flashcards."""

    return FlashCardCount(count=service.count_flashcards())


@router.get("/decks", response_model=list[DeckRead])
def list_decks(service: ContentService = Depends(get_content_service)) -> Any:
    """Return all flashcard decks."""

    return cache_backend.get_or_set(
        "flashcards:decks",
        build_cache_key(scope="all"),
        lambda: [
            DeckRead.model_validate(deck).model_dump(mode="json", by_alias=True)
            for deck in service.list_decks()
        ],
    )


@router.get("/decks/{deck_id}", response_model=DeckDetail)
def get_deck(deck_id: str, service: ContentService = Depends(get_content_service)) -> Any:
    """Return a deck together with its cards in deck order."""

    def load() -> dict[str, Any]:
        deck = service.get_deck(deck_id)
        payload = DeckRead.model_validate(deck).model_dump(mode="json", by_alias=True)
        payload["cards"] = service.get_deck_cards(deck)
        return payload

    return cache_backend.get_or_set("flashcards:deck", build_cache_key(deck_id=deck_id), load)


@router.post("/by-ids", response_model=list[FlashCardRead])
def get_flashcards_by_ids(
    payload: FlashCardIdsRequest, service: ContentService = Depends(get_content_service)
) -> Any:
    """Return the flashcards matching the supplied identifiers."""

    return service.get_flashcards_by_ids(payload.ids)


@router.get("/{flash_card_id}", response_model=FlashCardRead)
def get_flashcard(flash_card_id: str, service: ContentService = Depends(get_content_service)) -> Any:
    """Retrieve a flashcard by identifier."""

    return cache_backend.get_or_set(
        "flashcards:item",
        build_cache_key(flash_card_id=flash_card_id),
        lambda: service.get_flashcard(flash_card_id),
    )
