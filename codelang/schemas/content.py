"""Pydantic schemas for flashcard and exercise catalogue endpoints."""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from codelang.schemas.common import CamelModel


ExerciseType = Literal["reorder", "multiple_choice", "fill_blank"]


class FlashCardRead(CamelModel):
    """Representation of a flashcard."""

    flash_card_id: str
    word: str
    translation: str
    pronunciation: Optional[str] = None
    example: Optional[str] = None
    example_translation: Optional[str] = None
    image_url: Optional[str] = None


class FlashCardCount(BaseModel):
    """Total number of flashcards."""

    count: int


class FlashCardIdsRequest(BaseModel):
    """Body for looking up several flashcards at once."""

    ids: Any = None


class DeckRead(CamelModel):
    """Flashcard deck without its cards."""

    deck_id: str
    name: str
    description: Optional[str] = None
    card_ids: list[str] = Field(default_factory=list)


class DeckDetail(DeckRead):
    """Flashcard deck with its cards in deck order."""

    cards: list[FlashCardRead] = Field(default_factory=list)


class ReorderExerciseRead(CamelModel):
    sentence: str
    words: list[str] = Field(default_factory=list)
    translation: Optional[str] = None


class MultipleChoiceExerciseRead(CamelModel):
    practice_type: str
    question: str
    options: list[str] = Field(default_factory=list)
    correct_answer: str
    explanation: Optional[str] = None


class FillBlankExerciseRead(CamelModel):
    sentence: str
    answer: str
    hint: Optional[str] = None


class ExerciseRef(BaseModel):
    """Pointer from an exercise set to an exercise of a given kind."""

    type: str
    index: int = Field(ge=0)


class ExerciseItem(BaseModel):
    """Resolved exercise ready to be played."""

    id: str
    type: ExerciseType
    data: dict[str, Any]


class ExerciseSetRead(CamelModel):
    """Exercise set with unresolved references."""

    set_id: str
    name: str
    exercises: list[ExerciseRef] = Field(default_factory=list)


class ExerciseSetDetail(CamelModel):
    """Exercise set with resolved exercises."""

    set_id: str
    name: str
    exercises: list[ExerciseItem]


class CourseRead(BaseModel):
    """Course entry: an exercise set keyed by its identifier."""

    id: str
    name: str
    exercises: list[ExerciseItem]
