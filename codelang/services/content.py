"""Read-only access to flashcards, decks and exercises."""
from __future__ import annotations

import random
from typing import Any, Iterable

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from codelang.db.models.content import (
    ExerciseSet,
    FillBlankExercise,
    FlashCard,
    FlashCardDeck,
    MultipleChoiceExercise,
    ReorderExercise,
)
from codelang.schemas.content import (
    FillBlankExerciseRead,
    FlashCardRead,
    MultipleChoiceExerciseRead,
    ReorderExerciseRead,
)
from codelang.utils.exceptions import InvalidInputError, NotFoundError, StoreUnavailableError


# Exercise kind -> (model, schema, id prefix inside a set)
EXERCISE_KINDS: dict[str, tuple[type, type, str]] = {
    "reorder": (ReorderExercise, ReorderExerciseRead, "reorder"),
    "multiple_choice": (MultipleChoiceExercise, MultipleChoiceExerciseRead, "mc"),
    "fill_blank": (FillBlankExercise, FillBlankExerciseRead, "fb"),
}


def _dump(schema: type, rows: Iterable[Any]) -> list[dict[str, Any]]:
    return [schema.model_validate(row).model_dump(mode="json", by_alias=True) for row in rows]


class ContentService:
    """Provide querying utilities for the static learning catalogue."""

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, exc: SQLAlchemyError, message: str) -> StoreUnavailableError:
        self.db.rollback()
        logger.error(f"Content query failed: {exc}")
        return StoreUnavailableError(message)

    def _scalars(self, stmt) -> list[Any]:
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as exc:
            raise self._fail(exc, "Could not read learning content") from exc

    # ------------------------------------------------------------------
    # Flashcards
    # ------------------------------------------------------------------
    def list_flashcards(self, *, page: int, limit: int) -> list[dict[str, Any]]:
        """Return one page of flashcards in insertion order."""

        stmt = select(FlashCard).order_by(FlashCard.id).offset(page * limit).limit(limit)
        return _dump(FlashCardRead, self._scalars(stmt))

    def count_flashcards(self) -> int:
        try:
            return int(self.db.scalar(select(func.count()).select_from(FlashCard)) or 0)
        except SQLAlchemyError as exc:
            raise self._fail(exc, "Could not count flashcards") from exc

    def get_flashcard(self, flash_card_id: str) -> dict[str, Any]:
        stmt = select(FlashCard).where(FlashCard.flash_card_id == flash_card_id)
        rows = self._scalars(stmt.limit(1))
        if not rows:
            raise NotFoundError("Flashcard not found", {"flashCardId": flash_card_id})
        return _dump(FlashCardRead, rows)[0]

    def get_flashcards_by_ids(self, ids: Any) -> list[dict[str, Any]]:
        """Return the flashcards whose identifiers appear in ``ids``."""

        if not isinstance(ids, list):
            raise InvalidInputError("ids array is required")
        if not ids:
            return []
        stmt = select(FlashCard).where(FlashCard.flash_card_id.in_([str(i) for i in ids]))
        return _dump(FlashCardRead, self._scalars(stmt.order_by(FlashCard.id)))

    # ------------------------------------------------------------------
    # Decks
    # ------------------------------------------------------------------
    def list_decks(self) -> list[FlashCardDeck]:
        return self._scalars(select(FlashCardDeck).order_by(FlashCardDeck.id))

    def get_deck(self, deck_id: str) -> FlashCardDeck:
        rows = self._scalars(select(FlashCardDeck).where(FlashCardDeck.deck_id == deck_id).limit(1))
        if not rows:
            raise NotFoundError("Deck not found", {"deckId": deck_id})
        return rows[0]

    def get_deck_cards(self, deck: FlashCardDeck) -> list[dict[str, Any]]:
        """Return the deck's cards following the order of ``card_ids``."""

        card_ids = list(deck.card_ids or [])
        if not card_ids:
            return []
        cards = self._scalars(select(FlashCard).where(FlashCard.flash_card_id.in_(card_ids)))
        by_id = {card.flash_card_id: card for card in cards}
        return _dump(FlashCardRead, [by_id[cid] for cid in card_ids if cid in by_id])

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------
    def list_exercises(self, kind: str, *, practice_type: str | None = None) -> list[dict[str, Any]]:
        """Return every exercise of ``kind`` ordered by position."""

        model, schema, _ = EXERCISE_KINDS[kind]
        stmt = select(model).order_by(model.position)
        if practice_type is not None:
            stmt = stmt.where(MultipleChoiceExercise.practice_type == practice_type)
        return _dump(schema, self._scalars(stmt))

    def _all_exercises(self) -> dict[str, list[dict[str, Any]]]:
        return {kind: self.list_exercises(kind) for kind in EXERCISE_KINDS}

    def list_exercise_sets(self) -> list[ExerciseSet]:
        return self._scalars(select(ExerciseSet).order_by(ExerciseSet.id))

    @staticmethod
    def resolve_exercises(
        set_id: str, refs: list[dict[str, Any]] | None, pool: dict[str, list[dict[str, Any]]]
    ) -> list[dict[str, Any]]:
        """Turn ``{type, index}`` references into playable exercises.

        References of unknown type or pointing past the end of their kind
        are dropped; the position ``i`` in the id is the reference's own.
        """

        exercises: list[dict[str, Any]] = []
        for i, ref in enumerate(refs or []):
            kind = ref.get("type")
            index = ref.get("index")
            if kind not in EXERCISE_KINDS or not isinstance(index, int) or index < 0:
                continue
            data = pool[kind]
            if index >= len(data):
                continue
            prefix = EXERCISE_KINDS[kind][2]
            exercises.append({"id": f"{set_id}_{prefix}_{i}", "type": kind, "data": data[index]})
        return exercises

    def get_exercise_set(self, set_id: str) -> dict[str, Any]:
        rows = self._scalars(select(ExerciseSet).where(ExerciseSet.set_id == set_id).limit(1))
        if not rows:
            raise NotFoundError("Exercise set not found", {"setId": set_id})
        exercise_set = rows[0]
        return {
            "setId": exercise_set.set_id,
            "name": exercise_set.name,
            "exercises": self.resolve_exercises(
                exercise_set.set_id, exercise_set.exercises, self._all_exercises()
            ),
        }

    def list_courses(self) -> list[dict[str, Any]]:
        """Return every exercise set with its exercises resolved."""

        pool = self._all_exercises()
        return [
            {
                "id": exercise_set.set_id,
                "name": exercise_set.name,
                "exercises": self.resolve_exercises(exercise_set.set_id, exercise_set.exercises, pool),
            }
            for exercise_set in self.list_exercise_sets()
        ]

    def random_exercises(self, count: int, *, rng: random.Random | None = None) -> list[dict[str, Any]]:
        """Return up to ``count`` exercises drawn from every kind."""

        pool = self._all_exercises()
        exercises = [
            {"id": f"{kind}_{index}", "type": kind, "data": data}
            for kind, items in pool.items()
            for index, data in enumerate(items)
        ]
        (rng or random).shuffle(exercises)
        return exercises[:count]
