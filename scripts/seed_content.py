"""Seed flashcards, decks and exercises from a JSON catalogue file.

Expected layout::

    {
      "flashcards": [{"flashCardId": "...", "word": "...", "translation": "..."}],
      "decks": [{"deckId": "...", "name": "...", "cardIds": ["..."]}],
      "reorder": [{"sentence": "...", "words": ["..."]}],
      "multipleChoice": [{"practiceType": "...", "question": "...", "options": [], "correctAnswer": "..."}],
      "fillBlank": [{"sentence": "...", "answer": "..."}],
      "sets": [{"setId": "...", "name": "...", "exercises": [{"type": "reorder", "index": 0}]}]
    }

Existing rows (matched by identifier or position) are left untouched.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

sys.path.append(str(Path(__file__).resolve().parent.parent))

from codelang.db.models.content import (
    ExerciseSet,
    FillBlankExercise,
    FlashCard,
    FlashCardDeck,
    MultipleChoiceExercise,
    ReorderExercise,
)
from codelang.db.session import SessionLocal


def _exists(db: Session, column, value: Any) -> bool:
    return db.scalars(select(column).where(column == value).limit(1)).first() is not None


def load_catalogue(db: Session, catalogue: dict[str, Any]) -> dict[str, int]:
    """Insert catalogue entries that are not stored yet and return per-kind counts."""

    loaded = {"flashcards": 0, "decks": 0, "exercises": 0, "sets": 0}

    for item in catalogue.get("flashcards", []):
        if _exists(db, FlashCard.flash_card_id, item["flashCardId"]):
            continue
        db.add(
            FlashCard(
                flash_card_id=item["flashCardId"],
                word=item["word"],
                translation=item["translation"],
                pronunciation=item.get("pronunciation"),
                example=item.get("example"),
                example_translation=item.get("exampleTranslation"),
                image_url=item.get("imageUrl"),
            )
        )
        loaded["flashcards"] += 1

    for item in catalogue.get("decks", []):
        if _exists(db, FlashCardDeck.deck_id, item["deckId"]):
            continue
        db.add(
            FlashCardDeck(
                deck_id=item["deckId"],
                name=item["name"],
                description=item.get("description"),
                card_ids=item.get("cardIds", []),
            )
        )
        loaded["decks"] += 1

    for position, item in enumerate(catalogue.get("reorder", [])):
        if _exists(db, ReorderExercise.position, position):
            continue
        db.add(
            ReorderExercise(
                position=position,
                sentence=item["sentence"],
                words=item.get("words", []),
                translation=item.get("translation"),
            )
        )
        loaded["exercises"] += 1

    for position, item in enumerate(catalogue.get("multipleChoice", [])):
        if _exists(db, MultipleChoiceExercise.position, position):
            continue
        db.add(
            MultipleChoiceExercise(
                position=position,
                practice_type=item["practiceType"],
                question=item["question"],
                options=item.get("options", []),
                correct_answer=item["correctAnswer"],
                explanation=item.get("explanation"),
            )
        )
        loaded["exercises"] += 1

    for position, item in enumerate(catalogue.get("fillBlank", [])):
        if _exists(db, FillBlankExercise.position, position):
            continue
        db.add(
            FillBlankExercise(
                position=position,
                sentence=item["sentence"],
                answer=item["answer"],
                hint=item.get("hint"),
            )
        )
        loaded["exercises"] += 1

    for item in catalogue.get("sets", []):
        if _exists(db, ExerciseSet.set_id, item["setId"]):
            continue
        db.add(ExerciseSet(set_id=item["setId"], name=item["name"], exercises=item.get("exercises", [])))
        loaded["sets"] += 1

    db.commit()
    return loaded


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the learning catalogue")
    parser.add_argument("path", type=Path, help="JSON catalogue file")
    args = parser.parse_args()

    catalogue = json.loads(args.path.read_text(encoding="utf-8"))
    db = SessionLocal()
    try:
        loaded = load_catalogue(db, catalogue)
    except Exception:
        db.rollback()
        logger.exception("Error loading catalogue")
        raise
    finally:
        db.close()
    logger.info(f"Catalogue loaded: {loaded}")


if __name__ == "__main__":
    main()
