"""Tests for the catalogue seeding script."""
from __future__ import annotations

import importlib.util
from pathlib import Path

from codelang.db.models.content import ExerciseSet, FlashCard, FlashCardDeck, MultipleChoiceExercise

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "seed_content.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("seed_content", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


CATALOGUE = {
    "flashcards": [
        {"flashCardId": "fc-1", "word": "hola", "translation": "hello"},
        {"flashCardId": "fc-2", "word": "gato", "translation": "cat", "imageUrl": "cat.png"},
    ],
    "decks": [{"deckId": "basics", "name": "Basics", "cardIds": ["fc-1", "fc-2"]}],
    "multipleChoice": [
        {"practiceType": "vocabulary", "question": "Cat?", "options": ["gato", "perro"], "correctAnswer": "gato"}
    ],
    "sets": [{"setId": "s1", "name": "Set 1", "exercises": [{"type": "multiple_choice", "index": 0}]}],
}


def test_load_catalogue_is_repeatable(db_session) -> None:
    seed = _load_script()

    first = seed.load_catalogue(db_session, CATALOGUE)
    second = seed.load_catalogue(db_session, CATALOGUE)

    assert first == {"flashcards": 2, "decks": 1, "exercises": 1, "sets": 1}
    assert second == {"flashcards": 0, "decks": 0, "exercises": 0, "sets": 0}
    assert db_session.query(FlashCard).count() == 2
    assert db_session.query(FlashCardDeck).one().card_ids == ["fc-1", "fc-2"]
    assert db_session.query(MultipleChoiceExercise).one().correct_answer == "gato"
    assert db_session.query(ExerciseSet).one().exercises == [{"type": "multiple_choice", "index": 0}]
