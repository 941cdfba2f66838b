"""Static learning content: flashcards, decks and exercises."""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.types import JSON

from codelang.db.base import Base
from codelang.db.types import StringList


class FlashCard(Base):
    """A single vocabulary flashcard."""

    __tablename__ = "flash_cards"

    id = Column(Integer, primary_key=True)
    flash_card_id = Column(String(100), unique=True, nullable=False, index=True)
    word = Column(String(255), nullable=False)
    translation = Column(Text, nullable=False)
    pronunciation = Column(String(255))
    example = Column(Text)
    example_translation = Column(Text)
    image_url = Column(String(1024))


class FlashCardDeck(Base):
    """An ordered group of flashcards."""

    __tablename__ = "flash_card_decks"

    id = Column(Integer, primary_key=True)
    deck_id = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    card_ids = Column(StringList, default=list)


class ReorderExercise(Base):
    """Put the shuffled words back into sentence order."""

    __tablename__ = "reorder_exercises"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False, unique=True)
    sentence = Column(Text, nullable=False)
    words = Column(StringList, default=list)
    translation = Column(Text)


class MultipleChoiceExercise(Base):
    """Pick the correct option for a prompt."""

    __tablename__ = "multiple_choice_exercises"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False, unique=True)
    practice_type = Column(String(50), nullable=False, index=True)
    question = Column(Text, nullable=False)
    options = Column(StringList, default=list)
    correct_answer = Column(Text, nullable=False)
    explanation = Column(Text)


class FillBlankExercise(Base):
    """Complete the sentence with the missing word."""

    __tablename__ = "fill_blank_exercises"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False, unique=True)
    sentence = Column(Text, nullable=False)
    answer = Column(String(255), nullable=False)
    hint = Column(Text)


class ExerciseSet(Base):
    """A named course referencing exercises by kind and position."""

    __tablename__ = "exercise_sets"

    id = Column(Integer, primary_key=True)
    set_id = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    # [{"type": "reorder", "index": 0}, ...]
    exercises = Column(JSON, default=list)
