"""Database models package."""
from codelang.db.models.user import User
from codelang.db.models.progress import UserFlashcardProgress
from codelang.db.models.content import (
    ExerciseSet,
    FillBlankExercise,
    FlashCard,
    FlashCardDeck,
    MultipleChoiceExercise,
    ReorderExercise,
)

__all__ = [
    "User",
    "UserFlashcardProgress",
    "FlashCard",
    "FlashCardDeck",
    "ReorderExercise",
    "MultipleChoiceExercise",
    "FillBlankExercise",
    "ExerciseSet",
]
