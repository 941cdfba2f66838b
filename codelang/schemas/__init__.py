"""Pydantic schemas package."""

from codelang.schemas.auth import TokenPayload
from codelang.schemas.content import (
    CourseRead,
    DeckDetail,
    DeckRead,
    ExerciseItem,
    ExerciseSetDetail,
    ExerciseSetRead,
    FillBlankExerciseRead,
    FlashCardCount,
    FlashCardIdsRequest,
    FlashCardRead,
    MultipleChoiceExerciseRead,
    ReorderExerciseRead,
)
from codelang.schemas.progress import (
    BatchEntryResult,
    BatchProgressEntry,
    BatchProgressRequest,
    BatchProgressResponse,
    DeckStatsRead,
    ProgressUpdate,
    ReviewStateRead,
)
from codelang.schemas.user import CourseCompletion, NameUpdate, UserRead

__all__ = [
    "TokenPayload",
    "CourseRead",
    "DeckDetail",
    "DeckRead",
    "ExerciseItem",
    "ExerciseSetDetail",
    "ExerciseSetRead",
    "FillBlankExerciseRead",
    "FlashCardCount",
    "FlashCardIdsRequest",
    "FlashCardRead",
    "MultipleChoiceExerciseRead",
    "ReorderExerciseRead",
    "BatchEntryResult",
    "BatchProgressEntry",
    "BatchProgressRequest",
    "BatchProgressResponse",
    "DeckStatsRead",
    "ProgressUpdate",
    "ReviewStateRead",
    "CourseCompletion",
    "NameUpdate",
    "UserRead",
]
