"""Exercise and course browsing endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from codelang.api.deps import get_content_service
from codelang.schemas import (
    CourseRead,
    ExerciseItem,
    ExerciseSetDetail,
    ExerciseSetRead,
    FillBlankExerciseRead,
    MultipleChoiceExerciseRead,
    ReorderExerciseRead,
)
from codelang.services.content import ContentService
from codelang.utils.cache import build_cache_key, cache_backend

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("/reorder", response_model=list[ReorderExerciseRead])
def list_reorder_exercises(service: ContentService = Depends(get_content_service)) -> Any:
    return cache_backend.get_or_set(
        "exercises:reorder", build_cache_key(), lambda: service.list_exercises("reorder")
    )


@router.get("/multiple-choice", response_model=list[MultipleChoiceExerciseRead])
def list_multiple_choice_exercises(service: ContentService = Depends(get_content_service)) -> Any:
    return cache_backend.get_or_set(
        "exercises:multiple_choice",
        build_cache_key(),
        lambda: service.list_exercises("multiple_choice"),
    )


@router.get("/multiple-choice/{practice_type}", response_model=list[MultipleChoiceExerciseRead])
def list_multiple_choice_by_type(
    practice_type: str, service: ContentService = Depends(get_content_service)
) -> Any:
    """Return multiple-choice exercises of one practice type."""

    return cache_backend.get_or_set(
        "exercises:multiple_choice",
        build_cache_key(practice_type=practice_type),
        lambda: service.list_exercises("multiple_choice", practice_type=practice_type),
    )


@router.get("/fill-blank", response_model=list[FillBlankExerciseRead])
def list_fill_blank_exercises(service: ContentService = Depends(get_content_service)) -> Any:
    return cache_backend.get_or_set(
        "exercises:fill_blank", build_cache_key(), lambda: service.list_exercises("fill_blank")
    )


@router.get("/sets", response_model=list[ExerciseSetRead])
def list_exercise_sets(service: ContentService = Depends(get_content_service)) -> Any:
    return cache_backend.get_or_set(
        "exercises:sets",
        build_cache_key(),
        lambda: [
            ExerciseSetRead.model_validate(item).model_dump(mode="json", by_alias=True)
            for item in service.list_exercise_sets()
        ],
    )


@router.get("/sets/{set_id}", response_model=ExerciseSetDetail)
def get_exercise_set(set_id: str, service: ContentService = Depends(get_content_service)) -> Any:
    """Return an exercise set with its exercises resolved."""

    return cache_backend.get_or_set(
        "exercises:set", build_cache_key(set_id=set_id), lambda: service.get_exercise_set(set_id)
    )


@router.get("/courses", response_model=list[CourseRead])
def list_courses(service: ContentService = Depends(get_content_service)) -> Any:
    """Return every exercise set as a playable course."""

    return cache_backend.get_or_set("exercises:courses", build_cache_key(), service.list_courses)


@router.get("/random", response_model=list[ExerciseItem])
def random_exercises(
    count: int = Query(default=10, ge=1, le=100),
    service: ContentService = Depends(get_content_service),
) -> Any:
    """Return a shuffled selection of exercises of every kind."""

    return service.random_exercises(count)
