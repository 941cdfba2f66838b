"""Learner profile endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from codelang.api.deps import get_current_user_id, get_user_service
from codelang.schemas import CourseCompletion, NameUpdate, UserRead
from codelang.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Return the authenticated learner's profile."""

    user = service.get(user_id)
    return UserRead.model_validate(service.profile(user))


@router.put("/name", response_model=UserRead)
def update_name(
    payload: NameUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Rename the authenticated learner."""

    user = service.update_name(service.get(user_id), payload.name)
    return UserRead.model_validate(service.profile(user))


@router.post("/streak", response_model=UserRead)
def complete_streak(
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Mark today's practice as done."""

    user = service.complete_streak(service.get(user_id))
    return UserRead.model_validate(service.profile(user))


@router.post("/complete-course", response_model=UserRead)
def complete_course(
    payload: CourseCompletion,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Add a course to the learner's completed list."""

    user = service.complete_course(service.get(user_id), payload.course_id)
    return UserRead.model_validate(service.profile(user))
