"""Pydantic models for learner profile endpoints."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from codelang.schemas.common import CamelModel


class UserRead(CamelModel):
    """Profile returned to the authenticated learner."""

    id: uuid.UUID
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    current_streak: int = 0
    completed_course_ids: list[str] = Field(default_factory=list)
    learned_words_count: int = 0
    last_completion_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class NameUpdate(CamelModel):
    """Body for renaming the learner; blank names are rejected by the service."""

    name: Optional[str] = None


class CourseCompletion(CamelModel):
    """Body for marking a course as completed."""

    course_id: Optional[str] = None
