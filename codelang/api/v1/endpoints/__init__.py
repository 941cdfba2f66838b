"""API endpoint modules for v1."""

from codelang.api.v1.endpoints import exercises, flashcards, progress, users

__all__ = ["exercises", "flashcards", "progress", "users"]
