"""API router for version 1."""
from fastapi import APIRouter

from codelang.api.v1.endpoints import exercises, flashcards, progress, users


api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(progress.router)
api_router.include_router(flashcards.router)
api_router.include_router(exercises.router)
