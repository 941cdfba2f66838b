"""FastAPI application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from codelang.api.v1.api import api_router
from codelang.config import settings
from codelang.db.session import dispose_engine
from codelang.utils.exceptions import EXCEPTION_HANDLERS


tags_metadata: List[dict[str, str]] = [
    {"name": "users", "description": "Learner profile, streaks and completed courses."},
    {"name": "progress", "description": "Per-card spaced-repetition state and deck statistics."},
    {"name": "flashcards", "description": "Browse flashcards and decks."},
    {"name": "exercises", "description": "Browse exercises, exercise sets and courses."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"Starting {settings.PROJECT_NAME}")
    yield
    dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Flashcards, exercises and review progress for language learners.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_errors(exc), "message": "Validation failed"},
        )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context (e.g. raised exceptions) from validation errors."""

    return [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]


app = create_app()
