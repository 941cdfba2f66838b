"""Database session and engine management."""
from __future__ import annotations

from typing import Any

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from codelang.config import settings


def engine_options(database_url: str) -> dict[str, Any]:
    """Return pool settings suited to the backend behind ``database_url``."""

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "poolclass": QueuePool,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT_SECONDS,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
    }


def build_engine(database_url: str | None = None) -> Engine:
    """Create an engine for the configured (or supplied) database URL."""

    url = database_url or settings.DATABASE_URL
    return create_engine(url, echo=settings.DEBUG, **engine_options(url))


engine = build_engine()

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Keep objects usable after commit
)


def dispose_engine() -> None:
    """Close every pooled connection; called once on process shutdown."""

    logger.info("Disposing database engine")
    engine.dispose()
