"""Pytest fixtures for API and service tests."""

import os
import uuid
from collections.abc import AsyncGenerator, Generator

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from codelang.api.deps import get_db
from codelang.core.security import create_access_token
from codelang.db import models  # noqa: F401  # Imported for side effects
from codelang.db.base import Base
from codelang.db.models import User
from codelang.main import create_app
from codelang.services.progress import ProgressTracker
from codelang.services.progress_store import SQLAlchemyProgressStore
from codelang.utils.cache import cache_backend


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def clear_cache() -> Generator[None, None, None]:
    cache_backend.clear()
    try:
        yield
    finally:
        cache_backend.clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def async_client(db_session: Session) -> AsyncGenerator["httpx.AsyncClient", None]:
    import httpx

    app = create_app()

    async def override_get_db() -> AsyncGenerator[Session, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def learner(db_session: Session) -> User:
    user = User(id=uuid.uuid4(), email="learner@example.com", name="Learner")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def auth_headers(learner: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(learner.id)}"}


@pytest.fixture()
def tracker(db_session: Session) -> ProgressTracker:
    return ProgressTracker(SQLAlchemyProgressStore(db_session))
