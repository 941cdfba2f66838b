"""Shared API dependencies."""
from __future__ import annotations

import uuid
from collections.abc import Generator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from codelang.core.security import InvalidTokenError, decode_token
from codelang.db.session import SessionLocal
from codelang.schemas import TokenPayload
from codelang.services.content import ContentService
from codelang.services.progress import ProgressTracker
from codelang.services.progress_store import SQLAlchemyProgressStore
from codelang.services.users import UserService
from codelang.utils.exceptions import AuthenticationError

# Tokens are issued by the account service; this API only verifies them.
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for request lifetime."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> uuid.UUID:
    """Return the learner id carried by the bearer access token."""

    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise InvalidTokenError("Token must be an access token")
        token_data = TokenPayload.model_validate(payload)
    except (InvalidTokenError, ValidationError, ValueError, KeyError) as exc:
        raise AuthenticationError("Could not validate credentials") from exc
    return token_data.sub


def get_progress_tracker(db: Session = Depends(get_db)) -> ProgressTracker:
    """Assemble the tracker around a request-scoped store."""

    return ProgressTracker(SQLAlchemyProgressStore(db))


def get_content_service(db: Session = Depends(get_db)) -> ContentService:
    return ContentService(db)


def get_user_service(
    db: Session = Depends(get_db),
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> UserService:
    return UserService(db, tracker=tracker)

