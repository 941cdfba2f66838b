"""Service layer package."""

from codelang.services.content import ContentService
from codelang.services.progress import ProgressTracker
from codelang.services.progress_store import ProgressStore, SQLAlchemyProgressStore
from codelang.services.users import UserService

__all__ = [
    "ContentService",
    "ProgressStore",
    "ProgressTracker",
    "SQLAlchemyProgressStore",
    "UserService",
]
