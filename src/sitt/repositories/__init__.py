"""Repository layer - data access abstraction."""

from src.sitt.repositories.base import BaseRepository
from src.sitt.repositories.errors import DuplicateEntityError, StaleWriteError, StoreError
from src.sitt.repositories.project_repository import ProjectRepository
from src.sitt.repositories.protocols import ProjectStore, TimeTrackStore
from src.sitt.repositories.time_track_repository import TimeTrackRepository
from src.sitt.repositories.user_repository import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Errors
    "DuplicateEntityError",
    "StaleWriteError",
    "StoreError",
    # Contracts
    "ProjectStore",
    "TimeTrackStore",
    # SQL stores
    "ProjectRepository",
    "TimeTrackRepository",
    "UserRepository",
]
