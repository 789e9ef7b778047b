"""FastAPI dependency injection definitions.

Re-exports all dependencies.
"""

# Auth
from src.sitt.api.dependencies.auth import CurrentOwner, get_current_owner

# Database
from src.sitt.api.dependencies.db import SessionFactory, get_db_session_factory

# Repositories
from src.sitt.api.dependencies.repositories import UserRepo, get_user_repository

# Services
from src.sitt.api.dependencies.services import (
    ProjectServiceDep,
    Services,
    TimeTrackServiceDep,
    get_project_service,
    get_services,
    get_time_track_service,
)

__all__ = [
    # Auth
    "CurrentOwner",
    "get_current_owner",
    # Database
    "SessionFactory",
    "get_db_session_factory",
    # Repositories
    "UserRepo",
    "get_user_repository",
    # Services
    "ProjectServiceDep",
    "Services",
    "TimeTrackServiceDep",
    "get_project_service",
    "get_services",
    "get_time_track_service",
]
