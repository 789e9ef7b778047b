"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.sitt.api.dependencies.db import SessionFactory
from src.sitt.repositories import UserRepository


def get_user_repository(session_factory: SessionFactory) -> UserRepository:
    """Get user repository for owner lookup."""
    return UserRepository(session_factory)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
