"""Database session factory dependency."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.sitt.core.db import get_session_factory


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory the repositories open their per-call sessions from."""
    return get_session_factory()


SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_db_session_factory)]
