"""Base repository with common CRUD operations."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from src.sitt.repositories.errors import DuplicateEntityError, StoreError

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Every public method is one independent store call: it opens its own
    session and commits before returning, so no two calls ever share a
    transaction. SQLAlchemy errors leave this layer as StoreError.
    """

    model: type[ModelType]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @property
    def table_name(self) -> str:
        return str(self.model.__tablename__)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Open a short-lived session, translating driver errors."""
        async with self.session_factory() as session:
            try:
                yield session
            except IntegrityError as e:
                raise DuplicateEntityError(f"{self.table_name}: {e.orig}") from e
            except SQLAlchemyError as e:
                raise StoreError(f"{self.table_name}: {e}") from e

    async def add(self, entity: ModelType) -> ModelType:
        """Insert an entity and commit."""
        async with self.session() as session:
            session.add(entity)
            await session.commit()
        return entity
