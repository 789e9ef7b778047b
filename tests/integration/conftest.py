"""Integration test fixtures for database, services and HTTP client.

Each test gets its own SQLite database file. Every repository call opens its
own connection (NullPool), the same way separate store calls behave against
PostgreSQL.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.sitt.api.dependencies import get_db_session_factory, get_services
from src.sitt.core.db import create_tables, get_session_factory
from src.sitt.core.shutdown import request_tracker
from src.sitt.main import create_app
from src.sitt.models import Project, User
from src.sitt.repositories import ProjectRepository, TimeTrackRepository, UserRepository
from src.sitt.services import (
    ProjectService,
    TimeTrackService,
    TrackingServices,
    build_tracking_services,
)
from tests.factories import UserFactory
from tests.helpers import FakeClock


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh database with all tables."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'sitt.db'}",
        poolclass=NullPool,
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_session_factory(engine)


@pytest.fixture
def project_repo(session_factory: async_sessionmaker[AsyncSession]) -> ProjectRepository:
    return ProjectRepository(session_factory)


@pytest.fixture
def time_track_repo(session_factory: async_sessionmaker[AsyncSession]) -> TimeTrackRepository:
    return TimeTrackRepository(session_factory)


@pytest.fixture
def user_repo(session_factory: async_sessionmaker[AsyncSession]) -> UserRepository:
    return UserRepository(session_factory)


@pytest.fixture
async def owner(user_repo: UserRepository) -> User:
    return await user_repo.create(UserFactory.build())


@pytest.fixture
async def other_owner(user_repo: UserRepository) -> User:
    return await user_repo.create(UserFactory.build())


@pytest.fixture
async def admin(user_repo: UserRepository) -> User:
    return await user_repo.create(UserFactory.admin())


@pytest.fixture
def services(
    project_repo: ProjectRepository,
    time_track_repo: TimeTrackRepository,
    clock: FakeClock,
) -> TrackingServices:
    return build_tracking_services(project_repo, time_track_repo, clock=clock)


@pytest.fixture
def project_service(services: TrackingServices) -> ProjectService:
    return services.project_service


@pytest.fixture
def time_track_service(services: TrackingServices) -> TimeTrackService:
    return services.time_track_service


@pytest.fixture
async def project(project_service: ProjectService, owner: User) -> Project:
    return await project_service.create(owner, "Website")


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    services: TrackingServices,
) -> FastAPI:
    """App wired to the per-test database and services."""
    app = create_app()
    app.dependency_overrides[get_db_session_factory] = lambda: session_factory
    app.dependency_overrides[get_services] = lambda: services
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    request_tracker.reset()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    request_tracker.reset()
