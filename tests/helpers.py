"""Test doubles for clocks and stores."""

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from uuid import UUID

from src.sitt.models import Project, TimeTrack, User
from src.sitt.repositories import ProjectStore, StaleWriteError, StoreError, TimeTrackStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class ConflictingProjectStore:
    """Delegates to a real store but reports the first ``conflicts`` updates as stale."""

    def __init__(self, inner: ProjectStore, conflicts: int):
        self.inner = inner
        self.conflicts = conflicts
        self.update_calls = 0

    async def create(self, project: Project) -> Project:
        return await self.inner.create(project)

    async def get(self, owner_id: UUID, project_id: UUID) -> Project | None:
        return await self.inner.get(owner_id, project_id)

    async def get_all(self, owner_id: UUID) -> list[Project]:
        return await self.inner.get_all(owner_id)

    async def update(self, project: Project) -> Project | None:
        self.update_calls += 1
        if self.update_calls <= self.conflicts:
            raise StaleWriteError(f"projects: simulated conflict on {project.id}")
        return await self.inner.update(project)

    async def delete(self, owner_id: UUID, project_id: UUID) -> bool:
        return await self.inner.delete(owner_id, project_id)


class FailingTimeTrackStore:
    """Delegates to a real store except for the operations named in ``failing``."""

    def __init__(self, inner: TimeTrackStore, failing: set[str]):
        self.inner = inner
        self.failing = failing

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreError(f"time_tracks: simulated outage during {operation}")

    async def create(self, entry: TimeTrack) -> TimeTrack:
        self._check("create")
        return await self.inner.create(entry)

    async def get(self, project_id: UUID, entry_id: UUID) -> TimeTrack | None:
        self._check("get")
        return await self.inner.get(project_id, entry_id)

    async def get_in_progress(self, owner_id: UUID, project_id: UUID) -> TimeTrack | None:
        self._check("get_in_progress")
        return await self.inner.get_in_progress(owner_id, project_id)

    async def get_all(self, project_id: UUID, owner_id: UUID) -> list[TimeTrack]:
        self._check("get_all")
        return await self.inner.get_all(project_id, owner_id)

    async def update(self, entry, expected_status=None, expected_interval=None):
        self._check("update")
        return await self.inner.update(entry, expected_status, expected_interval)

    async def delete(self, owner_id: UUID, project_id: UUID, entry_id: UUID) -> TimeTrack | None:
        self._check("delete")
        return await self.inner.delete(owner_id, project_id, entry_id)

    async def delete_for_project(self, project_id: UUID) -> int:
        self._check("delete_for_project")
        return await self.inner.delete_for_project(project_id)


class UnavailableProjectStore:
    """Every call fails as if the database were down."""

    async def _fail(self, *args, **kwargs):
        raise StoreError("projects: connection refused")

    create = get = get_all = update = delete = _fail


def auth_headers(user: User) -> dict[str, str]:
    return {"X-API-Key": user.api_key}


class InterleavedProjectStore(ConflictingProjectStore):
    """Runs ``competing_write`` just before the first project update reaches the store.

    Stands in for another process whose write lands between a service's read
    and its conditional write.
    """

    def __init__(self, inner: ProjectStore, competing_write: Callable[[], Awaitable[None]]):
        super().__init__(inner, conflicts=0)
        self.competing_write = competing_write

    async def update(self, project: Project) -> Project | None:
        self.update_calls += 1
        if self.update_calls == 1:
            await self.competing_write()
        return await self.inner.update(project)


class InterleavedTimeTrackStore(FailingTimeTrackStore):
    """Runs ``competing_write`` just before the first entry update reaches the store."""

    def __init__(self, inner: TimeTrackStore, competing_write: Callable[[], Awaitable[None]]):
        super().__init__(inner, failing=set())
        self.competing_write = competing_write
        self.update_calls = 0

    async def update(self, entry, expected_status=None, expected_interval=None):
        self.update_calls += 1
        if self.update_calls == 1:
            await self.competing_write()
        return await self.inner.update(entry, expected_status, expected_interval)
