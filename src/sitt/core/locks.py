"""Per-project serialization for read-modify-write sequences."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import AbstractAsyncContextManager, asynccontextmanager, nullcontext
from uuid import UUID

from src.sitt.core.logging import get_logger

logger = get_logger(__name__)


class ProjectLocks:
    """Registry of asyncio locks keyed by project id.

    A lock lives only while some task holds or waits on it. Locks are not
    reentrant: code running under ``hold(project_id)`` must not call into
    anything that takes the same project lock again.
    """

    def __init__(self) -> None:
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._users: dict[UUID, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, project_id: UUID) -> AsyncGenerator[None]:
        """Hold the lock for ``project_id`` for the duration of the block."""
        lock = self._locks.setdefault(project_id, asyncio.Lock())
        self._users[project_id] = self._users.get(project_id, 0) + 1
        if lock.locked():
            logger.debug("Waiting for project lock", project_id=str(project_id))
        try:
            async with lock:
                yield
        finally:
            self._users[project_id] -= 1
            if self._users[project_id] == 0:
                del self._users[project_id]
                del self._locks[project_id]


def serialized(
    locks: ProjectLocks | None, project_id: UUID
) -> AbstractAsyncContextManager[None]:
    """Hold the project lock if serialization is enabled, else do nothing."""
    if locks is None:
        return nullcontext()
    return locks.hold(project_id)
