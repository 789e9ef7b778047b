"""Store contracts consumed by the tracking services.

The services depend only on these protocols; the SQL repositories in this
package are one implementation. Missing records are reported as ``None``
(or ``False`` for deletes), storage faults as ``StoreError``.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.sitt.models import Project, TimeTrack, TimeTrackStatus


class ProjectStore(Protocol):
    async def create(self, project: Project) -> Project: ...

    async def get(self, owner_id: UUID, project_id: UUID) -> Project | None: ...

    async def get_all(self, owner_id: UUID) -> list[Project]: ...

    async def update(self, project: Project) -> Project | None:
        """Write ``project`` only if its stored ``version`` still matches.

        Raises StaleWriteError when the version moved.
        """
        ...

    async def delete(self, owner_id: UUID, project_id: UUID) -> bool: ...


class TimeTrackStore(Protocol):
    async def create(self, entry: TimeTrack) -> TimeTrack: ...

    async def get(self, project_id: UUID, entry_id: UUID) -> TimeTrack | None: ...

    async def get_in_progress(self, owner_id: UUID, project_id: UUID) -> TimeTrack | None: ...

    async def get_all(self, project_id: UUID, owner_id: UUID) -> list[TimeTrack]: ...

    async def update(
        self,
        entry: TimeTrack,
        expected_status: TimeTrackStatus | None = None,
        expected_interval: tuple[datetime, datetime | None] | None = None,
    ) -> TimeTrack | None:
        """Write ``entry`` only if the stored status and interval still match the expectations."""
        ...

    async def delete(self, owner_id: UUID, project_id: UUID, entry_id: UUID) -> TimeTrack | None:
        """Delete an entry only if ``owner_id`` created it; return the deleted entry."""
        ...

    async def delete_for_project(self, project_id: UUID) -> int: ...
