"""Repository for TimeTrack entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.sitt.models import TimeTrack, TimeTrackStatus
from src.sitt.repositories.base import BaseRepository


class TimeTrackRepository(BaseRepository[TimeTrack]):
    """Repository for TimeTrack entity, keyed by (project_id, id)."""

    model = TimeTrack

    async def create(self, entry: TimeTrack) -> TimeTrack:
        """Insert a new entry."""
        return await self.add(entry)

    async def get(self, project_id: UUID, entry_id: UUID) -> TimeTrack | None:
        """Get an entry of a project."""
        async with self.session() as session:
            result = await session.execute(
                select(TimeTrack).where(TimeTrack.project_id == project_id, TimeTrack.id == entry_id)
            )
            return result.scalar_one_or_none()

    async def get_in_progress(self, owner_id: UUID, project_id: UUID) -> TimeTrack | None:
        """Get the IN_PROGRESS entry of a project, oldest first if there are several."""
        async with self.session() as session:
            result = await session.execute(
                select(TimeTrack)
                .where(
                    TimeTrack.project_id == project_id,
                    TimeTrack.created_by == owner_id,
                    TimeTrack.status == TimeTrackStatus.IN_PROGRESS.value,
                )
                .order_by(TimeTrack.started_at)  # type: ignore[arg-type]
            )
            return result.scalars().first()

    async def get_all(self, project_id: UUID, owner_id: UUID) -> list[TimeTrack]:
        """Get all entries of a project created by ``owner_id``."""
        async with self.session() as session:
            result = await session.execute(
                select(TimeTrack).where(
                    TimeTrack.project_id == project_id, TimeTrack.created_by == owner_id
                )
            )
            return list(result.scalars().all())

    async def update(
        self,
        entry: TimeTrack,
        expected_status: TimeTrackStatus | None = None,
        expected_interval: tuple[datetime, datetime | None] | None = None,
    ) -> TimeTrack | None:
        """Persist an entry's mutable fields.

        Args:
            entry: The mutated entry.
            expected_status: If given, the write only applies while the stored
                entry still has this status.
            expected_interval: If given, the write only applies while the
                stored ``(started_at, stopped_at)`` still equals it.

        Returns:
            The entry, or None if no row matched.
        """
        conditions = [TimeTrack.project_id == entry.project_id, TimeTrack.id == entry.id]
        if expected_status is not None:
            conditions.append(TimeTrack.status == expected_status.value)
        if expected_interval is not None:
            started_at, stopped_at = expected_interval
            conditions.append(TimeTrack.started_at == started_at)
            if stopped_at is None:
                conditions.append(TimeTrack.stopped_at.is_(None))  # type: ignore[union-attr]
            else:
                conditions.append(TimeTrack.stopped_at == stopped_at)

        async with self.session() as session:
            result = await session.execute(
                update(TimeTrack)
                .where(*conditions)
                .values(
                    status=entry.status,
                    comment=entry.comment,
                    started_at=entry.started_at,
                    stopped_at=entry.stopped_at,
                    total_duration=entry.total_duration,
                )
            )
            await session.commit()
            if result.rowcount == 0:
                return None
        return entry

    async def delete(self, owner_id: UUID, project_id: UUID, entry_id: UUID) -> TimeTrack | None:
        """Delete an entry, conditional on ``owner_id`` having created it.

        Returns:
            The deleted entry, or None if no entry of this owner matched.
        """
        ownership = (
            TimeTrack.project_id == project_id,
            TimeTrack.id == entry_id,
            TimeTrack.created_by == owner_id,
        )
        async with self.session() as session:
            result = await session.execute(
                delete(TimeTrack)
                .where(*ownership)
                .returning(TimeTrack)
                .execution_options(synchronize_session=False)
            )
            entry = result.scalar_one_or_none()
            await session.commit()
        return entry

    async def delete_for_project(self, project_id: UUID) -> int:
        """Delete every entry of a project. Returns the number deleted."""
        async with self.session() as session:
            result = await session.execute(delete(TimeTrack).where(TimeTrack.project_id == project_id))
            await session.commit()
            return result.rowcount
