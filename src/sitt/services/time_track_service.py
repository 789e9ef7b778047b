"""Time track service - start/stop state machine and entry bookkeeping.

Every change to an entry is followed by a separate write of its project's
status or aggregate duration. The two writes share no transaction, so each
mutating operation runs under the project lock and writes the project through
ProjectService.apply. When the second write fails, the ids needed to repair
the project with reconcile() are logged.
"""

from collections.abc import Callable
from datetime import datetime
from typing import NoReturn
from uuid import UUID

from src.sitt.core.locks import ProjectLocks, serialized
from src.sitt.core.logging import get_logger
from src.sitt.models import Project, ProjectStatus, TimeTrack, TimeTrackStatus, User
from src.sitt.models.base import to_naive_utc, utc_now
from src.sitt.repositories import TimeTrackStore
from src.sitt.services.errors import (
    AlreadyTrackingTimeError,
    ConcurrentUpdateError,
    InvalidIntervalError,
    InvariantViolationError,
    NoInProgressTimeTrackingError,
    TimeTrackInProgressError,
    TimeTrackNotFoundError,
    TrackingError,
    UnknownTrackingError,
    storage_guard,
)
from src.sitt.services.project_service import ProjectMutation, ProjectService

logger = get_logger(__name__)


def _validate_interval(started_at: datetime, stopped_at: datetime) -> tuple[datetime, datetime]:
    started_at, stopped_at = to_naive_utc(started_at), to_naive_utc(stopped_at)
    if stopped_at < started_at:
        raise InvalidIntervalError()
    return started_at, stopped_at


class TimeTrackService:
    """Time track service - business logic only."""

    def __init__(
        self,
        time_track_repo: TimeTrackStore,
        project_service: ProjectService,
        locks: ProjectLocks | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.time_track_repo = time_track_repo
        self.project_service = project_service
        self.locks = locks
        self.clock = clock

    async def start(
        self, owner: User, project_id: UUID, comment: str | None = None
    ) -> tuple[TimeTrack, str]:
        """
        Start tracking time on a project.

        The project is flipped ACTIVE first, then the IN_PROGRESS entry is
        created. If the entry cannot be created the project is flipped back.

        Returns:
            The new entry and the project name

        Raises:
            ProjectNotFoundError: Project absent or not owned
            AlreadyTrackingTimeError: Project is already ACTIVE
        """
        async with serialized(self.locks, project_id):

            def activate(project: Project) -> None:
                if project.status != ProjectStatus.INACTIVE.value:
                    raise AlreadyTrackingTimeError(project.name)
                project.status = ProjectStatus.ACTIVE.value

            project = await self.project_service.apply(owner, project_id, activate)

            entry = TimeTrack(
                project_id=project_id,
                created_by=owner.id,
                comment=comment,
                started_at=self.clock(),
            )
            try:
                with storage_guard("time_track.start"):
                    entry = await self.time_track_repo.create(entry)
            except UnknownTrackingError:
                await self._revert_activation(owner, project_id)
                raise

        logger.info(
            "Time tracking started",
            project_id=str(project_id),
            time_track_id=str(entry.id),
        )
        return entry, project.name

    async def stop(self, owner: User, project_id: UUID) -> tuple[TimeTrack, str]:
        """
        Stop the running entry of a project and add its duration to the project.

        Raises:
            ProjectNotFoundError: Project absent or not owned
            NoInProgressTimeTrackingError: Nothing is running on the project
        """
        async with serialized(self.locks, project_id):
            project = await self.project_service.get_stored(owner, project_id)
            if not project.is_active:
                raise NoInProgressTimeTrackingError(project.name)

            with storage_guard("time_track.stop"):
                entry = await self.time_track_repo.get_in_progress(owner.id, project_id)
            if entry is None:
                raise NoInProgressTimeTrackingError(project.name)

            entry.finish(self.clock())
            with storage_guard("time_track.stop"):
                finished = await self.time_track_repo.update(
                    entry, expected_status=TimeTrackStatus.IN_PROGRESS
                )
            if finished is None:
                # Another writer finished or removed it first
                raise NoInProgressTimeTrackingError(project.name)

            duration = entry.total_duration

            def deactivate(project: Project) -> None:
                project.status = ProjectStatus.INACTIVE.value
                project.total_duration += duration

            project = await self._propagate(owner, entry, deactivate, step="stop")

        logger.info(
            "Time tracking stopped",
            project_id=str(project_id),
            time_track_id=str(entry.id),
            duration=duration,
        )
        return entry, project.name

    async def create(
        self,
        owner: User,
        project_id: UUID,
        started_at: datetime,
        stopped_at: datetime,
        comment: str | None = None,
    ) -> tuple[TimeTrack, str]:
        """Record a FINISHED entry after the fact."""
        started_at, stopped_at = _validate_interval(started_at, stopped_at)

        async with serialized(self.locks, project_id):
            await self.project_service.get_stored(owner, project_id)

            entry = TimeTrack(
                project_id=project_id,
                created_by=owner.id,
                comment=comment,
                started_at=started_at,
            )
            entry.finish(stopped_at)
            with storage_guard("time_track.create"):
                entry = await self.time_track_repo.create(entry)

            duration = entry.total_duration

            def add_duration(project: Project) -> None:
                project.total_duration += duration

            project = await self._propagate(owner, entry, add_duration, step="create")

        logger.info(
            "Time track created",
            project_id=str(project_id),
            time_track_id=str(entry.id),
            duration=duration,
        )
        return entry, project.name

    async def get_all(self, owner: User, project_id: UUID) -> tuple[list[TimeTrack], str]:
        """Get all entries of a project, oldest first, with live duration for a running one."""
        project = await self.project_service.get_stored(owner, project_id)
        with storage_guard("time_track.get_all"):
            entries = await self.time_track_repo.get_all(project_id, owner.id)

        entries.sort(key=lambda e: e.started_at)
        now = self.clock()
        for entry in entries:
            if entry.is_in_progress:
                entry.total_duration = entry.live_duration(now)
        return entries, project.name

    async def get_in_progress(self, owner: User, project_id: UUID, project_name: str) -> TimeTrack:
        with storage_guard("time_track.get_in_progress"):
            entry = await self.time_track_repo.get_in_progress(owner.id, project_id)
        if entry is None:
            raise NoInProgressTimeTrackingError(project_name)
        entry.total_duration = entry.live_duration(self.clock())
        return entry

    async def update(
        self,
        owner: User,
        project_id: UUID,
        entry_id: UUID,
        new_started_at: datetime,
        new_stopped_at: datetime,
    ) -> tuple[TimeTrack, str]:
        """
        Change the interval of a FINISHED entry.

        The difference between the new and the old duration is added to the
        project aggregate.

        Raises:
            ProjectNotFoundError: Project absent or not owned
            TimeTrackNotFoundError: Entry absent or not owned
            TimeTrackInProgressError: Entry is still running
            InvalidIntervalError: new_stopped_at is before new_started_at
        """
        new_started_at, new_stopped_at = _validate_interval(new_started_at, new_stopped_at)

        async with serialized(self.locks, project_id):
            project = await self.project_service.get_stored(owner, project_id)
            with storage_guard("time_track.update"):
                entry = await self.time_track_repo.get(project_id, entry_id)
            if entry is None or entry.created_by != owner.id:
                raise TimeTrackNotFoundError()
            if entry.is_in_progress:
                raise TimeTrackInProgressError(project.name)

            old_duration = entry.total_duration
            old_interval = (entry.started_at, entry.stopped_at)
            entry.started_at = new_started_at
            entry.finish(new_stopped_at)
            with storage_guard("time_track.update"):
                updated = await self.time_track_repo.update(
                    entry,
                    expected_status=TimeTrackStatus.FINISHED,
                    expected_interval=old_interval,
                )
            if updated is None:
                await self._raise_entry_conflict(project_id, entry_id)

            delta = entry.total_duration - old_duration

            def add_delta(project: Project) -> None:
                project.total_duration += delta

            project = await self._propagate(owner, entry, add_delta, step="update")

        logger.info(
            "Time track updated",
            project_id=str(project_id),
            time_track_id=str(entry_id),
            delta=delta,
        )
        return entry, project.name

    async def delete(self, owner: User, project_id: UUID, entry_id: UUID) -> None:
        """
        Delete an entry.

        A FINISHED entry's duration is subtracted from the project. Deleting
        the running entry leaves the aggregate alone and flips the project
        INACTIVE.
        """
        async with serialized(self.locks, project_id):
            await self.project_service.get_stored(owner, project_id)
            with storage_guard("time_track.delete"):
                entry = await self.time_track_repo.delete(owner.id, project_id, entry_id)
            if entry is None:
                raise TimeTrackNotFoundError()

            duration = entry.total_duration

            def remove_entry(project: Project) -> None:
                if entry.is_in_progress:
                    project.status = ProjectStatus.INACTIVE.value
                else:
                    project.total_duration -= duration

            await self._propagate(owner, entry, remove_entry, step="delete")

        logger.info(
            "Time track deleted",
            project_id=str(project_id),
            time_track_id=str(entry_id),
            was_in_progress=entry.is_in_progress,
        )

    async def delete_for_project(self, owner: User, project_id: UUID) -> None:
        """Delete every entry of a project. The caller holds the project lock."""
        entries, _ = await self.get_all(owner, project_id)
        if not entries:
            return

        with storage_guard("time_track.delete_for_project"):
            deleted = await self.time_track_repo.delete_for_project(project_id)
        logger.info("Time tracks deleted for project", project_id=str(project_id), count=deleted)

    async def reconcile(self, owner: User, project_id: UUID) -> Project:
        """
        Recompute a project's status and aggregate duration from its entries.

        Used to repair a project left behind by a partially failed operation.
        Nothing is written when the project is already consistent. When the
        project is written concurrently, both the project and its entries are
        read again and the values recomputed, up to write_attempts times.

        Raises:
            ProjectNotFoundError: Project absent or not owned
            InvariantViolationError: More than one entry is IN_PROGRESS
            ConcurrentUpdateError: Every attempt lost to another writer
        """
        attempts = self.project_service.write_attempts
        async with serialized(self.locks, project_id):
            for attempt in range(1, attempts + 1):
                project = await self.project_service.get_stored(owner, project_id)
                with storage_guard("time_track.reconcile"):
                    entries = await self.time_track_repo.get_all(project_id, owner.id)

                status, total = self._recompute(project, entries)
                if project.status == status and project.total_duration == total:
                    return project

                logger.warning(
                    "Repairing project state",
                    project_id=str(project_id),
                    status=(project.status, status),
                    total_duration=(project.total_duration, total),
                    attempt=attempt,
                )
                project.status = status
                project.total_duration = total
                try:
                    return await self.project_service.update(owner, project)
                except ConcurrentUpdateError:
                    continue

        logger.error("Project repair attempts exhausted", project_id=str(project_id))
        raise ConcurrentUpdateError()

    @staticmethod
    def _recompute(project: Project, entries: list[TimeTrack]) -> tuple[str, int]:
        """Status and aggregate duration implied by the entries."""
        running = [e for e in entries if e.is_in_progress]
        if len(running) > 1:
            logger.error(
                "Project has several in-progress time tracks",
                project_id=str(project.id),
                time_track_ids=[str(e.id) for e in running],
            )
            raise InvariantViolationError(
                f"Project '{project.name}' has {len(running)} running time tracks"
            )

        status = ProjectStatus.ACTIVE.value if running else ProjectStatus.INACTIVE.value
        total = sum(e.total_duration for e in entries if not e.is_in_progress)
        return status, total

    async def _propagate(
        self, owner: User, entry: TimeTrack, mutate: ProjectMutation, step: str
    ) -> Project:
        try:
            return await self.project_service.apply(owner, entry.project_id, mutate)
        except TrackingError:
            logger.error(
                "Time track written but project not updated, reconcile required",
                step=step,
                project_id=str(entry.project_id),
                time_track_id=str(entry.id),
            )
            raise

    async def _raise_entry_conflict(self, project_id: UUID, entry_id: UUID) -> NoReturn:
        """Explain a conditional entry write that matched no row."""
        with storage_guard("time_track.update"):
            current = await self.time_track_repo.get(project_id, entry_id)
        if current is None:
            raise TimeTrackNotFoundError()
        logger.warning(
            "Time track changed since it was read",
            project_id=str(project_id),
            time_track_id=str(entry_id),
        )
        raise ConcurrentUpdateError()

    async def _revert_activation(self, owner: User, project_id: UUID) -> None:
        logger.error("Time track creation failed, reverting project", project_id=str(project_id))

        def deactivate(project: Project) -> None:
            project.status = ProjectStatus.INACTIVE.value

        try:
            await self.project_service.apply(owner, project_id, deactivate)
        except TrackingError:
            logger.exception(
                "Could not revert project activation, reconcile required",
                project_id=str(project_id),
            )
