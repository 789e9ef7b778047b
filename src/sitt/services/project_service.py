"""Project service - project state, creation limits and live duration."""

from collections.abc import Callable
from contextlib import suppress
from typing import TYPE_CHECKING
from uuid import UUID

from src.sitt.core.locks import ProjectLocks, serialized
from src.sitt.core.logging import get_logger
from src.sitt.models import Project, User
from src.sitt.models.base import utc_now
from src.sitt.repositories import DuplicateEntityError, ProjectStore, StaleWriteError
from src.sitt.services.errors import (
    ConcurrentUpdateError,
    InvariantViolationError,
    NoInProgressTimeTrackingError,
    ProjectNameConflictError,
    ProjectNotFoundError,
    ServiceNotWiredError,
    TooManyProjectsError,
    UnknownTrackingError,
    storage_guard,
)

if TYPE_CHECKING:
    from src.sitt.services.time_track_service import TimeTrackService

logger = get_logger(__name__)

DEFAULT_MAX_PROJECTS = 15
DEFAULT_WRITE_ATTEMPTS = 3

ProjectMutation = Callable[[Project], None]


class ProjectService:
    """Project service - business logic only.

    The time track service depends on this service and this service reads
    in-progress entries through it, so it is attached after construction
    with set_time_track_service().
    """

    def __init__(
        self,
        project_repo: ProjectStore,
        locks: ProjectLocks | None = None,
        max_projects: int = DEFAULT_MAX_PROJECTS,
        write_attempts: int = DEFAULT_WRITE_ATTEMPTS,
    ):
        self.project_repo = project_repo
        self.locks = locks
        self.max_projects = max_projects
        self.write_attempts = write_attempts
        self._time_track_service: "TimeTrackService | None" = None

    def set_time_track_service(self, time_track_service: "TimeTrackService") -> None:
        self._time_track_service = time_track_service

    @property
    def time_track_service(self) -> "TimeTrackService":
        if self._time_track_service is None:
            raise ServiceNotWiredError()
        return self._time_track_service

    async def create(self, owner: User, name: str) -> Project:
        """
        Create an INACTIVE project with no tracked time.

        Raises:
            TooManyProjectsError: Non-admin owner already has max_projects projects
            ProjectNameConflictError: Owner already has a project with this name
        """
        with storage_guard("project.create"):
            existing = await self.project_repo.get_all(owner.id)

        if not owner.is_admin and len(existing) >= self.max_projects:
            raise TooManyProjectsError()
        if any(project.name == name for project in existing):
            raise ProjectNameConflictError(name)

        project = Project(name=name, created_by=owner.id)
        with storage_guard("project.create"):
            try:
                project = await self.project_repo.create(project)
            except DuplicateEntityError as e:
                # Lost a race against a concurrent create with the same name
                raise ProjectNameConflictError(name) from e

        logger.info("Project created", project_id=str(project.id), project_name=name)
        return project

    async def get(self, owner: User, project_id: UUID) -> Project:
        """Get a project with the running entry's elapsed time included."""
        project = await self.get_stored(owner, project_id)
        if project.is_active:
            await self._add_live_duration(owner, project)
        return project

    async def get_stored(self, owner: User, project_id: UUID) -> Project:
        """Get the project exactly as persisted."""
        with storage_guard("project.get"):
            project = await self.project_repo.get(owner.id, project_id)
        if project is None:
            raise ProjectNotFoundError()
        return project

    async def get_all(self, owner: User) -> list[Project]:
        """Get all projects of the owner, active first, then most recently changed."""
        with storage_guard("project.get_all"):
            projects = await self.project_repo.get_all(owner.id)

        projects.sort(key=lambda p: p.last_changed_at, reverse=True)
        projects.sort(key=lambda p: not p.is_active)

        for project in projects:
            if project.is_active:
                await self._add_live_duration(owner, project)
        return projects

    async def update_name(self, owner: User, project_id: UUID, new_name: str) -> Project:
        with storage_guard("project.update_name"):
            existing = await self.project_repo.get_all(owner.id)
        if any(p.name == new_name and p.id != project_id for p in existing):
            raise ProjectNameConflictError(new_name)

        def rename(project: Project) -> None:
            project.name = new_name

        project = await self.apply(owner, project_id, rename)
        logger.info("Project renamed", project_id=str(project_id), project_name=new_name)
        return project

    async def update(self, owner: User, project: Project) -> Project:
        """
        Persist a project the caller has already mutated.

        The write succeeds only if nobody else wrote the project since the
        caller read it.

        Raises:
            ProjectNotFoundError: Project no longer exists
            ConcurrentUpdateError: Project was written in the meantime
        """
        try:
            return await self._write(owner, project)
        except StaleWriteError as e:
            logger.warning("Project write conflict", project_id=str(project.id))
            raise ConcurrentUpdateError() from e

    async def apply(self, owner: User, project_id: UUID, mutate: ProjectMutation) -> Project:
        """
        Read the stored project, run ``mutate`` on it and write it back.

        ``mutate`` may raise to abort without writing. On a conflicting write
        the whole read-mutate-write is repeated, up to write_attempts times.
        """
        for attempt in range(1, self.write_attempts + 1):
            project = await self.get_stored(owner, project_id)
            mutate(project)
            try:
                return await self._write(owner, project)
            except StaleWriteError:
                logger.warning(
                    "Project write conflict, retrying",
                    project_id=str(project_id),
                    attempt=attempt,
                )

        logger.error(
            "Project write attempts exhausted",
            project_id=str(project_id),
            attempts=self.write_attempts,
        )
        raise ConcurrentUpdateError()

    async def delete(self, owner: User, project_id: UUID) -> None:
        """Delete a project together with all of its time tracks."""
        async with serialized(self.locks, project_id):
            with suppress(ProjectNotFoundError):
                await self.time_track_service.delete_for_project(owner, project_id)

            try:
                with storage_guard("project.delete"):
                    deleted = await self.project_repo.delete(owner.id, project_id)
            except UnknownTrackingError:
                logger.error(
                    "Time tracks deleted but project record remains",
                    project_id=str(project_id),
                )
                raise
            if not deleted:
                raise ProjectNotFoundError()

        logger.info("Project deleted", project_id=str(project_id))

    async def _write(self, owner: User, project: Project) -> Project:
        project.modified_at = utc_now()
        project.modified_by = owner.id
        with storage_guard("project.update"):
            try:
                updated = await self.project_repo.update(project)
            except DuplicateEntityError as e:
                raise ProjectNameConflictError(project.name) from e
        if updated is None:
            raise ProjectNotFoundError()
        return updated

    async def _add_live_duration(self, owner: User, project: Project) -> None:
        try:
            entry = await self.time_track_service.get_in_progress(owner, project.id, project.name)
        except NoInProgressTimeTrackingError as e:
            logger.error(
                "Active project has no in-progress time track",
                project_id=str(project.id),
                owner_id=str(owner.id),
            )
            raise InvariantViolationError(
                f"Project '{project.name}' is active but has no running time track"
            ) from e
        project.total_duration += entry.total_duration
