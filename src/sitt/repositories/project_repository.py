"""Repository for Project entity."""

from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.sitt.models import Project
from src.sitt.repositories.base import BaseRepository
from src.sitt.repositories.errors import StaleWriteError


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity, keyed by (created_by, id)."""

    model = Project

    async def create(self, project: Project) -> Project:
        """Insert a new project."""
        return await self.add(project)

    async def get(self, owner_id: UUID, project_id: UUID) -> Project | None:
        """Get a project owned by ``owner_id``."""
        async with self.session() as session:
            result = await session.execute(
                select(Project).where(Project.created_by == owner_id, Project.id == project_id)
            )
            return result.scalar_one_or_none()

    async def get_all(self, owner_id: UUID) -> list[Project]:
        """Get all projects owned by ``owner_id`` (unordered)."""
        async with self.session() as session:
            result = await session.execute(select(Project).where(Project.created_by == owner_id))
            return list(result.scalars().all())

    async def update(self, project: Project) -> Project | None:
        """Conditionally persist a project read earlier.

        The write only applies if the stored ``version`` still equals
        ``project.version``; on success the version is incremented on both
        the row and ``project``.

        Returns:
            The updated project, or None if it no longer exists.

        Raises:
            StaleWriteError: If the project was changed by another writer.
        """
        async with self.session() as session:
            result = await session.execute(
                update(Project)
                .where(
                    Project.id == project.id,
                    Project.created_by == project.created_by,
                    Project.version == project.version,
                )
                .values(
                    name=project.name,
                    status=project.status,
                    total_duration=project.total_duration,
                    modified_at=project.modified_at,
                    modified_by=project.modified_by,
                    version=Project.version + 1,
                )
            )
            if result.rowcount == 0:
                current = await session.execute(
                    select(Project.version).where(
                        Project.id == project.id, Project.created_by == project.created_by
                    )
                )
                stored_version = current.scalar_one_or_none()
                if stored_version is None:
                    return None
                raise StaleWriteError(
                    f"{self.table_name}: project {project.id} is at version "
                    f"{stored_version}, expected {project.version}"
                )
            await session.commit()

        project.version += 1
        return project

    async def delete(self, owner_id: UUID, project_id: UUID) -> bool:
        """Delete a project owned by ``owner_id``. Returns False if nothing matched."""
        async with self.session() as session:
            result = await session.execute(
                delete(Project).where(Project.created_by == owner_id, Project.id == project_id)
            )
            await session.commit()
            return result.rowcount > 0
