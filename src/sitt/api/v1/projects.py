"""Project endpoints - owner-scoped CRUD.

Every route acts only on projects created by the owner behind X-API-Key.
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.sitt.api.dependencies import CurrentOwner, ProjectServiceDep, TimeTrackServiceDep
from src.sitt.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        400: {"description": "Owner has too many projects"},
        409: {"description": "Project with this name already exists"},
    },
)
async def create_project(
    request: ProjectCreate,
    owner: CurrentOwner,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.create(owner, request.name)
    return ProjectRead.from_project(project)


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="Active projects first, then by most recent change.",
)
async def list_projects(
    owner: CurrentOwner,
    project_service: ProjectServiceDep,
) -> list[ProjectRead]:
    projects = await project_service.get_all(owner)
    return [ProjectRead.from_project(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    description="Total duration includes the running time track, if any.",
    responses={
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    owner: CurrentOwner,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.get(owner, project_id)
    return ProjectRead.from_project(project)


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Rename project",
    responses={
        404: {"description": "Project not found"},
        409: {"description": "Project with this name already exists"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    owner: CurrentOwner,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.update_name(owner, project_id, request.name)
    return ProjectRead.from_project(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Deletes the project and all of its time tracks.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    owner: CurrentOwner,
    project_service: ProjectServiceDep,
) -> None:
    await project_service.delete(owner, project_id)


@router.post(
    "/{project_id}/reconcile",
    response_model=ProjectRead,
    summary="Reconcile project",
    description="Recompute status and total duration from the project's time tracks.",
    responses={
        404: {"description": "Project not found"},
    },
)
async def reconcile_project(
    project_id: UUID,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
) -> ProjectRead:
    project = await time_track_service.reconcile(owner, project_id)
    return ProjectRead.from_project(project)
