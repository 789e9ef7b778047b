"""Time track endpoints - start/stop and manual entries."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, status

from src.sitt.api.dependencies import CurrentOwner, TimeTrackServiceDep
from src.sitt.schemas.time_track import (
    TimeTrackCreate,
    TimeTrackRead,
    TimeTrackStart,
    TimeTrackUpdate,
)

router = APIRouter(prefix="/timetrack", tags=["timetrack"])


@router.post(
    "/{project_id}/start",
    response_model=TimeTrackRead,
    status_code=status.HTTP_201_CREATED,
    summary="Start time tracking",
    responses={
        400: {"description": "Time tracking already in progress"},
        404: {"description": "Project not found"},
    },
)
async def start_time_tracking(
    project_id: UUID,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
    request: Annotated[TimeTrackStart | None, Body()] = None,
) -> TimeTrackRead:
    comment = request.comment if request else None
    entry, project_name = await time_track_service.start(owner, project_id, comment)
    return TimeTrackRead.from_entry(entry, project_name)


@router.post(
    "/{project_id}/stop",
    response_model=TimeTrackRead,
    summary="Stop time tracking",
    responses={
        400: {"description": "No time tracking in progress"},
        404: {"description": "Project not found"},
    },
)
async def stop_time_tracking(
    project_id: UUID,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
) -> TimeTrackRead:
    entry, project_name = await time_track_service.stop(owner, project_id)
    return TimeTrackRead.from_entry(entry, project_name)


@router.post(
    "",
    response_model=TimeTrackRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record time track",
    description="Record a finished interval after the fact.",
    responses={
        400: {"description": "stopped_at is before started_at"},
        404: {"description": "Project not found"},
    },
)
async def create_time_track(
    request: TimeTrackCreate,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
) -> TimeTrackRead:
    entry, project_name = await time_track_service.create(
        owner, request.project_id, request.started_at, request.stopped_at, request.comment
    )
    return TimeTrackRead.from_entry(entry, project_name)


@router.get(
    "/{project_id}",
    response_model=list[TimeTrackRead],
    summary="List time tracks",
    description="All time tracks of a project, oldest first.",
    responses={
        404: {"description": "Project not found"},
    },
)
async def list_time_tracks(
    project_id: UUID,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
) -> list[TimeTrackRead]:
    entries, project_name = await time_track_service.get_all(owner, project_id)
    return [TimeTrackRead.from_entry(e, project_name) for e in entries]


@router.put(
    "/{time_track_id}",
    response_model=TimeTrackRead,
    summary="Edit time track",
    responses={
        400: {"description": "Invalid interval or time track still in progress"},
        404: {"description": "Project or time track not found"},
        409: {"description": "Time track was edited concurrently"},
    },
)
async def update_time_track(
    time_track_id: UUID,
    request: TimeTrackUpdate,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
) -> TimeTrackRead:
    entry, project_name = await time_track_service.update(
        owner, request.project_id, time_track_id, request.started_at, request.stopped_at
    )
    return TimeTrackRead.from_entry(entry, project_name)


@router.delete(
    "/{project_id}/{time_track_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete time track",
    responses={
        204: {"description": "Time track deleted"},
        404: {"description": "Project or time track not found"},
    },
)
async def delete_time_track(
    project_id: UUID,
    time_track_id: UUID,
    owner: CurrentOwner,
    time_track_service: TimeTrackServiceDep,
) -> None:
    await time_track_service.delete(owner, project_id, time_track_id)
