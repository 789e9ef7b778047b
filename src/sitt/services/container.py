"""Construction and wiring of the tracking services."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from src.sitt.core.config import get_settings
from src.sitt.core.db import get_session_factory
from src.sitt.core.locks import ProjectLocks
from src.sitt.models.base import utc_now
from src.sitt.repositories import (
    ProjectRepository,
    ProjectStore,
    TimeTrackRepository,
    TimeTrackStore,
)
from src.sitt.services.project_service import (
    DEFAULT_MAX_PROJECTS,
    DEFAULT_WRITE_ATTEMPTS,
    ProjectService,
)
from src.sitt.services.time_track_service import TimeTrackService


@dataclass(frozen=True)
class TrackingServices:
    project_service: ProjectService
    time_track_service: TimeTrackService


def build_tracking_services(
    project_repo: ProjectStore,
    time_track_repo: TimeTrackStore,
    *,
    max_projects: int = DEFAULT_MAX_PROJECTS,
    write_attempts: int = DEFAULT_WRITE_ATTEMPTS,
    serialize_writes: bool = True,
    clock: Callable[[], datetime] = utc_now,
) -> TrackingServices:
    """Build both services over the given stores and wire them to each other.

    Both services share one lock registry when ``serialize_writes`` is set.
    """
    locks = ProjectLocks() if serialize_writes else None
    project_service = ProjectService(
        project_repo,
        locks=locks,
        max_projects=max_projects,
        write_attempts=write_attempts,
    )
    time_track_service = TimeTrackService(time_track_repo, project_service, locks=locks, clock=clock)
    project_service.set_time_track_service(time_track_service)
    return TrackingServices(project_service=project_service, time_track_service=time_track_service)


_services: TrackingServices | None = None


def get_tracking_services() -> TrackingServices:
    """Get the process-wide services over the SQL stores, built on first use."""
    global _services
    if _services is None:
        settings = get_settings()
        session_factory = get_session_factory()
        _services = build_tracking_services(
            ProjectRepository(session_factory),
            TimeTrackRepository(session_factory),
            max_projects=settings.max_projects,
            write_attempts=settings.project_write_attempts,
            serialize_writes=settings.serialize_project_writes,
        )
    return _services


def reset_tracking_services() -> None:
    """Drop the process-wide services (engine disposal, tests)."""
    global _services
    _services = None
