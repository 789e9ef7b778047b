"""Service dependencies.

Both services are process-wide: the per-project lock registry they share
only serializes writes if every request sees the same instances.
"""

from typing import Annotated

from fastapi import Depends

from src.sitt.services import (
    ProjectService,
    TimeTrackService,
    TrackingServices,
    get_tracking_services,
)


def get_services() -> TrackingServices:
    """Get the wired project and time track services."""
    return get_tracking_services()


Services = Annotated[TrackingServices, Depends(get_services)]


def get_project_service(services: Services) -> ProjectService:
    return services.project_service


def get_time_track_service(services: Services) -> TimeTrackService:
    return services.time_track_service


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TimeTrackServiceDep = Annotated[TimeTrackService, Depends(get_time_track_service)]
