from src.sitt.services.container import (
    TrackingServices,
    build_tracking_services,
    get_tracking_services,
    reset_tracking_services,
)
from src.sitt.services.project_service import ProjectService
from src.sitt.services.time_track_service import TimeTrackService

__all__ = [
    "ProjectService",
    "TimeTrackService",
    "TrackingServices",
    "build_tracking_services",
    "get_tracking_services",
    "reset_tracking_services",
]
