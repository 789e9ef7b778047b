from src.sitt.schemas.duration import format_duration
from src.sitt.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.sitt.schemas.time_track import (
    TimeTrackCreate,
    TimeTrackRead,
    TimeTrackStart,
    TimeTrackUpdate,
)

__all__ = [
    "format_duration",
    # Project
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # Time track
    "TimeTrackCreate",
    "TimeTrackRead",
    "TimeTrackStart",
    "TimeTrackUpdate",
]
