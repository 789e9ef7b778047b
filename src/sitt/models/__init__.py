"""Model exports.

Import from here: `from src.sitt.models import Project, TimeTrack`
"""

from src.sitt.models.enums import ProjectStatus, TimeTrackStatus, UserRole
from src.sitt.models.project import Project
from src.sitt.models.time_track import TimeTrack
from src.sitt.models.user import User

__all__ = [
    # Enums
    "ProjectStatus",
    "TimeTrackStatus",
    "UserRole",
    # Tables
    "Project",
    "TimeTrack",
    "User",
]
