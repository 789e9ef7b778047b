"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project tracking status."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class TimeTrackStatus(str, Enum):
    """Time track entry status."""

    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class UserRole(str, Enum):
    """Owner role. Admins are exempt from the project cap."""

    ADMIN = "ADMIN"
    USER = "USER"
