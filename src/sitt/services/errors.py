"""Error taxonomy shared by the project and time-track services.

Storage faults never leave the service layer as storage types: they are
logged here and re-raised as UnknownTrackingError, whose message carries no
internal detail.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from src.sitt.core.logging import get_logger
from src.sitt.repositories.errors import StaleWriteError, StoreError

logger = get_logger(__name__)


class TrackingError(Exception):
    """Base class for all project and time-track errors."""

    default_message = "Tracking error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# --- Not found ---


class NotFoundError(TrackingError):
    """Entity absent, or not owned by the caller."""

    default_message = "Not found"


class ProjectNotFoundError(NotFoundError):
    default_message = "Project not found"


class TimeTrackNotFoundError(NotFoundError):
    default_message = "Time tracking not found"


# --- Domain conflicts (user-actionable) ---


class DomainConflictError(TrackingError):
    """The request conflicts with the current project or entry state."""


class TooManyProjectsError(DomainConflictError):
    default_message = "The user has too many projects"


class ProjectNameConflictError(DomainConflictError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Project exists with same name: {name}")


class AlreadyTrackingTimeError(DomainConflictError):
    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(f"Time tracking is already in progress on project '{project_name}'")


class NoInProgressTimeTrackingError(DomainConflictError):
    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(f"No time tracking is in progress for project '{project_name}'.")


class TimeTrackInProgressError(DomainConflictError):
    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(
            f"Time tracking on project '{project_name}' is still in progress, stop it first"
        )


class InvalidIntervalError(DomainConflictError):
    default_message = "stopped_at must not be earlier than started_at"


# --- Internal ---


class ConcurrentUpdateError(TrackingError):
    """A conditional project write kept losing to other writers."""

    default_message = "Project was modified concurrently, please retry"


class InvariantViolationError(TrackingError):
    """Stored project and entry state contradict each other."""

    default_message = "Project state is inconsistent"


class ServiceNotWiredError(TrackingError):
    default_message = "Time track service is not set on the project service"


class UnknownTrackingError(TrackingError):
    """Wraps a storage fault. The cause is logged, never shown to the caller."""

    default_message = "An internal error occurred"


@contextmanager
def storage_guard(operation: str) -> Iterator[None]:
    """Translate StoreError raised inside the block into UnknownTrackingError.

    StaleWriteError passes through untouched; optimistic write loops handle it.
    """
    try:
        yield
    except StaleWriteError:
        raise
    except StoreError as e:
        logger.error("Storage operation failed", operation=operation, error=str(e))
        raise UnknownTrackingError() from e
