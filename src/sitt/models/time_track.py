"""TimeTrack model - one interval of worked time on a project."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.sitt.models.base import elapsed_seconds, utc_now
from src.sitt.models.enums import TimeTrackStatus

MAX_COMMENT_LENGTH = 1000


class TimeTrack(SQLModel, table=True):
    """Time track entry.

    ``stopped_at`` is set exactly when the entry is FINISHED. For FINISHED
    entries ``total_duration`` is ``stopped_at - started_at`` in whole seconds;
    while IN_PROGRESS it is stored as 0.
    """

    __tablename__ = "time_tracks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(index=True)
    status: str = Field(default=TimeTrackStatus.IN_PROGRESS.value, max_length=20)
    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)
    started_at: datetime = Field(default_factory=utc_now)
    stopped_at: datetime | None = Field(default=None)
    total_duration: int = Field(default=0)
    created_by: UUID = Field(index=True)

    @property
    def is_in_progress(self) -> bool:
        return self.status == TimeTrackStatus.IN_PROGRESS.value

    def finish(self, stopped_at: datetime) -> None:
        """Mark the entry FINISHED at ``stopped_at`` and compute its duration."""
        self.stopped_at = stopped_at
        self.status = TimeTrackStatus.FINISHED.value
        self.total_duration = elapsed_seconds(self.started_at, stopped_at)

    def live_duration(self, now: datetime) -> int:
        """Seconds elapsed since start, never negative."""
        return max(0, elapsed_seconds(self.started_at, now))
