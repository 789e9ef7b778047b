"""Time track schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.sitt.models import TimeTrack
from src.sitt.models.base import to_naive_utc
from src.sitt.models.time_track import MAX_COMMENT_LENGTH
from src.sitt.schemas.duration import format_duration


class TimeTrackStart(BaseModel):
    """Optional body for starting time tracking."""

    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class TimeTrackInterval(BaseModel):
    """Finished interval on a project.

    Timezone-aware timestamps are converted to UTC; naive ones are taken as UTC.
    """

    project_id: UUID
    started_at: datetime
    stopped_at: datetime

    @field_validator("started_at", "stopped_at")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class TimeTrackCreate(TimeTrackInterval):
    """Schema for recording a finished interval after the fact."""

    comment: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class TimeTrackUpdate(TimeTrackInterval):
    """Schema for editing a finished interval. Only the interval can change."""

    model_config = ConfigDict(extra="forbid")


class TimeTrackRead(BaseModel):
    time_track_id: UUID
    project_id: UUID
    project_name: str
    status: str
    comment: str | None = None
    started_at: datetime
    stopped_at: datetime | None = None
    total_duration: int
    total_duration_text: str

    @classmethod
    def from_entry(cls, entry: TimeTrack, project_name: str) -> "TimeTrackRead":
        return cls(
            time_track_id=entry.id,
            project_id=entry.project_id,
            project_name=project_name,
            status=entry.status,
            comment=entry.comment,
            started_at=entry.started_at,
            stopped_at=entry.stopped_at,
            total_duration=entry.total_duration,
            total_duration_text=format_duration(entry.total_duration),
        )
