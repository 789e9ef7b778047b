"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.sitt.models import Project
from src.sitt.models.project import MAX_PROJECT_NAME_LENGTH
from src.sitt.schemas.duration import format_duration


def _validate_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Project name cannot be empty or whitespace only")
    if len(v) > MAX_PROJECT_NAME_LENGTH:
        raise ValueError(f"Project name must be at most {MAX_PROJECT_NAME_LENGTH} characters")
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)


class ProjectUpdate(BaseModel):
    """Schema for renaming a project."""

    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)


class ProjectRead(BaseModel):
    """Schema for reading a project.

    ``total_duration`` is in seconds and includes the running entry, if any.
    """

    project_id: UUID
    name: str
    status: str
    total_duration: int
    total_duration_text: str
    created_at: datetime
    modified_at: datetime | None = None

    @classmethod
    def from_project(cls, project: Project) -> "ProjectRead":
        return cls(
            project_id=project.id,
            name=project.name,
            status=project.status,
            total_duration=project.total_duration,
            total_duration_text=format_duration(project.total_duration),
            created_at=project.created_at,
            modified_at=project.modified_at,
        )
