"""Project model - aggregate of an owner's tracked time."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.sitt.models.base import utc_now
from src.sitt.models.enums import ProjectStatus

MAX_PROJECT_NAME_LENGTH = 25


class Project(SQLModel, table=True):
    """Project owned by a single user.

    ``total_duration`` holds whole seconds of FINISHED entries only. The live
    time of a running entry is added when the project is read, never stored.
    ``version`` increments on every persisted update and guards conditional
    writes.
    """

    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("created_by", "name", name="uq_projects_owner_name"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=MAX_PROJECT_NAME_LENGTH)
    status: str = Field(default=ProjectStatus.INACTIVE.value, max_length=20)
    total_duration: int = Field(default=0)
    version: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    created_by: UUID = Field(index=True)
    modified_at: datetime | None = Field(default=None)
    modified_by: UUID | None = Field(default=None)

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE.value

    @property
    def last_changed_at(self) -> datetime:
        return self.modified_at or self.created_at
