"""User model - the owner identity projects and entries are scoped to."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.sitt.models.base import utc_now
from src.sitt.models.enums import UserRole

API_KEY_LENGTH = 32


class User(SQLModel, table=True):
    """Owner authenticated by API key."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    role: str = Field(default=UserRole.USER.value, max_length=20)
    api_key: str = Field(min_length=API_KEY_LENGTH, max_length=API_KEY_LENGTH, unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    created_by: UUID | None = Field(default=None)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
