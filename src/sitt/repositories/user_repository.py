"""Repository for User entity."""

from sqlmodel import select

from src.sitt.models import User
from src.sitt.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity (owner lookup only)."""

    model = User

    async def get_by_api_key(self, api_key: str) -> User | None:
        """Get user by API key."""
        async with self.session() as session:
            result = await session.execute(select(User).where(User.api_key == api_key))
            return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        """Insert a new user."""
        return await self.add(user)
