"""Startup provisioning of the first admin owner."""

from src.sitt.core.logging import get_logger
from src.sitt.models import User, UserRole
from src.sitt.repositories import DuplicateEntityError, UserRepository

logger = get_logger(__name__)


async def ensure_bootstrap_admin(user_repo: UserRepository, name: str, api_key: str) -> User:
    """Return the owner holding ``api_key``, creating it as an admin if missing.

    An existing owner with that key is returned unchanged, whatever its role.
    """
    user = await user_repo.get_by_api_key(api_key)
    if user is not None:
        return user

    try:
        user = await user_repo.create(User(name=name, role=UserRole.ADMIN.value, api_key=api_key))
    except DuplicateEntityError:
        # Another worker created it first
        user = await user_repo.get_by_api_key(api_key)
        if user is None:
            raise
        return user

    logger.info("Bootstrap admin created", owner_id=str(user.id))
    return user
