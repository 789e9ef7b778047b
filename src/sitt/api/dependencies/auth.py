"""Owner authentication by API key."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.sitt.api.dependencies.repositories import UserRepo
from src.sitt.core.logging import bind_owner_context
from src.sitt.models import User
from src.sitt.models.user import API_KEY_LENGTH
from src.sitt.repositories import StoreError


async def get_current_owner(
    user_repo: UserRepo,
    x_api_key: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the owner from the X-API-Key header.

    The key must be exactly API_KEY_LENGTH characters and belong to a user.
    """
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-API-Key header",
        )

    if len(x_api_key) != API_KEY_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )

    try:
        user = await user_repo.get_by_api_key(x_api_key)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Owner lookup unavailable",
        ) from e

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )

    bind_owner_context(user.id, user.role)
    return user


CurrentOwner = Annotated[User, Depends(get_current_owner)]
