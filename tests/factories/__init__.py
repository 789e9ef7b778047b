"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_api_key, generate_uuid, utc_now
from tests.factories.tracking import ProjectFactory, TimeTrackFactory
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_api_key",
    "generate_uuid",
    "utc_now",
    # User
    "UserFactory",
    # Tracking
    "ProjectFactory",
    "TimeTrackFactory",
]
