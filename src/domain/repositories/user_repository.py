"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Read-only access to users synced from the identity provider."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...
