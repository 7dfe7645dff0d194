"""Skill profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import SkillProfile


class IProfileRepository(Protocol):
    """Repository interface for SkillProfile aggregates.

    Reviews and portfolio items are stored inside the profile document and
    are only reachable through it.
    """

    async def get(self, id: UUID, for_update: bool = False) -> SkillProfile | None:
        """Get a profile by ID, optionally locking it for a read-modify-write."""
        ...

    async def get_latest_for_owner(
        self, owner_id: UUID, for_update: bool = False
    ) -> SkillProfile | None:
        """Get the most recently created profile of an owner."""
        ...

    async def get_all_for_owner(self, owner_id: UUID) -> list[SkillProfile]:
        """Get every profile of an owner, newest first."""
        ...

    async def get_all(
        self,
        skill: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
    ) -> list[SkillProfile]:
        """Get all profiles newest first, with optional category/substring filters."""
        ...

    async def get_distinct_owner_ids(self) -> list[UUID]:
        """Get the IDs of every user owning at least one profile."""
        ...

    async def create(self, profile: SkillProfile) -> SkillProfile:
        """Create a new profile."""
        ...

    async def update(self, profile: SkillProfile) -> SkillProfile:
        """Persist the full profile document."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...
