"""Skill profile service layer with business logic."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import cast
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, StorageError, ValidationError
from domain.entities.profile import PortfolioItem, SkillProfile
from domain.entities.skill import SKILL_VALUES, is_valid_skill
from domain.repositories.blob_storage import IBlobStorage
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DESCRIPTION_MAX_LENGTH = 500


@dataclass
class ProfileFields:
    """Validated, normalized values for the mutable profile fields."""

    name: str
    primary_skill: str
    description: str
    looking_for: list[str] | None


class ProfileService:
    """Service layer for skill profile business logic.

    Storage does not enforce one profile per owner. Everywhere this service
    resolves "the owner's profile" it means the newest one, and
    ``save_profile`` updates that profile instead of adding another.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        blob_storage: IBlobStorage,
    ) -> None:
        self._uow_factory = uow_factory
        self._blob_storage = blob_storage

    async def list_profiles(
        self,
        skill: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
    ) -> list[SkillProfile]:
        """List all profiles newest first, for discovery and browsing."""
        search = search.strip() if search else None
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all(  # type: ignore[no-any-return]
                skill=skill, search=search or None, featured=featured
            )

    async def get_profile(self, profile_id: UUID) -> SkillProfile:
        """Get any profile by ID (public view)."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            return profile

    async def get_profile_by_owner(self, owner_id: UUID) -> SkillProfile:
        """Get the owner's newest profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_latest_for_owner(owner_id)
            if not profile:
                raise ProfileNotFoundError()
            return profile

    async def create_profile(
        self,
        owner_id: UUID,
        name: str | None,
        primary_skill: str | None,
        description: str | None,
        looking_for: Sequence[str] | None = None,
    ) -> SkillProfile:
        """Create a new profile.

        Does not look for an existing profile of the same owner, so calling
        this twice leaves the owner with two profiles.
        """
        fields = self.validate_fields(name, primary_skill, description, looking_for)
        async with self._uow_factory() as uow:
            created = await uow.profiles.create(self._new_profile(owner_id, fields))
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def update_profile(
        self,
        owner_id: UUID,
        name: str | None,
        primary_skill: str | None,
        description: str | None,
        looking_for: Sequence[str] | None = None,
        portfolio: Sequence[tuple[UUID, str | None]] | None = None,
    ) -> SkillProfile:
        """Replace the mutable fields of the owner's profile.

        Args:
            owner_id: The profile owner.
            name: New display name (required).
            primary_skill: New primary skill (required, from the vocabulary).
            description: New description (required, at most 500 characters).
            looking_for: New wanted skills, or None to keep the current list.
            portfolio: Ordered ``(item_id, title)`` pairs to reorder or retitle
                existing items, or None to keep the portfolio untouched.
                Items left out are removed after their assets are deleted.

        Raises:
            ValidationError: If any field fails validation.
            ProfileNotFoundError: If the owner has no profile.
            StorageError: If deleting a dropped portfolio asset fails.
        """
        fields = self.validate_fields(name, primary_skill, description, looking_for)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_latest_for_owner(owner_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError()

            if portfolio is not None:
                await self._replace_portfolio(uow, profile, portfolio)

            self._apply_fields(profile, fields)
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def save_profile(
        self,
        owner_id: UUID,
        name: str | None,
        primary_skill: str | None,
        description: str | None,
        looking_for: Sequence[str] | None = None,
    ) -> tuple[SkillProfile, bool]:
        """Create the owner's profile, or update it when one already exists.

        Returns:
            Tuple of (profile, created).
        """
        fields = self.validate_fields(name, primary_skill, description, looking_for)
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get_latest_for_owner(owner_id, for_update=True)
            if existing:
                self._apply_fields(existing, fields)
                updated = await uow.profiles.update(existing)
                await uow.commit()
                return updated, False

            created = await uow.profiles.create(self._new_profile(owner_id, fields))
            await uow.commit()
            return created, True

    async def delete_profile(self, owner_id: UUID) -> None:
        """Delete the owner's profile together with its portfolio assets."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_latest_for_owner(owner_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError()

            await self._delete_assets(uow, profile, profile.portfolio)
            await uow.profiles.delete(profile.id)
            await uow.commit()

    async def collapse_duplicate_profiles(self) -> list[UUID]:
        """Keep only the newest profile of every owner.

        Offline maintenance procedure; safe to run repeatedly. Each owner is
        handled in its own transaction.

        Returns:
            IDs of the deleted profiles.
        """
        async with self._uow_factory() as uow:
            owner_ids = await uow.profiles.get_distinct_owner_ids()

        deleted: list[UUID] = []
        for owner_id in owner_ids:
            async with self._uow_factory() as uow:
                profiles = await uow.profiles.get_all_for_owner(owner_id)
                if len(profiles) <= 1:
                    continue

                newest_first = sorted(profiles, key=lambda p: p.created_at, reverse=True)
                keep, *duplicates = newest_first
                for duplicate in duplicates:
                    await self._delete_assets(uow, duplicate, duplicate.portfolio)
                    await uow.profiles.delete(duplicate.id)
                    deleted.append(duplicate.id)
                    logger.info(
                        "duplicate_profile_deleted",
                        owner_id=str(owner_id),
                        profile_id=str(duplicate.id),
                        kept_profile_id=str(keep.id),
                    )
                await uow.commit()

        logger.info(
            "duplicate_profile_cleanup_completed",
            owner_count=len(owner_ids),
            deleted_count=len(deleted),
        )
        return deleted

    @staticmethod
    def validate_fields(
        name: str | None,
        primary_skill: str | None,
        description: str | None,
        looking_for: Sequence[str] | None,
    ) -> ProfileFields:
        """Validate and normalize profile input.

        Raises:
            ValidationError: On missing fields, unknown skills, or an
                over-long description.
        """
        missing = [
            field_name
            for field_name, value in (
                ("name", name),
                ("primary_skill", primary_skill),
                ("description", description),
            )
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationError(
                "Please provide all required fields",
                details={"missing_fields": missing},
            )
        name, primary_skill, description = cast(tuple[str, str, str], (name, primary_skill, description))

        if not is_valid_skill(primary_skill):
            raise ValidationError(
                "Invalid primary skill",
                details={"primary_skill": primary_skill, "valid_skills": list(SKILL_VALUES)},
            )

        description = description.strip()
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters",
                details={
                    "current_length": len(description),
                    "max_length": DESCRIPTION_MAX_LENGTH,
                },
            )

        if looking_for is not None:
            if isinstance(looking_for, str):
                raise ValidationError("looking_for must be a list of skills")
            invalid = [skill for skill in looking_for if not is_valid_skill(skill)]
            if invalid:
                raise ValidationError(
                    "Invalid skills in looking_for",
                    details={"invalid_skills": invalid, "valid_skills": list(SKILL_VALUES)},
                )

        return ProfileFields(
            name=name.strip(),
            primary_skill=primary_skill,
            description=description,
            looking_for=list(looking_for) if looking_for is not None else None,
        )

    @staticmethod
    def _new_profile(owner_id: UUID, fields: ProfileFields) -> SkillProfile:
        return SkillProfile(
            owner_id=owner_id,
            name=fields.name,
            primary_skill=fields.primary_skill,
            description=fields.description,
            looking_for=fields.looking_for or [],
        )

    @staticmethod
    def _apply_fields(profile: SkillProfile, fields: ProfileFields) -> None:
        profile.name = fields.name
        profile.primary_skill = fields.primary_skill
        profile.description = fields.description
        if fields.looking_for is not None:
            profile.looking_for = fields.looking_for
        profile.touch()

    async def _replace_portfolio(
        self,
        uow: IUnitOfWork,
        profile: SkillProfile,
        portfolio: Sequence[tuple[UUID, str | None]],
    ) -> None:
        """Reorder/retitle existing items and drop (with assets) the rest."""
        current = {item.id: item for item in profile.portfolio}
        requested_ids = [item_id for item_id, _ in portfolio]

        unknown = [str(item_id) for item_id in requested_ids if item_id not in current]
        if unknown:
            raise ValidationError(
                "Unknown portfolio items",
                details={"item_ids": unknown},
            )
        if len(set(requested_ids)) != len(requested_ids):
            raise ValidationError("Portfolio items may only be listed once")

        kept = set(requested_ids)
        await self._delete_assets(
            uow, profile, [item for item in profile.portfolio if item.id not in kept]
        )

        reordered: list[PortfolioItem] = []
        for item_id, title in portfolio:
            item = current[item_id]
            if title and title.strip():
                item.title = title.strip()
            reordered.append(item)
        profile.portfolio = reordered

    async def _delete_assets(
        self,
        uow: IUnitOfWork,
        profile: SkillProfile,
        items: Sequence[PortfolioItem],
    ) -> None:
        """Delete the blob behind each item.

        On a StorageError the items whose blobs are already gone are removed
        from ``profile`` and committed before the error propagates, so no
        record is left pointing at a deleted asset.
        """
        removed: set[UUID] = set()
        try:
            for item in items:
                await self._blob_storage.delete(item.url)
                removed.add(item.id)
        except StorageError:
            if removed:
                profile.portfolio = [i for i in profile.portfolio if i.id not in removed]
                profile.touch()
                await uow.profiles.update(profile)
                await uow.commit()
            logger.warning(
                "portfolio_asset_delete_failed",
                profile_id=str(profile.id),
                deleted_count=len(removed),
                remaining_count=len(items) - len(removed),
            )
            raise
