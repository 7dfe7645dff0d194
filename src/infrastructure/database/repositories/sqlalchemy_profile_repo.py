"""SQLAlchemy implementation of the skill profile repository."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import PortfolioItem, PortfolioItemType, Review, SkillProfile
from infrastructure.database.models import SkillProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository.

    Embedded reviews and portfolio items round-trip through JSONB as plain
    dicts with string ids and ISO-8601 timestamps.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID, for_update: bool = False) -> SkillProfile | None:
        """Get a profile by ID."""
        model = await self._get_model(id, for_update=for_update)
        return self._to_entity(model) if model else None

    async def get_latest_for_owner(
        self, owner_id: UUID, for_update: bool = False
    ) -> SkillProfile | None:
        """Get the newest profile of an owner."""
        stmt = (
            select(SkillProfileModel)
            .where(SkillProfileModel.owner_id == owner_id)
            .order_by(SkillProfileModel.created_at.desc())
            .limit(1)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_owner(self, owner_id: UUID) -> list[SkillProfile]:
        """Get every profile of an owner, newest first."""
        stmt = (
            select(SkillProfileModel)
            .where(SkillProfileModel.owner_id == owner_id)
            .order_by(SkillProfileModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_all(
        self,
        skill: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
    ) -> list[SkillProfile]:
        """Get all profiles newest first with optional filters."""
        stmt = select(SkillProfileModel).order_by(SkillProfileModel.created_at.desc())

        if featured is not None:
            stmt = stmt.where(SkillProfileModel.featured == featured)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(SkillProfileModel.name).like(pattern),
                    func.lower(SkillProfileModel.description).like(pattern),
                )
            )

        result = await self._session.execute(stmt)
        profiles = [self._to_entity(model) for model in result.scalars()]

        # looking_for membership is checked here so the query stays portable
        if skill:
            profiles = [p for p in profiles if p.primary_skill == skill or skill in p.looking_for]
        return profiles

    async def get_distinct_owner_ids(self) -> list[UUID]:
        """Get the IDs of all owners with at least one profile."""
        stmt = select(SkillProfileModel.owner_id).distinct()
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def create(self, profile: SkillProfile) -> SkillProfile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: SkillProfile) -> SkillProfile:
        """Write the whole profile document back."""
        model = await self._get_model(profile.id)

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        # Fresh lists so the JSONB columns are flagged dirty
        model.name = profile.name
        model.primary_skill = profile.primary_skill
        model.description = profile.description
        model.looking_for = list(profile.looking_for)
        model.portfolio = [self._portfolio_item_to_dict(item) for item in profile.portfolio]
        model.reviews = [self._review_to_dict(review) for review in profile.reviews]
        model.credits = profile.credits
        model.rating = profile.rating
        model.featured = profile.featured
        model.avatar_url = profile.avatar_url
        model.location = list(profile.location) if profile.location is not None else None
        model.updated_at = profile.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID, for_update: bool = False) -> SkillProfileModel | None:
        stmt = select(SkillProfileModel).where(SkillProfileModel.id == id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _review_to_dict(review: Review) -> dict[str, Any]:
        return {
            "id": str(review.id),
            "reviewer_id": str(review.reviewer_id),
            "rating": review.rating,
            "comment": review.comment,
            "created_at": review.created_at.isoformat(),
        }

    @staticmethod
    def _review_from_dict(data: dict[str, Any]) -> Review:
        return Review(
            id=UUID(data["id"]),
            reviewer_id=UUID(data["reviewer_id"]),
            rating=int(data["rating"]),
            comment=data["comment"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )

    @staticmethod
    def _portfolio_item_to_dict(item: PortfolioItem) -> dict[str, Any]:
        return {
            "id": str(item.id),
            "url": item.url,
            "title": item.title,
            "type": item.type.value,
            "uploaded_at": item.uploaded_at.isoformat(),
        }

    @staticmethod
    def _portfolio_item_from_dict(data: dict[str, Any]) -> PortfolioItem:
        return PortfolioItem(
            id=UUID(data["id"]),
            url=data["url"],
            title=data["title"],
            type=PortfolioItemType(data["type"]),
            uploaded_at=datetime.fromisoformat(data["uploaded_at"]),
        )

    def _to_entity(self, model: SkillProfileModel) -> SkillProfile:
        """Convert ORM model to domain entity."""
        return SkillProfile(
            id=model.id,
            owner_id=model.owner_id,
            name=model.name,
            primary_skill=model.primary_skill,
            description=model.description,
            looking_for=list(model.looking_for or []),
            portfolio=[self._portfolio_item_from_dict(d) for d in model.portfolio or []],
            reviews=[self._review_from_dict(d) for d in model.reviews or []],
            credits=model.credits,
            rating=model.rating,
            featured=model.featured,
            avatar_url=model.avatar_url,
            location=list(model.location) if model.location is not None else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: SkillProfile) -> SkillProfileModel:
        """Convert domain entity to ORM model."""
        return SkillProfileModel(
            id=entity.id,
            owner_id=entity.owner_id,
            name=entity.name,
            primary_skill=entity.primary_skill,
            description=entity.description,
            looking_for=list(entity.looking_for),
            portfolio=[self._portfolio_item_to_dict(item) for item in entity.portfolio],
            reviews=[self._review_to_dict(review) for review in entity.reviews],
            credits=entity.credits,
            rating=entity.rating,
            featured=entity.featured,
            avatar_url=entity.avatar_url,
            location=list(entity.location) if entity.location is not None else None,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
