"""Pydantic schemas for Skill Profile API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.portfolio import PortfolioItemResponse
from api.v1.schemas.review import ReviewResponse
from domain.entities.profile import SkillProfile


class ProfileBase(BaseModel):
    """Fields shared by create and update.

    Presence, vocabulary and length rules are checked by the service so that
    they surface as 400 validation errors rather than 422s.
    """

    name: str | None = None
    primary_skill: str | None = Field(None, alias="primarySkill")
    description: str | None = None
    looking_for: list[str] | None = Field(None, alias="lookingFor")

    model_config = ConfigDict(populate_by_name=True)


class ProfileCreate(ProfileBase):
    """Schema for creating (or re-saving) the caller's profile."""


class PortfolioOrderEntry(BaseModel):
    """One kept portfolio item in the requested order."""

    id: UUID
    title: str | None = Field(None, max_length=255)


class ProfileUpdate(ProfileBase):
    """Schema for replacing the caller's profile fields."""

    portfolio: list[PortfolioOrderEntry] | None = None


class ProfileResponse(BaseModel):
    """Schema for a skill profile."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "owner_id": "9b2d7c1e-4f0a-4f7e-8d2a-1c3b5e7f9a0b",
                "name": "Ada",
                "primary_skill": "Web Development",
                "description": "Full-stack developer, happy to pair.",
                "looking_for": ["UI/UX Design"],
                "portfolio": [],
                "reviews": [],
                "review_count": 0,
                "credits": 0,
                "rating": 0.0,
                "featured": False,
                "avatar_url": None,
                "location": None,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    owner_id: UUID
    name: str
    primary_skill: str
    description: str
    looking_for: list[str]
    portfolio: list[PortfolioItemResponse]
    reviews: list[ReviewResponse]
    review_count: int
    credits: int
    rating: float
    featured: bool
    avatar_url: str | None = None
    location: list[float] | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: SkillProfile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            owner_id=profile.owner_id,
            name=profile.name,
            primary_skill=profile.primary_skill,
            description=profile.description,
            looking_for=list(profile.looking_for),
            portfolio=[PortfolioItemResponse.from_entity(item) for item in profile.portfolio],
            reviews=[ReviewResponse.model_validate(review) for review in profile.reviews],
            review_count=len(profile.reviews),
            credits=profile.credits,
            rating=profile.rating,
            featured=profile.featured,
            avatar_url=profile.avatar_url,
            location=profile.location,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ProfileListResponse(BaseModel):
    """Schema for list of profiles."""

    data: list[ProfileResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ProfileDetailResponse(BaseModel):
    """Schema for single profile."""

    data: ProfileResponse
