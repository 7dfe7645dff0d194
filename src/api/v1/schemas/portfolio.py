"""Pydantic schemas for Portfolio API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from domain.entities.profile import PortfolioItem


class PortfolioItemResponse(BaseModel):
    """Schema for a portfolio item."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "2f1c3e5a-7b9d-4e1f-8a2c-4d6e8f0a1b3c",
                "url": "/uploads/portfolio/123e4567/5f0c.png",
                "title": "landing-page.png",
                "type": "image",
                "uploaded_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    url: str
    title: str
    type: str
    uploaded_at: datetime

    @classmethod
    def from_entity(cls, item: PortfolioItem) -> "PortfolioItemResponse":
        return cls(
            id=item.id,
            url=item.url,
            title=item.title,
            type=item.type.value,
            uploaded_at=item.uploaded_at,
        )


class PortfolioItemDetailResponse(BaseModel):
    """Schema for a single uploaded item."""

    data: PortfolioItemResponse
