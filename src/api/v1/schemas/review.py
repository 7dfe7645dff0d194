"""Pydantic schemas for Review API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ReviewCreate(BaseModel):
    """Schema for adding a review.

    ``rating`` is passed through untouched: the 1-5 integer rule (booleans
    and fractions rejected) is enforced by the service as a 400.
    """

    rating: Any = None
    comment: str | None = None


class ReviewResponse(BaseModel):
    """Schema for a single review."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    reviewer_id: UUID
    rating: int
    comment: str
    created_at: datetime


class ReviewCreatedResponse(BaseModel):
    """Schema returned after adding a review."""

    data: ReviewResponse
    rating: float


class ReviewListMeta(BaseModel):
    """Pagination metadata for a page of reviews."""

    total: int
    page: int
    limit: int
    total_pages: int
    rating: float


class ReviewListResponse(BaseModel):
    """Schema for a page of reviews."""

    data: list[ReviewResponse]
    meta: ReviewListMeta


class ReviewDeletedResponse(BaseModel):
    """Schema returned after deleting a review."""

    message: str
    rating: float
