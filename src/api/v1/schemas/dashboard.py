"""Pydantic schemas for Dashboard API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from api.v1.schemas.profile import ProfileResponse


class DashboardUser(BaseModel):
    """The user the dashboard belongs to."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str


class DashboardStatsResponse(BaseModel):
    """Aggregated counters."""

    model_config = ConfigDict(from_attributes=True)

    requests: int
    responses: int
    open_requests: int
    completed_requests: int
    completion_rate: float
    earned_credits: int
    credits: int
    rating: float
    review_count: int
    pending_exchanges: int
    skill_distribution: dict[str, int]


class ActivityItemResponse(BaseModel):
    """One entry of the activity feed."""

    model_config = ConfigDict(from_attributes=True)

    type: str
    title: str
    description: str
    entity_id: UUID
    occurred_at: datetime


class DashboardData(BaseModel):
    """Dashboard payload."""

    user: DashboardUser
    profile: ProfileResponse | None
    stats: DashboardStatsResponse
    recent_activity: list[ActivityItemResponse]


class DashboardResponse(BaseModel):
    """Schema for the dashboard summary."""

    data: DashboardData


class ActivityListMeta(BaseModel):
    """Pagination metadata for the activity feed."""

    total: int
    page: int
    limit: int
    total_pages: int


class ActivityListResponse(BaseModel):
    """Schema for a page of activity."""

    data: list[ActivityItemResponse]
    meta: ActivityListMeta
