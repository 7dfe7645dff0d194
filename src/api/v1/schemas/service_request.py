"""Pydantic schemas for Service Request API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.service_request import ServiceRequestStatus


class ServiceRequestCreate(BaseModel):
    """Schema for posting a request. Required-field checks happen in the service."""

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    skill_needed: str | None = Field(None, max_length=100)
    skill_offered: str | None = Field(None, max_length=100)


class ServiceResponseCreate(BaseModel):
    """Schema for replying to a request."""

    message: str | None = None


class ServiceRequestStatusUpdate(BaseModel):
    """Schema for changing a request's status."""

    status: str


class ServiceResponseResponse(BaseModel):
    """Schema for a reply on a request."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    responder_id: UUID
    message: str
    created_at: datetime


class ServiceRequestResponse(BaseModel):
    """Schema for a service request."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "7d3a2b1c-0e9f-4a8b-9c7d-6e5f4a3b2c1d",
                "requester_id": "9b2d7c1e-4f0a-4f7e-8d2a-1c3b5e7f9a0b",
                "requester_name": "Ada",
                "title": "Need a logo",
                "description": "Looking for a simple wordmark.",
                "skill_needed": "Graphic Design",
                "skill_offered": "Web Development",
                "status": "open",
                "responses": [],
                "views": 3,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    requester_id: UUID
    requester_name: str
    title: str
    description: str
    skill_needed: str
    skill_offered: str
    status: ServiceRequestStatus
    responses: list[ServiceResponseResponse]
    views: int
    created_at: datetime
    updated_at: datetime


class ServiceRequestListResponse(BaseModel):
    """Schema for list of requests."""

    data: list[ServiceRequestResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ServiceRequestDetailResponse(BaseModel):
    """Schema for single request."""

    data: ServiceRequestResponse
