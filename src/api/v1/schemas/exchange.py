"""Pydantic schemas for Exchange API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.exchange import ExchangeStatus


class ExchangeCreate(BaseModel):
    """Schema for proposing an exchange."""

    recipient_id: UUID
    sender_skill: str | None = Field(None, max_length=100)
    recipient_skill: str | None = Field(None, max_length=100)


class ExchangeStatusUpdate(BaseModel):
    """Schema for accepting or rejecting a proposal."""

    status: str


class ExchangeResponse(BaseModel):
    """Schema for an exchange proposal."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sender_id: UUID
    recipient_id: UUID
    sender_skill: str
    recipient_skill: str
    status: ExchangeStatus
    created_at: datetime
    updated_at: datetime


class ExchangeListResponse(BaseModel):
    """Schema for list of proposals."""

    data: list[ExchangeResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ExchangeDetailResponse(BaseModel):
    """Schema for single proposal."""

    data: ExchangeResponse
