"""Service request repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.service_request import ServiceRequest, ServiceResponse


class IServiceRequestRepository(Protocol):
    """Repository interface for ServiceRequest entities."""

    async def get(self, id: UUID, for_update: bool = False) -> ServiceRequest | None:
        """Get a request (with its responses) by ID."""
        ...

    async def get_all(
        self, status: str | None = None, skill: str | None = None
    ) -> list[ServiceRequest]:
        """Get all requests newest first, optionally filtered."""
        ...

    async def get_for_requester(self, user_id: UUID) -> list[ServiceRequest]:
        """Get requests created by a user, newest first."""
        ...

    async def get_responded_by(self, user_id: UUID) -> list[ServiceRequest]:
        """Get requests a user has responded to, newest first."""
        ...

    async def create(self, request: ServiceRequest) -> ServiceRequest:
        """Create a new request."""
        ...

    async def update(self, request: ServiceRequest) -> ServiceRequest:
        """Update scalar fields (status, views, timestamps)."""
        ...

    async def add_response(self, request_id: UUID, response: ServiceResponse) -> ServiceResponse:
        """Append a response to a request."""
        ...
