"""Service request domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class ServiceRequestStatus(StrEnum):
    """Lifecycle of a service request."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass
class ServiceResponse:
    """A reply posted on a service request."""

    responder_id: UUID
    message: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class ServiceRequest:
    """Domain entity for a posting asking for skill help."""

    requester_id: UUID
    requester_name: str
    title: str
    description: str
    skill_needed: str
    skill_offered: str
    id: UUID = field(default_factory=uuid4)
    status: ServiceRequestStatus = ServiceRequestStatus.OPEN
    responses: list[ServiceResponse] = field(default_factory=list)
    views: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def response_by(self, user_id: UUID) -> ServiceResponse | None:
        """Return the first response posted by a user, if any."""
        return next((r for r in self.responses if r.responder_id == user_id), None)

    def add_response(self, response: ServiceResponse) -> None:
        self.responses.append(response)
        self.updated_at = datetime.utcnow()

    def record_view(self) -> None:
        self.views += 1

    def change_status(self, status: ServiceRequestStatus) -> None:
        self.status = status
        self.updated_at = datetime.utcnow()
