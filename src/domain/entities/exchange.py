"""Exchange proposal domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class ExchangeStatus(StrEnum):
    """Status of a skill-for-skill exchange proposal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class ExchangeProposal:
    """Domain entity for a two-party skill exchange offer."""

    sender_id: UUID
    recipient_id: UUID
    sender_skill: str
    recipient_skill: str
    id: UUID = field(default_factory=uuid4)
    status: ExchangeStatus = ExchangeStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return self.status == ExchangeStatus.PENDING

    def involves(self, user_id: UUID) -> bool:
        return user_id in (self.sender_id, self.recipient_id)

    def accept(self) -> None:
        """Mark the proposal as accepted."""
        self.status = ExchangeStatus.ACCEPTED
        self.updated_at = datetime.utcnow()

    def reject(self) -> None:
        """Mark the proposal as rejected."""
        self.status = ExchangeStatus.REJECTED
        self.updated_at = datetime.utcnow()
