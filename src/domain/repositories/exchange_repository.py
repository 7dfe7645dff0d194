"""Exchange proposal repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.exchange import ExchangeProposal


class IExchangeRepository(Protocol):
    """Repository interface for ExchangeProposal entities."""

    async def get(self, id: UUID, for_update: bool = False) -> ExchangeProposal | None:
        """Get a proposal by ID, optionally locking it."""
        ...

    async def get_for_user(self, user_id: UUID) -> list[ExchangeProposal]:
        """Get proposals the user sent or received, newest first."""
        ...

    async def create(self, exchange: ExchangeProposal) -> ExchangeProposal:
        """Create a new proposal."""
        ...

    async def update(self, exchange: ExchangeProposal) -> ExchangeProposal:
        """Update an existing proposal."""
        ...
