"""SQLAlchemy implementation of the exchange proposal repository."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.exchange import ExchangeProposal, ExchangeStatus
from infrastructure.database.models import ExchangeModel


class SQLAlchemyExchangeRepository:
    """SQLAlchemy implementation of IExchangeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID, for_update: bool = False) -> ExchangeProposal | None:
        """Get a proposal by ID."""
        stmt = select(ExchangeModel).where(ExchangeModel.id == id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_user(self, user_id: UUID) -> list[ExchangeProposal]:
        """Get proposals sent or received by a user, newest first."""
        stmt = (
            select(ExchangeModel)
            .where(or_(ExchangeModel.sender_id == user_id, ExchangeModel.recipient_id == user_id))
            .order_by(ExchangeModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, exchange: ExchangeProposal) -> ExchangeProposal:
        """Create a new proposal."""
        model = self._to_model(exchange)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, exchange: ExchangeProposal) -> ExchangeProposal:
        """Update a proposal's status."""
        stmt = select(ExchangeModel).where(ExchangeModel.id == exchange.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Exchange {exchange.id} not found")

        model.status = exchange.status.value
        model.updated_at = exchange.updated_at

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ExchangeModel) -> ExchangeProposal:
        """Convert ORM model to domain entity."""
        return ExchangeProposal(
            id=model.id,
            sender_id=model.sender_id,
            recipient_id=model.recipient_id,
            sender_skill=model.sender_skill,
            recipient_skill=model.recipient_skill,
            status=ExchangeStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ExchangeProposal) -> ExchangeModel:
        """Convert domain entity to ORM model."""
        return ExchangeModel(
            id=entity.id,
            sender_id=entity.sender_id,
            recipient_id=entity.recipient_id,
            sender_skill=entity.sender_skill,
            recipient_skill=entity.recipient_skill,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
