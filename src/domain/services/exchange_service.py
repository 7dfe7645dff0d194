"""Exchange proposal service."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    ExchangeNotFoundError,
    ForbiddenError,
    InvalidStatusTransitionError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.exchange import ExchangeProposal, ExchangeStatus
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

RESOLVED_STATUSES = (ExchangeStatus.ACCEPTED, ExchangeStatus.REJECTED)


class ExchangeService:
    """Service layer for skill-for-skill exchange proposals.

    A proposal starts pending and can be resolved exactly once, by its
    recipient.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_exchanges(self, user_id: UUID) -> list[ExchangeProposal]:
        """List proposals the user sent or received, newest first."""
        async with self._uow_factory() as uow:
            return await uow.exchanges.get_for_user(user_id)  # type: ignore[no-any-return]

    async def create_exchange(
        self,
        sender_id: UUID,
        recipient_id: UUID,
        sender_skill: str | None,
        recipient_skill: str | None,
    ) -> ExchangeProposal:
        """Propose an exchange to another user.

        Raises:
            ValidationError: If a skill is blank or the recipient is the sender.
            UserNotFoundError: If the recipient does not exist.
        """
        missing = [
            name
            for name, value in (("sender_skill", sender_skill), ("recipient_skill", recipient_skill))
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            raise ValidationError(
                "Please provide all required fields",
                details={"missing_fields": missing},
            )
        if recipient_id == sender_id:
            raise ValidationError("Cannot propose an exchange to yourself")

        async with self._uow_factory() as uow:
            recipient = await uow.users.get(recipient_id)
            if not recipient:
                raise UserNotFoundError(str(recipient_id))

            exchange = ExchangeProposal(
                sender_id=sender_id,
                recipient_id=recipient_id,
                sender_skill=str(sender_skill).strip(),
                recipient_skill=str(recipient_skill).strip(),
            )
            created = await uow.exchanges.create(exchange)
            await uow.commit()

            logger.info(
                "exchange_proposed",
                exchange_id=str(created.id),
                sender_id=str(sender_id),
                recipient_id=str(recipient_id),
            )
            return created  # type: ignore[no-any-return]

    async def update_status(
        self,
        exchange_id: UUID,
        requester_id: UUID,
        status: str,
    ) -> ExchangeProposal:
        """Accept or reject a pending proposal."""
        async with self._uow_factory() as uow:
            exchange = await uow.exchanges.get(exchange_id, for_update=True)
            if not exchange:
                raise ExchangeNotFoundError(str(exchange_id))

            if exchange.recipient_id != requester_id:
                raise ForbiddenError("Not authorized to update this exchange")

            if status not in [s.value for s in RESOLVED_STATUSES]:
                raise ValidationError(
                    "Invalid status",
                    details={"status": status, "valid_statuses": [s.value for s in RESOLVED_STATUSES]},
                )

            if not exchange.is_pending:
                raise InvalidStatusTransitionError(exchange.status.value, status)

            if status == ExchangeStatus.ACCEPTED:
                exchange.accept()
            else:
                exchange.reject()

            updated = await uow.exchanges.update(exchange)
            await uow.commit()
            return updated  # type: ignore[no-any-return]
