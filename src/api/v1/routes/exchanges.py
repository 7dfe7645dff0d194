"""Exchange proposal API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_exchange_service
from api.v1.schemas.exchange import (
    ExchangeCreate,
    ExchangeDetailResponse,
    ExchangeListResponse,
    ExchangeResponse,
    ExchangeStatusUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.exchange_service import ExchangeService

router = APIRouter(prefix="/exchanges", tags=["exchanges"])


@router.get(
    "",
    response_model=ExchangeListResponse,
    summary="List my exchange proposals",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_exchanges(
    request: Request,
    user: CurrentUser,
    service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeListResponse:
    """Proposals the caller sent or received, newest first."""
    exchanges = await service.list_exchanges(user.id)
    data = [ExchangeResponse.model_validate(e) for e in exchanges]
    return ExchangeListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=ExchangeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Propose an exchange",
    responses={
        400: {"description": "Missing skills or self-proposal"},
        404: {"description": "Recipient not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_exchange(
    request: Request,
    body: ExchangeCreate,
    user: CurrentUser,
    service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeDetailResponse:
    """Offer one of your skills for one of the recipient's."""
    exchange = await service.create_exchange(
        sender_id=user.id,
        recipient_id=body.recipient_id,
        sender_skill=body.sender_skill,
        recipient_skill=body.recipient_skill,
    )
    return ExchangeDetailResponse(data=ExchangeResponse.model_validate(exchange))


@router.patch(
    "/{exchange_id}/status",
    response_model=ExchangeDetailResponse,
    summary="Accept or reject a proposal",
    responses={
        400: {"description": "Status must be accepted or rejected"},
        403: {"description": "Only the recipient may respond"},
        404: {"description": "Exchange not found"},
        409: {"description": "Proposal already resolved"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_exchange_status(
    request: Request,
    exchange_id: UUID,
    body: ExchangeStatusUpdate,
    user: CurrentUser,
    service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeDetailResponse:
    """Resolve a pending proposal. Only its recipient may do this, once."""
    exchange = await service.update_status(
        exchange_id=exchange_id,
        requester_id=user.id,
        status=body.status,
    )
    return ExchangeDetailResponse(data=ExchangeResponse.model_validate(exchange))
