"""Service request API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_service_request_service
from api.v1.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestDetailResponse,
    ServiceRequestListResponse,
    ServiceRequestResponse,
    ServiceRequestStatusUpdate,
    ServiceResponseCreate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.service_request_service import ServiceRequestService

router = APIRouter(prefix="/service-requests", tags=["service-requests"])


@router.get(
    "",
    response_model=ServiceRequestListResponse,
    summary="List service requests",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_requests(
    request: Request,
    status_filter: str | None = Query(None, alias="status"),
    skill: str | None = Query(None, description="Substring of the needed or offered skill"),
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestListResponse:
    """Browse the request board, newest first."""
    requests = await service.list_requests(status=status_filter, skill=skill)
    data = [ServiceRequestResponse.model_validate(r) for r in requests]
    return ServiceRequestListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=ServiceRequestDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a service request",
    responses={
        400: {"description": "Missing fields"},
        404: {"description": "Requester has no user record"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_request(
    request: Request,
    body: ServiceRequestCreate,
    user: CurrentUser,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestDetailResponse:
    """Ask for help with a skill, offering one in return."""
    created = await service.create_request(
        requester_id=user.id,
        title=body.title,
        description=body.description,
        skill_needed=body.skill_needed,
        skill_offered=body.skill_offered,
    )
    return ServiceRequestDetailResponse(data=ServiceRequestResponse.model_validate(created))


@router.get(
    "/{request_id}",
    response_model=ServiceRequestDetailResponse,
    summary="Get a service request",
    responses={404: {"description": "Request not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_request(
    request: Request,
    request_id: UUID,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestDetailResponse:
    """Get a request with its responses. Each fetch counts as a view."""
    found = await service.get_request(request_id)
    return ServiceRequestDetailResponse(data=ServiceRequestResponse.model_validate(found))


@router.post(
    "/{request_id}/responses",
    response_model=ServiceRequestDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Respond to a service request",
    responses={
        400: {"description": "Empty message"},
        404: {"description": "Request not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_response(
    request: Request,
    request_id: UUID,
    body: ServiceResponseCreate,
    user: CurrentUser,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestDetailResponse:
    """Reply to a request."""
    updated = await service.add_response(
        request_id=request_id,
        responder_id=user.id,
        message=body.message,
    )
    return ServiceRequestDetailResponse(data=ServiceRequestResponse.model_validate(updated))


@router.patch(
    "/{request_id}/status",
    response_model=ServiceRequestDetailResponse,
    summary="Change a request's status",
    responses={
        400: {"description": "Unknown status"},
        403: {"description": "Not the request's owner"},
        404: {"description": "Request not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_status(
    request: Request,
    request_id: UUID,
    body: ServiceRequestStatusUpdate,
    user: CurrentUser,
    service: ServiceRequestService = Depends(get_service_request_service),
) -> ServiceRequestDetailResponse:
    """Move a request between open, in-progress and completed."""
    updated = await service.update_status(
        request_id=request_id,
        requester_id=user.id,
        status=body.status,
    )
    return ServiceRequestDetailResponse(data=ServiceRequestResponse.model_validate(updated))
