"""Portfolio API routes (nested under a profile)."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_portfolio_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.portfolio import PortfolioItemDetailResponse, PortfolioItemResponse
from core.rate_limit import UPLOAD_LIMIT, WRITE_LIMIT, limiter
from domain.services.portfolio_service import MAX_PORTFOLIO_FILE_SIZE, PortfolioService

router = APIRouter(prefix="/profiles/{profile_id}/portfolio", tags=["portfolio"])


@router.post(
    "",
    response_model=PortfolioItemDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a portfolio item",
    responses={
        400: {"description": "Unsupported file type or file too large"},
        403: {"description": "Not the profile's owner"},
        404: {"description": "Profile not found"},
        500: {"description": "Asset storage failed"},
    },
)
@limiter.limit(UPLOAD_LIMIT)  # type: ignore[untyped-decorator]
async def upload_portfolio_item(
    request: Request,
    profile_id: UUID,
    user: CurrentUser,
    file: UploadFile = File(..., description="Image, PDF or Word document, max 5 MB"),
    title: str | None = Form(None, max_length=255),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioItemDetailResponse:
    """Upload a file to the profile's portfolio."""
    # One byte over the limit is enough to reject the upload
    data = await file.read(MAX_PORTFOLIO_FILE_SIZE + 1)
    await file.close()

    item = await service.upload_portfolio_item(
        profile_id=profile_id,
        requester_id=user.id,
        data=data,
        filename=file.filename or "",
        content_type=file.content_type,
        title=title,
        is_admin=user.is_admin,
    )
    return PortfolioItemDetailResponse(data=PortfolioItemResponse.from_entity(item))


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Delete a portfolio item",
    responses={
        403: {"description": "Not the profile's owner"},
        404: {"description": "Profile or item not found"},
        500: {"description": "Asset storage failed; item kept"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_portfolio_item(
    request: Request,
    profile_id: UUID,
    item_id: UUID,
    user: CurrentUser,
    service: PortfolioService = Depends(get_portfolio_service),
) -> MessageResponse:
    """Delete the stored file, then remove the item from the portfolio."""
    await service.delete_portfolio_item(
        profile_id=profile_id,
        item_id=item_id,
        requester_id=user.id,
        is_admin=user.is_admin,
    )
    return MessageResponse(message="Portfolio item deleted")
