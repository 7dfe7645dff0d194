"""Review API routes (nested under a profile)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_review_service
from api.v1.schemas.review import (
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewDeletedResponse,
    ReviewListMeta,
    ReviewListResponse,
    ReviewResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.pagination import DEFAULT_PAGE_SIZE
from domain.services.review_service import ReviewService

router = APIRouter(prefix="/profiles/{profile_id}/reviews", tags=["reviews"])


@router.post(
    "",
    response_model=ReviewCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a profile",
    responses={
        400: {"description": "Invalid rating or empty comment"},
        404: {"description": "Profile not found"},
        409: {"description": "Already reviewed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_review(
    request: Request,
    profile_id: UUID,
    body: ReviewCreate,
    user: CurrentUser,
    service: ReviewService = Depends(get_review_service),
) -> ReviewCreatedResponse:
    """Add a 1-5 star review. One review per reviewer and profile."""
    review, rating = await service.add_review(
        profile_id=profile_id,
        reviewer_id=user.id,
        rating=body.rating,
        comment=body.comment,
    )
    return ReviewCreatedResponse(data=ReviewResponse.model_validate(review), rating=rating)


@router.get(
    "",
    response_model=ReviewListResponse,
    summary="List a profile's reviews",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_reviews(
    request: Request,
    profile_id: UUID,
    page: int = Query(1, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size (clamped to 1-100)"),
    service: ReviewService = Depends(get_review_service),
) -> ReviewListResponse:
    """Get one page of reviews in the order they were written."""
    result = await service.get_reviews(profile_id, page=page, page_size=limit)
    return ReviewListResponse(
        data=[ReviewResponse.model_validate(r) for r in result.page.items],
        meta=ReviewListMeta(
            total=result.page.total,
            page=result.page.page,
            limit=result.page.page_size,
            total_pages=result.page.total_pages,
            rating=result.rating,
        ),
    )


@router.delete(
    "/{review_id}",
    response_model=ReviewDeletedResponse,
    summary="Delete a review",
    responses={
        403: {"description": "Not the review's author"},
        404: {"description": "Profile or review not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_review(
    request: Request,
    profile_id: UUID,
    review_id: UUID,
    user: CurrentUser,
    service: ReviewService = Depends(get_review_service),
) -> ReviewDeletedResponse:
    """Delete a review. Allowed for its author and administrators."""
    rating = await service.delete_review(
        profile_id=profile_id,
        review_id=review_id,
        requester_id=user.id,
        is_admin=user.is_admin,
    )
    return ReviewDeletedResponse(message="Review deleted", rating=rating)
