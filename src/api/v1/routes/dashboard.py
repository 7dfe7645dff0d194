"""Dashboard API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_dashboard_service
from api.v1.schemas.dashboard import (
    ActivityItemResponse,
    ActivityListMeta,
    ActivityListResponse,
    DashboardData,
    DashboardResponse,
    DashboardStatsResponse,
    DashboardUser,
)
from api.v1.schemas.profile import ProfileResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.entities.pagination import DEFAULT_PAGE_SIZE
from domain.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Get my dashboard",
    responses={404: {"description": "User record not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_dashboard(
    request: Request,
    user: CurrentUser,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """Stats, profile and the five latest activity items for the caller."""
    summary = await service.get_summary(user.id)
    return DashboardResponse(
        data=DashboardData(
            user=DashboardUser.model_validate(summary.user),
            profile=ProfileResponse.from_entity(summary.profile) if summary.profile else None,
            stats=DashboardStatsResponse.model_validate(summary.stats),
            recent_activity=[
                ActivityItemResponse.model_validate(a) for a in summary.recent_activity
            ],
        )
    )


@router.get(
    "/activity",
    response_model=ActivityListResponse,
    summary="Get my activity feed",
    responses={404: {"description": "User record not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_activity(
    request: Request,
    user: CurrentUser,
    page: int = Query(1, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size (clamped to 1-100)"),
    service: DashboardService = Depends(get_dashboard_service),
) -> ActivityListResponse:
    """Requests, responses, exchanges and reviews received, newest first."""
    result = await service.get_activity(user.id, page=page, page_size=limit)
    return ActivityListResponse(
        data=[ActivityItemResponse.model_validate(a) for a in result.items],
        meta=ActivityListMeta(
            total=result.total,
            page=result.page,
            limit=result.page_size,
            total_pages=result.total_pages,
        ),
    )
