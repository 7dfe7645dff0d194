"""Skill profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List skill profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    skill: str | None = Query(None, description="Match primary skill or looking-for list"),
    search: str | None = Query(None, description="Case-insensitive search in name and description"),
    featured: bool | None = Query(None),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Browse all profiles, newest first."""
    profiles = await service.list_profiles(skill=skill, search=search, featured=featured)
    data = [ProfileResponse.from_entity(p) for p in profiles]
    return ProfileListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create or update my profile",
    responses={
        200: {"description": "Existing profile updated"},
        201: {"description": "Profile created"},
        400: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def save_profile(
    request: Request,
    response: Response,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the caller's profile, or update it if one already exists."""
    profile, created = await service.save_profile(
        owner_id=user.id,
        name=body.name,
        primary_skill=body.primary_skill,
        description=body.description,
        looking_for=body.looking_for,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile yet"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the caller's newest profile."""
    profile = await service.get_profile_by_owner(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.put(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Update my profile",
    responses={
        400: {"description": "Validation error"},
        404: {"description": "No profile yet"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Replace the caller's profile fields; optionally reorder or prune the portfolio."""
    portfolio = (
        [(entry.id, entry.title) for entry in body.portfolio]
        if body.portfolio is not None
        else None
    )
    profile = await service.update_profile(
        owner_id=user.id,
        name=body.name,
        primary_skill=body.primary_skill,
        description=body.description,
        looking_for=body.looking_for,
        portfolio=portfolio,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/me",
    response_model=MessageResponse,
    summary="Delete my profile",
    responses={404: {"description": "No profile yet"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile and its portfolio files."""
    await service.delete_profile(user.id)
    return MessageResponse(message="Profile deleted")


@router.get(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Public view of any profile."""
    profile = await service.get_profile(profile_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))
