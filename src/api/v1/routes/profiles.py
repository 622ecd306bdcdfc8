"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import CurrentProfile, get_feed_service, get_profile_service
from api.v1.schemas.common import PageMeta
from api.v1.schemas.post import PostListResponse, PostResponse
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse, ProfileUpdate
from core.config import settings
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.feed_service import FeedService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={
        200: {"description": "Profile returned, created on first sign-in"},
        409: {"description": "Profile creation raced with another request"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    profile: CurrentProfile,
) -> ProfileDetailResponse:
    """Resolve the caller's profile. The first call after signup creates it."""
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


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
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get any member's profile."""
    profile = await service.get(profile_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.patch(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated successfully"},
        403: {"description": "Not the profile owner"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: UUID,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update name, bio or avatar. Members can only edit their own profile."""
    profile = await service.update(
        actor_id=user.id,
        profile_id=profile_id,
        name=body.name,
        bio=body.bio,
        avatar_url=body.avatar_url,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
    responses={
        204: {"description": "Profile deleted successfully"},
        403: {"description": "Not the profile owner"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Delete a profile. Its posts, likes and comments go with it."""
    await service.delete(user.id, profile_id)
    return None


@router.get(
    "/{profile_id}/posts",
    response_model=PostListResponse,
    summary="List a member's posts",
    responses={
        400: {"description": "Invalid cursor"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profile_posts(
    request: Request,
    profile_id: UUID,
    user: CurrentUser,
    limit: int = Query(settings.feed_page_size, ge=1, le=settings.feed_max_page_size),
    cursor: UUID | None = Query(None, description="ID of the last post of the previous page"),
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """Get one member's posts, newest first."""
    page = await service.get_posts_by_author(
        author_id=profile_id,
        limit=limit,
        cursor=cursor,
        viewer_id=user.id,
    )
    return PostListResponse(
        data=[PostResponse.from_view(view) for view in page.items],
        meta=PageMeta(limit=limit, next_cursor=page.next_cursor),
    )
