"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import CurrentProfile, get_feed_service
from api.v1.schemas.common import PageMeta
from api.v1.schemas.post import (
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from core.config import settings
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.feed_service import FeedService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get(
    "",
    response_model=PostListResponse,
    summary="List the feed",
    responses={400: {"description": "Invalid cursor"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    limit: int = Query(settings.feed_page_size, ge=1, le=settings.feed_max_page_size),
    cursor: UUID | None = Query(None, description="ID of the last post of the previous page"),
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """
    Get all posts newest first, with author, like and comment counts.

    Pass `meta.next_cursor` back as `cursor` to fetch the next page.
    """
    page = await service.list_posts(limit=limit, cursor=cursor, viewer_id=user.id)
    return PostListResponse(
        data=[PostResponse.from_view(view) for view in page.items],
        meta=PageMeta(limit=limit, next_cursor=page.next_cursor),
    )


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created successfully"},
        400: {"description": "Content is blank"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    profile: CurrentProfile,
    service: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Publish a post as the authenticated member."""
    view = await service.create_post(author_id=profile.id, content=body.content)
    return PostDetailResponse(data=PostResponse.from_view(view))


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Get a single post with its author and counts."""
    view = await service.get_post(post_id, viewer_id=user.id)
    return PostDetailResponse(data=PostResponse.from_view(view))


@router.patch(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Update a post",
    responses={
        200: {"description": "Post updated successfully"},
        403: {"description": "Not the post author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_post(
    request: Request,
    post_id: UUID,
    body: PostUpdate,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Edit a post. Only its author may do so."""
    view = await service.update_post(actor_id=user.id, post_id=post_id, content=body.content)
    return PostDetailResponse(data=PostResponse.from_view(view))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        204: {"description": "Post deleted successfully"},
        403: {"description": "Not the post author"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: FeedService = Depends(get_feed_service),
) -> None:
    """Delete a post. Its likes and comments are removed with it."""
    await service.delete_post(user.id, post_id)
    return None
