"""Like and Comment API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import CurrentProfile, get_social_service
from api.v1.schemas.comment import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
)
from api.v1.schemas.post import LikeStateResponse, LikeStatusResponse, LikeToggleRequest
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.social_service import SocialGraphService

likes_router = APIRouter(prefix="/posts/{post_id}/likes", tags=["likes"])


@likes_router.get(
    "/me",
    response_model=LikeStatusResponse,
    summary="Do I like this post",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_like_status(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: SocialGraphService = Depends(get_social_service),
) -> LikeStatusResponse:
    """Whether the authenticated member likes the post."""
    liked = await service.is_liked(user.id, post_id)
    return LikeStatusResponse(post_id=post_id, liked=liked)


@likes_router.post(
    "/toggle",
    response_model=LikeStateResponse,
    summary="Like or unlike a post",
    responses={
        200: {"description": "Like state changed"},
        404: {"description": "Post not found"},
        409: {"description": "Post is already liked"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_like(
    request: Request,
    post_id: UUID,
    body: LikeToggleRequest,
    profile: CurrentProfile,
    service: SocialGraphService = Depends(get_social_service),
) -> LikeStateResponse:
    """
    Flip the like state the client currently shows.

    `currently_liked=true` removes the like, `false` adds it. The response
    carries the like count read after the write.
    """
    state = await service.toggle_like(profile.id, post_id, body.currently_liked)
    return LikeStateResponse.from_state(state)


post_comments_router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])


@post_comments_router.get(
    "",
    response_model=CommentListResponse,
    summary="List comments on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_comments(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: SocialGraphService = Depends(get_social_service),
) -> CommentListResponse:
    """Get a post's comments, oldest first."""
    views = await service.list_comments(post_id)
    return CommentListResponse(data=[CommentResponse.from_view(view) for view in views])


@post_comments_router.post(
    "",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={
        201: {"description": "Comment created successfully"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    profile: CurrentProfile,
    service: SocialGraphService = Depends(get_social_service),
) -> CommentDetailResponse:
    """Add a comment as the authenticated member."""
    view = await service.add_comment(profile.id, post_id, body.content)
    return CommentDetailResponse(data=CommentResponse.from_view(view))


comments_router = APIRouter(prefix="/comments", tags=["comments"])


@comments_router.patch(
    "/{comment_id}",
    response_model=CommentDetailResponse,
    summary="Edit a comment",
    responses={
        200: {"description": "Comment updated successfully"},
        403: {"description": "Not the comment author"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_comment(
    request: Request,
    comment_id: UUID,
    body: CommentUpdate,
    user: CurrentUser,
    service: SocialGraphService = Depends(get_social_service),
) -> CommentDetailResponse:
    """Edit a comment. Only its author may do so."""
    view = await service.update_comment(user.id, comment_id, body.content)
    return CommentDetailResponse(data=CommentResponse.from_view(view))


@comments_router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    responses={
        204: {"description": "Comment deleted successfully"},
        403: {"description": "Not the comment author"},
        404: {"description": "Comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    comment_id: UUID,
    user: CurrentUser,
    service: SocialGraphService = Depends(get_social_service),
) -> None:
    """Delete a comment. Only its author may do so."""
    await service.delete_comment(user.id, comment_id)
    return None
