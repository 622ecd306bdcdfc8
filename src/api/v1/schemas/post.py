"""Pydantic schemas for Post and Like API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import PageMeta
from api.v1.schemas.profile import AuthorResponse
from domain.entities.like import LikeState
from domain.entities.post import PostView

POST_MAX_LENGTH = 5000


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    content: str = Field(..., max_length=POST_MAX_LENGTH)


class PostUpdate(BaseModel):
    """Schema for updating a Post."""

    content: str = Field(..., max_length=POST_MAX_LENGTH)


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "content": "Hello world",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "author": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "name": "Alice",
                    "email": "alice@example.com",
                    "bio": "",
                    "avatar_url": None,
                },
                "like_count": 0,
                "comment_count": 0,
                "liked_by_me": False,
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    content: str
    user_id: UUID
    author: AuthorResponse
    like_count: int = 0
    comment_count: int = 0
    liked_by_me: bool | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: PostView) -> "PostResponse":
        return cls(
            id=view.post.id,
            content=view.post.content,
            user_id=view.post.user_id,
            author=AuthorResponse.model_validate(view.author),
            like_count=view.like_count,
            comment_count=view.comment_count,
            liked_by_me=view.liked_by_viewer,
            created_at=view.post.created_at,
            updated_at=view.post.updated_at,
        )


class PostListResponse(BaseModel):
    """Schema for a page of Posts."""

    data: list[PostResponse]
    meta: PageMeta


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class LikeToggleRequest(BaseModel):
    """Schema for toggling a like. ``currently_liked`` is the state the client shows."""

    currently_liked: bool


class LikeStatusResponse(BaseModel):
    """Schema for the caller's like status on a post."""

    post_id: UUID
    liked: bool


class LikeStateResponse(BaseModel):
    """Schema for the result of a like toggle."""

    model_config = ConfigDict(from_attributes=True)

    post_id: UUID
    liked: bool
    like_count: int

    @classmethod
    def from_state(cls, state: LikeState) -> "LikeStateResponse":
        return cls.model_validate(state)
