"""Pydantic schemas for Comment API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from api.v1.schemas.profile import AuthorResponse
from domain.entities.comment import CommentView

COMMENT_MAX_LENGTH = 2000


class CommentCreate(BaseModel):
    """Schema for creating a Comment."""

    content: str = Field(..., max_length=COMMENT_MAX_LENGTH)


class CommentUpdate(BaseModel):
    """Schema for updating a Comment."""

    content: str = Field(..., max_length=COMMENT_MAX_LENGTH)


class CommentResponse(BaseModel):
    """Schema for Comment response."""

    id: UUID
    post_id: UUID
    user_id: UUID
    content: str
    author: AuthorResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        return cls(
            id=view.comment.id,
            post_id=view.comment.post_id,
            user_id=view.comment.user_id,
            content=view.comment.content,
            author=AuthorResponse.model_validate(view.author),
            created_at=view.comment.created_at,
            updated_at=view.comment.updated_at,
        )


class CommentListResponse(BaseModel):
    """Schema for list of Comments."""

    data: list[CommentResponse]


class CommentDetailResponse(BaseModel):
    """Schema for single Comment."""

    data: CommentResponse
