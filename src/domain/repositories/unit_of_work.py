"""Unit of Work protocol."""

from typing import Protocol
from uuid import UUID

from domain.repositories.comment_repository import ICommentRepository
from domain.repositories.like_repository import ILikeRepository
from domain.repositories.post_repository import IPostRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    posts: IPostRepository
    likes: ILikeRepository
    comments: ICommentRepository

    def act_as(self, principal_id: UUID) -> None:
        """Bind the principal that every write in this unit is checked against."""
        ...

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
