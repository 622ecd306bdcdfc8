"""Like repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.like import Like


class ILikeRepository(Protocol):
    """Repository interface for Like rows."""

    async def exists(self, user_id: UUID, post_id: UUID) -> bool:
        """Check whether the user likes the post."""
        ...

    async def create(self, like: Like) -> Like:
        """Insert a like. Fails on the (user_id, post_id) uniqueness constraint."""
        ...

    async def delete_for(self, user_id: UUID, post_id: UUID) -> bool:
        """Delete the user's like of the post; False if there was none."""
        ...

    async def count_for_post(self, post_id: UUID) -> int:
        """Count likes referencing the post."""
        ...

    async def get_liked_post_ids(self, user_id: UUID, post_ids: list[UUID]) -> set[UUID]:
        """Return the subset of ``post_ids`` the user likes."""
        ...
