"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post, PostView


class IPostRepository(Protocol):
    """Repository interface for Post entities."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def get_view(self, id: UUID) -> PostView | None:
        """Get a post joined with its author and interaction counts."""
        ...

    async def list_views(
        self,
        limit: int,
        before: Post | None = None,
        author_id: UUID | None = None,
    ) -> list[PostView]:
        """List posts newest first, strictly older than ``before`` when given."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def update(self, post: Post) -> Post:
        """Update an existing post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post and return success status."""
        ...
