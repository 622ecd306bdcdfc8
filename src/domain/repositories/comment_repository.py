"""Comment repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.comment import Comment, CommentView


class ICommentRepository(Protocol):
    """Repository interface for Comment entities."""

    async def get(self, id: UUID) -> Comment | None:
        """Get a comment by ID."""
        ...

    async def list_views_for_post(self, post_id: UUID) -> list[CommentView]:
        """List a post's comments oldest first, each with its author."""
        ...

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        ...

    async def update(self, comment: Comment) -> Comment:
        """Update an existing comment."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a comment and return success status."""
        ...

    async def count_for_post(self, post_id: UUID) -> int:
        """Count comments referencing the post."""
        ...
