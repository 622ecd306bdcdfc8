"""Comment domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.profile import Profile


@dataclass
class Comment:
    """Domain entity for a Comment on a post."""

    user_id: UUID
    post_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class CommentView:
    """Read-only value object: a Comment bundled with its author."""

    comment: Comment
    author: Profile
