"""Like domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A user's like of a post. At most one per (user_id, post_id)."""

    user_id: UUID
    post_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class LikeState:
    """Result of a like toggle: the caller's like status and the post's like count."""

    post_id: UUID
    liked: bool
    like_count: int
