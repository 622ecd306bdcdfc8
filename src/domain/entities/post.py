"""Post domain entity and its read-side views."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import ValidationError
from domain.entities.profile import Profile


def normalize_content(content: str | None, field_name: str = "content") -> str:
    """Trim user-supplied text and reject it if nothing is left."""
    cleaned = (content or "").strip()
    if not cleaned:
        raise ValidationError(f"{field_name.capitalize()} must not be empty", field=field_name)
    return cleaned


@dataclass
class Post:
    """Domain entity for a Post."""

    user_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class PostView:
    """Read-only snapshot of a post joined with its author and interaction counts.

    ``liked_by_viewer`` is None when the snapshot was built without a viewer.
    """

    post: Post
    author: Profile
    like_count: int = 0
    comment_count: int = 0
    liked_by_viewer: bool | None = None


@dataclass(frozen=True, slots=True)
class FeedPage:
    """A page of posts, newest first."""

    items: list[PostView]
    next_cursor: UUID | None = None


def apply_like_delta(view: PostView, delta: int) -> PostView:
    """Return a new snapshot with the like count moved by ``delta`` (+1 or -1).

    The count never goes below zero.
    """
    if delta not in (1, -1):
        raise ValueError(f"delta must be +1 or -1, got {delta}")
    return replace(
        view,
        like_count=max(0, view.like_count + delta),
        liked_by_viewer=delta > 0,
    )


def reconcile(local: PostView, fresh: PostView) -> PostView:
    """Replace optimistic local counts with an authoritative fetch of the same post."""
    if local.post.id != fresh.post.id:
        raise ValueError("Cannot reconcile snapshots of different posts")
    if fresh.liked_by_viewer is None:
        return replace(fresh, liked_by_viewer=local.liked_by_viewer)
    return fresh
