"""Social graph service: likes and comments on posts."""

from typing import Callable, List
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    CommentNotFoundError,
    DuplicateLikeError,
    PostNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.comment import Comment, CommentView
from domain.entities.like import Like, LikeState
from domain.entities.post import normalize_content
from domain.policies import WriteAction, authorize_write
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class SocialGraphService:
    """Service layer for likes and comments."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def is_liked(self, user_id: UUID, post_id: UUID) -> bool:
        """Whether the user likes the post. No row means False."""
        async with self._uow_factory() as uow:
            return await uow.likes.exists(user_id, post_id)  # type: ignore[no-any-return]

    async def toggle_like(self, user_id: UUID, post_id: UUID, currently_liked: bool) -> LikeState:
        """Like or unlike a post according to the caller's view of its state.

        Unliking a post that is not liked is a no-op. Liking a post that is
        already liked fails with DuplicateLikeError; the caller should re-check
        ``is_liked`` before retrying. The returned count is read after the write.
        """
        async with self._uow_factory() as uow:
            uow.act_as(user_id)
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            if currently_liked:
                removed = await uow.likes.delete_for(user_id, post_id)
                if not removed:
                    logger.info("unlike_noop", user_id=str(user_id), post_id=str(post_id))
                liked = False
            else:
                try:
                    await uow.likes.create(Like(user_id=user_id, post_id=post_id))
                except IntegrityError as exc:
                    await uow.rollback()
                    orig = str(exc.orig).lower() if exc.orig else ""
                    if "unique" in orig or "duplicate" in orig:
                        raise DuplicateLikeError(str(post_id)) from exc
                    raise
                liked = True

            like_count = await uow.likes.count_for_post(post_id)
            await uow.commit()

        logger.info(
            "like_added" if liked else "like_removed",
            user_id=str(user_id),
            post_id=str(post_id),
            like_count=like_count,
        )
        return LikeState(post_id=post_id, liked=liked, like_count=like_count)

    async def like_count(self, post_id: UUID) -> int:
        """Number of likes on a post."""
        async with self._uow_factory() as uow:
            return await uow.likes.count_for_post(post_id)  # type: ignore[no-any-return]

    async def comment_count(self, post_id: UUID) -> int:
        """Number of comments on a post."""
        async with self._uow_factory() as uow:
            return await uow.comments.count_for_post(post_id)  # type: ignore[no-any-return]

    async def list_comments(self, post_id: UUID) -> List[CommentView]:
        """A post's comments, oldest first."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return await uow.comments.list_views_for_post(post_id)  # type: ignore[no-any-return]

    async def add_comment(self, user_id: UUID, post_id: UUID, content: str) -> CommentView:
        """Comment on a post."""
        cleaned = normalize_content(content)
        async with self._uow_factory() as uow:
            uow.act_as(user_id)
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            author = await uow.profiles.get(user_id)
            if not author:
                raise ProfileNotFoundError(str(user_id))

            created = await uow.comments.create(
                Comment(user_id=user_id, post_id=post_id, content=cleaned)
            )
            await uow.commit()

        logger.info("comment_added", comment_id=str(created.id), post_id=str(post_id))
        return CommentView(comment=created, author=author)

    async def update_comment(self, actor_id: UUID, comment_id: UUID, content: str) -> CommentView:
        """Edit a comment. Only its author may do so."""
        cleaned = normalize_content(content)
        async with self._uow_factory() as uow:
            uow.act_as(actor_id)
            comment = await uow.comments.get(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))

            authorize_write("comments", WriteAction.UPDATE, actor_id, comment.user_id)
            comment.content = cleaned
            updated = await uow.comments.update(comment)
            author = await uow.profiles.get(updated.user_id)
            await uow.commit()

            if not author:
                raise ProfileNotFoundError(str(updated.user_id))
            return CommentView(comment=updated, author=author)

    async def delete_comment(self, actor_id: UUID, comment_id: UUID) -> None:
        """Delete a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            uow.act_as(actor_id)
            deleted = await uow.comments.delete(comment_id)
            if not deleted:
                raise CommentNotFoundError(str(comment_id))
            await uow.commit()
