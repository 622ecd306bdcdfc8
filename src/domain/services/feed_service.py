"""Feed service: creating and listing posts."""

from dataclasses import replace
from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import ErrorCode, PostNotFoundError, ProfileNotFoundError, ValidationError
from domain.entities.post import FeedPage, Post, PostView, normalize_content
from domain.policies import WriteAction, authorize_write
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 20


class FeedService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_posts(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[UUID] = None,
        viewer_id: Optional[UUID] = None,
    ) -> FeedPage:
        """List all posts newest first, one page at a time."""
        async with self._uow_factory() as uow:
            return await self._page(uow, limit, cursor, viewer_id)

    async def get_posts_by_author(
        self,
        author_id: UUID,
        limit: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[UUID] = None,
        viewer_id: Optional[UUID] = None,
    ) -> FeedPage:
        """List one author's posts newest first."""
        async with self._uow_factory() as uow:
            author = await uow.profiles.get(author_id)
            if not author:
                raise ProfileNotFoundError(str(author_id))
            return await self._page(uow, limit, cursor, viewer_id, author_id=author_id)

    async def get_post(self, post_id: UUID, viewer_id: Optional[UUID] = None) -> PostView:
        """Get a single post with author and counts."""
        async with self._uow_factory() as uow:
            view = await uow.posts.get_view(post_id)
            if not view:
                raise PostNotFoundError(str(post_id))
            if viewer_id is not None:
                liked = await uow.likes.get_liked_post_ids(viewer_id, [post_id])
                view = replace(view, liked_by_viewer=post_id in liked)
            return view

    async def create_post(self, author_id: UUID, content: str) -> PostView:
        """Publish a post. A fresh post has no likes or comments."""
        cleaned = normalize_content(content)
        async with self._uow_factory() as uow:
            uow.act_as(author_id)
            author = await uow.profiles.get(author_id)
            if not author:
                raise ProfileNotFoundError(str(author_id))

            created = await uow.posts.create(Post(user_id=author_id, content=cleaned))
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), author_id=str(author_id))
        return PostView(
            post=created,
            author=author,
            like_count=0,
            comment_count=0,
            liked_by_viewer=False,
        )

    async def update_post(self, actor_id: UUID, post_id: UUID, content: str) -> PostView:
        """Edit a post's text. Only the author may do so."""
        cleaned = normalize_content(content)
        async with self._uow_factory() as uow:
            uow.act_as(actor_id)
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            authorize_write("posts", WriteAction.UPDATE, actor_id, post.user_id)
            post.content = cleaned
            await uow.posts.update(post)
            await uow.commit()

            view = await uow.posts.get_view(post_id)
            if not view:
                raise PostNotFoundError(str(post_id))
            return view

    async def delete_post(self, actor_id: UUID, post_id: UUID) -> None:
        """Delete a post with its likes and comments. Only the author may do so."""
        async with self._uow_factory() as uow:
            uow.act_as(actor_id)
            deleted = await uow.posts.delete(post_id)
            if not deleted:
                raise PostNotFoundError(str(post_id))
            await uow.commit()
            logger.info("post_deleted", post_id=str(post_id))

    async def _page(
        self,
        uow: IUnitOfWork,
        limit: int,
        cursor: Optional[UUID],
        viewer_id: Optional[UUID],
        author_id: Optional[UUID] = None,
    ) -> FeedPage:
        """Fetch one page after ``cursor`` and annotate it for the viewer."""
        if limit < 1:
            raise ValidationError("Page size must be at least 1", field="limit")

        before: Optional[Post] = None
        if cursor is not None:
            before = await uow.posts.get(cursor)
            if not before or (author_id is not None and before.user_id != author_id):
                raise ValidationError(
                    "Cursor does not reference a post in this feed",
                    field="cursor",
                    error_code=ErrorCode.INVALID_CURSOR,
                )

        # One extra row tells whether another page exists
        views = await uow.posts.list_views(limit + 1, before=before, author_id=author_id)
        has_more = len(views) > limit
        views = views[:limit]

        if viewer_id is not None and views:
            liked = await uow.likes.get_liked_post_ids(viewer_id, [v.post.id for v in views])
            views = [replace(v, liked_by_viewer=v.post.id in liked) for v in views]

        next_cursor = views[-1].post.id if has_more else None
        return FeedPage(items=views, next_cursor=next_cursor)
