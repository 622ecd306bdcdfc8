"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Post, PostView
from infrastructure.database.models import CommentModel, LikeModel, PostModel, ProfileModel
from infrastructure.database.repositories.sqlalchemy_profile_repo import profile_to_entity


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_view(self, id: UUID) -> PostView | None:
        """Get a post joined with its author and interaction counts."""
        stmt = self._views_query().where(PostModel.id == id)
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        return self._to_view(row) if row else None

    async def list_views(
        self,
        limit: int,
        before: Post | None = None,
        author_id: UUID | None = None,
    ) -> list[PostView]:
        """List posts newest first, ordered by (created_at, id) descending."""
        stmt = self._views_query()
        if author_id is not None:
            stmt = stmt.where(PostModel.user_id == author_id)
        if before is not None:
            stmt = stmt.where(
                or_(
                    PostModel.created_at < before.created_at,
                    and_(
                        PostModel.created_at == before.created_at,
                        PostModel.id < before.id,
                    ),
                )
            )
        stmt = stmt.order_by(PostModel.created_at.desc(), PostModel.id.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_view(row) for row in result]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            content=post.content,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, post: Post) -> Post:
        """Update an existing post."""
        model = await self._get_model(post.id)
        if not model:
            raise ValueError(f"Post {post.id} not found")

        model.content = post.content

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a post; its likes and comments go with it via FK cascade."""
        model = await self._get_model(id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> PostModel | None:
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _views_query(self) -> Select:
        """Posts joined with author and grouped like/comment counts."""
        like_counts = (
            select(LikeModel.post_id, func.count().label("like_count"))
            .group_by(LikeModel.post_id)
            .subquery()
        )
        comment_counts = (
            select(CommentModel.post_id, func.count().label("comment_count"))
            .group_by(CommentModel.post_id)
            .subquery()
        )
        return (
            select(
                PostModel,
                ProfileModel,
                func.coalesce(like_counts.c.like_count, 0).label("like_count"),
                func.coalesce(comment_counts.c.comment_count, 0).label("comment_count"),
            )
            .join(ProfileModel, PostModel.user_id == ProfileModel.id)
            .outerjoin(like_counts, like_counts.c.post_id == PostModel.id)
            .outerjoin(comment_counts, comment_counts.c.post_id == PostModel.id)
        )

    def _to_view(self, row) -> PostView:  # type: ignore[no-untyped-def]
        post_model, profile_model, like_count, comment_count = row
        return PostView(
            post=self._to_entity(post_model),
            author=profile_to_entity(profile_model),
            like_count=int(like_count),
            comment_count=int(comment_count),
        )

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
