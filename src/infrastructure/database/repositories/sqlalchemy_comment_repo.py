"""SQLAlchemy implementation of Comment repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.comment import Comment, CommentView
from infrastructure.database.models import CommentModel, ProfileModel
from infrastructure.database.repositories.sqlalchemy_profile_repo import profile_to_entity


class SQLAlchemyCommentRepository:
    """SQLAlchemy implementation of ICommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Comment | None:
        """Get a comment by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def list_views_for_post(self, post_id: UUID) -> list[CommentView]:
        """List a post's comments oldest first, each with its author."""
        stmt = (
            select(CommentModel, ProfileModel)
            .join(ProfileModel, CommentModel.user_id == ProfileModel.id)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [
            CommentView(comment=self._to_entity(comment), author=profile_to_entity(author))
            for comment, author in result
        ]

    async def create(self, comment: Comment) -> Comment:
        """Create a new comment."""
        model = CommentModel(
            id=comment.id,
            user_id=comment.user_id,
            post_id=comment.post_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, comment: Comment) -> Comment:
        """Update an existing comment."""
        model = await self._get_model(comment.id)
        if not model:
            raise ValueError(f"Comment {comment.id} not found")

        model.content = comment.content

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a comment."""
        model = await self._get_model(id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def count_for_post(self, post_id: UUID) -> int:
        """Count comments referencing the post."""
        stmt = select(func.count()).select_from(CommentModel).where(CommentModel.post_id == post_id)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def _get_model(self, id: UUID) -> CommentModel | None:
        stmt = select(CommentModel).where(CommentModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: CommentModel) -> Comment:
        """Convert ORM model to domain entity."""
        return Comment(
            id=model.id,
            user_id=model.user_id,
            post_id=model.post_id,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
