"""SQLAlchemy implementation of Like repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.like import Like
from infrastructure.database.models import LikeModel


class SQLAlchemyLikeRepository:
    """SQLAlchemy implementation of ILikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, user_id: UUID, post_id: UUID) -> bool:
        """Check whether the user likes the post."""
        stmt = select(LikeModel.id).where(
            LikeModel.user_id == user_id,
            LikeModel.post_id == post_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def create(self, like: Like) -> Like:
        """Insert a like; raises IntegrityError if the pair already exists."""
        model = LikeModel(
            id=like.id,
            user_id=like.user_id,
            post_id=like.post_id,
            created_at=like.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete_for(self, user_id: UUID, post_id: UUID) -> bool:
        """Delete the user's like of the post."""
        stmt = select(LikeModel).where(
            LikeModel.user_id == user_id,
            LikeModel.post_id == post_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def count_for_post(self, post_id: UUID) -> int:
        """Count likes referencing the post."""
        stmt = select(func.count()).select_from(LikeModel).where(LikeModel.post_id == post_id)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def get_liked_post_ids(self, user_id: UUID, post_ids: list[UUID]) -> set[UUID]:
        """Return the subset of ``post_ids`` the user likes, in a single query."""
        if not post_ids:
            return set()
        stmt = select(LikeModel.post_id).where(
            LikeModel.user_id == user_id,
            LikeModel.post_id.in_(post_ids),
        )
        result = await self._session.execute(stmt)
        return set(result.scalars())

    def _to_entity(self, model: LikeModel) -> Like:
        """Convert ORM model to domain entity."""
        return Like(
            id=model.id,
            user_id=model.user_id,
            post_id=model.post_id,
            created_at=model.created_at,
        )
