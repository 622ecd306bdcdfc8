"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel


def profile_to_entity(model: ProfileModel) -> Profile:
    """Convert ORM model to domain entity."""
    return Profile(
        id=model.id,
        name=model.name,
        email=model.email,
        bio=model.bio or "",
        avatar_url=model.avatar_url,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        model = await self._get_model(id)
        return profile_to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = ProfileModel(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            bio=profile.bio,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return profile_to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        model = await self._get_model(profile.id)
        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.name = profile.name
        model.bio = profile.bio
        model.avatar_url = profile.avatar_url

        await self._session.flush()
        return profile_to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile; posts, likes and comments go with it via FK cascade."""
        model = await self._get_model(id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
