"""Profile service: resolves an authenticated principal to its profile."""

from typing import Callable, Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import ProfileCreationError, ProfileNotFoundError
from domain.entities.profile import Profile
from domain.policies import WriteAction, authorize_write
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def resolve(
        self,
        user_id: UUID,
        email: str,
        name: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> Profile:
        """Return the principal's profile, creating it on first sign-in.

        A uniqueness violation (two first requests racing) is reported as
        ProfileCreationError so the caller can retry; it is not swallowed.
        """
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            if existing:
                return existing

            uow.act_as(user_id)
            profile = Profile.for_principal(user_id, email, name=name, bio=bio)
            try:
                created = await uow.profiles.create(profile)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    logger.warning("profile_creation_conflict", user_id=str(user_id))
                    raise ProfileCreationError(str(user_id)) from exc
                raise

            logger.info("profile_created", user_id=str(user_id), name=created.name)
            return created

    async def get(self, profile_id: UUID) -> Profile:
        """Get a profile by ID."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            return profile

    async def update(
        self,
        actor_id: UUID,
        profile_id: UUID,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Profile:
        """Update a profile. Only its owner may do so."""
        async with self._uow_factory() as uow:
            uow.act_as(actor_id)
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            authorize_write("profiles", WriteAction.UPDATE, actor_id, profile.id)
            if name is not None:
                profile.name = name.strip() or profile.name
            if bio is not None:
                profile.bio = bio
            if avatar_url is not None:
                profile.avatar_url = avatar_url or None

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def delete(self, actor_id: UUID, profile_id: UUID) -> None:
        """Delete a profile with all of its posts, likes and comments."""
        async with self._uow_factory() as uow:
            uow.act_as(actor_id)
            deleted = await uow.profiles.delete(profile_id)
            if not deleted:
                raise ProfileNotFoundError(str(profile_id))
            await uow.commit()
            logger.info("profile_deleted", profile_id=str(profile_id))
