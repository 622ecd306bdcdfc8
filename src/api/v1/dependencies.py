"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Annotated, Callable

from fastapi import Depends

from api.dependencies.auth import CurrentUser
from domain.entities.profile import Profile
from domain.services.feed_service import FeedService
from domain.services.profile_service import ProfileService
from domain.services.social_service import SocialGraphService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_feed_service() -> FeedService:
    """Get Feed service instance."""
    return FeedService(get_uow_factory())


@lru_cache
def get_social_service() -> SocialGraphService:
    """Get Social graph service instance."""
    return SocialGraphService(get_uow_factory())


async def get_current_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> Profile:
    """Resolve the caller's profile, creating it on first sign-in."""
    return await service.resolve(
        user_id=user.id,
        email=user.email,
        name=user.display_name,
        bio=user.bio,
    )


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
