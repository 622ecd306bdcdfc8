"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.likes = AsyncMock()
        self.comments = AsyncMock()
        self.principal_id: UUID | None = None
        self.committed = False
        self.rolled_back = False

    def act_as(self, principal_id: UUID) -> None:
        self.principal_id = principal_id

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A second user, distinct from user_id."""
    return uuid4()
