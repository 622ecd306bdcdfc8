"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from uuid import uuid4

# Tests run against in-memory SQLite with rate limiting off
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.session import enable_sqlite_foreign_keys

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ClientFactory = Callable[[TokenUser | None], AsyncClient]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, with foreign keys enforced."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """A raw session for arranging and inspecting rows."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_user() -> TokenUser:
    """Default authenticated member."""
    return TokenUser(
        id=uuid4(),
        email="alice@example.com",
        display_name="Alice",
        bio="Full Stack Developer",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second member for cross-user checks."""
    return TokenUser(id=uuid4(), email="bob@example.com", display_name="Bob")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers(auth_provider: JWTAuthProvider, test_user: TokenUser) -> dict[str, str]:
    """Authorization headers for the default member."""
    return {"Authorization": f"Bearer {auth_provider.create_token(test_user)}"}


@pytest.fixture
async def client_factory(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[ClientFactory, None]:
    """
    Build test clients bound to the test database.

    Each client:
    - Uses the per-test in-memory SQLite database
    - Authenticates as the given user (or not at all when None)
    - Resolves profiles through the real lookup-or-create path
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import get_feed_service, get_profile_service, get_social_service
    from domain.services.feed_service import FeedService
    from domain.services.profile_service import ProfileService
    from domain.services.social_service import SocialGraphService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    clients: list[AsyncClient] = []

    def build(user: TokenUser | None) -> AsyncClient:
        app = create_app()
        app.dependency_overrides[get_auth_provider] = lambda: auth_provider
        app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
        app.dependency_overrides[get_feed_service] = lambda: FeedService(uow_factory)
        app.dependency_overrides[get_social_service] = lambda: SocialGraphService(uow_factory)
        app.dependency_overrides[get_async_session] = override_get_async_session
        if user is not None:

            async def override_get_user() -> TokenUser:
                return user

            app.dependency_overrides[get_current_user] = override_get_user

        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        return c

    yield build

    for c in clients:
        await c.aclose()


@pytest.fixture
def client(client_factory: ClientFactory) -> AsyncClient:
    """Unauthenticated client."""
    return client_factory(None)


@pytest.fixture
def authenticated_client(client_factory: ClientFactory, test_user: TokenUser) -> AsyncClient:
    """Client authenticated as the default member."""
    return client_factory(test_user)


@pytest.fixture
def other_client(client_factory: ClientFactory, other_user: TokenUser) -> AsyncClient:
    """Client authenticated as the second member."""
    return client_factory(other_user)
