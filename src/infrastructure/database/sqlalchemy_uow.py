"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import TransientError
from infrastructure.database.repositories.sqlalchemy_comment_repo import SQLAlchemyCommentRepository
from infrastructure.database.repositories.sqlalchemy_like_repo import SQLAlchemyLikeRepository
from infrastructure.database.repositories.sqlalchemy_post_repo import SQLAlchemyPostRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.row_security import bind_principal

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Writes are checked against the principal bound with ``act_as`` by the
    row-security flush guard. Connection-level failures surface as
    ``TransientError`` after the transaction is rolled back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        """Get the active session."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self.session)

    @property
    def posts(self) -> SQLAlchemyPostRepository:
        """Get post repository."""
        return SQLAlchemyPostRepository(self.session)

    @property
    def likes(self) -> SQLAlchemyLikeRepository:
        """Get like repository."""
        return SQLAlchemyLikeRepository(self.session)

    @property
    def comments(self) -> SQLAlchemyCommentRepository:
        """Get comment repository."""
        return SQLAlchemyCommentRepository(self.session)

    def act_as(self, principal_id: UUID) -> None:
        """Bind the acting principal for row-level write checks."""
        bind_principal(self.session.sync_session, principal_id)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            try:
                if exc_type:
                    await self.rollback()
            finally:
                await self._session.close()
                self._session = None

        if isinstance(exc_val, (OperationalError, InterfaceError)):
            logger.warning("storage_unavailable", error=str(exc_val))
            raise TransientError() from exc_val
