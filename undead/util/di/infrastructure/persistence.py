"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from undead.config import Settings
from undead.domain.repository import (
    BackpagePostRepository,
    BackpageReplyRepository,
    BackpageReportRepository,
    BackpageVoteRepository,
    PurchaseRepository,
)
from undead.persistence.database import create_engine, create_session_factory
from undead.persistence.repository import (
    PostgresBackpagePostRepository,
    PostgresBackpageReplyRepository,
    PostgresBackpageReportRepository,
    PostgresBackpageVoteRepository,
    PostgresPurchaseRepository,
)
from undead.util.di.base import ProviderBase
from undead.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Committed at the end of the request if no exception occurred,
        rolled back otherwise.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_purchase_repository(self, session: AsyncSession) -> PurchaseRepository:
        """Provide Purchase repository."""
        return PostgresPurchaseRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_backpage_post_repository(
        self, session: AsyncSession
    ) -> BackpagePostRepository:
        """Provide BackPage post repository."""
        return PostgresBackpagePostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_backpage_reply_repository(
        self, session: AsyncSession
    ) -> BackpageReplyRepository:
        """Provide BackPage reply repository."""
        return PostgresBackpageReplyRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_backpage_vote_repository(
        self, session: AsyncSession
    ) -> BackpageVoteRepository:
        """Provide BackPage vote repository."""
        return PostgresBackpageVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_backpage_report_repository(
        self, session: AsyncSession
    ) -> BackpageReportRepository:
        """Provide BackPage report repository."""
        return PostgresBackpageReportRepository(session)
