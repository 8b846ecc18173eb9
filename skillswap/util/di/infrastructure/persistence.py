"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from skillswap.config import Settings, StoreSettings
from skillswap.domain.repository import (
    MatchRepository,
    MessageRepository,
    NotificationRepository,
    SkillRepository,
    UnitOfWork,
    UserSkillRepository,
)
from skillswap.domain.service import LiveOutbox, LiveTransport
from skillswap.persistence.database import create_engine, create_session_factory
from skillswap.persistence.repository import (
    PostgresMatchRepository,
    PostgresMessageRepository,
    PostgresNotificationRepository,
    PostgresSkillRepository,
    PostgresUserSkillRepository,
    SqlAlchemyUnitOfWork,
)
from skillswap.util.di.base import ProviderBase
from skillswap.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed with the container."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    def get_live_outbox(
        self, live_transport: LiveTransport, store_settings: StoreSettings
    ) -> LiveOutbox:
        """Provide the request's queue of live pushes, flushed after commit."""
        return LiveOutbox(live_transport, timeout=store_settings.timeout_seconds)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession], outbox: LiveOutbox
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        Queued live pushes are published only after the commit succeeds.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                outbox.discard()
                raise
        await outbox.flush()

    @provide(scope=Scope.REQUEST)
    def get_skill_repository(self, session: AsyncSession) -> SkillRepository:
        """Provide Skill repository."""
        return PostgresSkillRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_skill_repository(self, session: AsyncSession) -> UserSkillRepository:
        """Provide UserSkill repository."""
        return PostgresUserSkillRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_match_repository(self, session: AsyncSession) -> MatchRepository:
        """Provide Match repository."""
        return PostgresMatchRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, session: AsyncSession) -> MessageRepository:
        """Provide Message repository."""
        return PostgresMessageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(
        self, session: AsyncSession, outbox: LiveOutbox
    ) -> UnitOfWork:
        """Provide the request transaction boundary."""
        return SqlAlchemyUnitOfWork(session, outbox)
