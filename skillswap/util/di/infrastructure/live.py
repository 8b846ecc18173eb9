"""Live push transport providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from skillswap.adapter.live.memory import InMemoryLiveTransport
from skillswap.adapter.live.postgres import PostgresLiveTransport
from skillswap.config import Settings
from skillswap.domain.service import LiveTransport
from skillswap.persistence.database import asyncpg_dsn
from skillswap.util.di.base import ProviderBase


class LiveProvider(ProviderBase):
    """Live transport component base."""

    __mock_component__ = "live"
    # LISTEN/NOTIFY runs on the application database
    __depends_on__ = {"persistence"}


class ProdLiveProvider(LiveProvider):
    """Production live transport, backend picked by LIVE__BACKEND."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_live_transport(self, settings: Settings) -> AsyncIterator[LiveTransport]:
        """Provide the process-wide live transport, closed with the container."""
        transport: LiveTransport
        if settings.live.backend == "postgres":
            transport = PostgresLiveTransport(
                asyncpg_dsn(settings),
                queue_size=settings.conversation.stream_queue_size,
                timeout=settings.store.timeout_seconds,
                reconnect_delay=settings.live.reconnect_delay_seconds,
            )
        else:
            transport = InMemoryLiveTransport(
                queue_size=settings.conversation.stream_queue_size
            )

        logfire.info("Live transport ready", backend=settings.live.backend)
        yield transport
        await transport.close()
