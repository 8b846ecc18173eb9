"""Mock live transport provider for testing."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from skillswap.adapter.live.memory import InMemoryLiveTransport
from skillswap.domain.service import LiveTransport
from skillswap.util.di.infrastructure.live import LiveProvider


class MockLiveProvider(LiveProvider):
    """In-process broker, one per test container."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    async def get_live_transport(self) -> AsyncIterator[LiveTransport]:
        """Provide in-memory live transport."""
        transport = InMemoryLiveTransport()
        yield transport
        await transport.close()
