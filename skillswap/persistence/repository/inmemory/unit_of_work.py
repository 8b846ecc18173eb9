"""In-memory unit of work for testing."""

from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service.live import LiveOutbox


class InMemoryUnitOfWork(UnitOfWork):
    """Counts commits; in-memory writes are visible immediately.

    Rollback only drops the queued live pushes, the writes stay.
    """

    def __init__(self, outbox: LiveOutbox) -> None:
        self.outbox = outbox
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1
        await self.outbox.flush()

    async def rollback(self) -> None:
        self.rollbacks += 1
        self.outbox.discard()
