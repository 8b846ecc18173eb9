"""SQLAlchemy session unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service.live import LiveOutbox


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits the request session; the next statement opens a new transaction."""

    def __init__(self, session: AsyncSession, outbox: LiveOutbox) -> None:
        self.session = session
        self.outbox = outbox

    async def commit(self) -> None:
        await self.session.commit()
        await self.outbox.flush()

    async def rollback(self) -> None:
        await self.session.rollback()
        self.outbox.discard()
