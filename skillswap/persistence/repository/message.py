"""PostgreSQL implementation of Message repository."""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.model import Message
from skillswap.domain.model.common import utc_now
from skillswap.domain.repository import MessageRepository
from skillswap.domain.value import MatchId, MessageId, UserId
from skillswap.persistence.mappers import message_to_dict, row_to_message
from skillswap.persistence.tables import matches_table, messages_table

# Smallest step Postgres timestamps can represent
TICK = timedelta(microseconds=1)


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, message: Message) -> Message:
        """Append under a row lock on the match.

        Concurrent appends to the same match queue on ``SELECT ... FOR
        UPDATE`` so each one sees its predecessor's seq and created_at.
        """
        async with self.session.begin_nested():
            lock = (
                select(matches_table.c.id)
                .where(matches_table.c.id == message.match_id)
                .with_for_update()
            )
            await self.session.execute(lock)

            last_stmt = (
                select(messages_table.c.seq, messages_table.c.created_at)
                .where(messages_table.c.match_id == message.match_id)
                .order_by(messages_table.c.seq.desc())
                .limit(1)
            )
            last = (await self.session.execute(last_stmt)).fetchone()

            created_at = utc_now()
            seq = 1
            if last is not None:
                seq = last.seq + 1
                created_at = max(created_at, last.created_at + TICK)

            stored = message.model_copy(update={"seq": seq, "created_at": created_at})
            await self.session.execute(
                insert(messages_table).values(**message_to_dict(stored))
            )

        return stored

    async def find_by_match(self, match_id: MatchId) -> List[Message]:
        """Full log of a match in order."""
        stmt = (
            select(messages_table)
            .where(messages_table.c.match_id == match_id)
            .order_by(messages_table.c.created_at, messages_table.c.seq)
        )
        result = await self.session.execute(stmt)
        return [row_to_message(row._asdict()) for row in result.fetchall()]

    async def find_last(self, match_ids: Sequence[MatchId]) -> dict[MatchId, Message]:
        """Latest message per match (batch query)."""
        if not match_ids:
            return {}

        stmt = (
            select(messages_table)
            .where(messages_table.c.match_id.in_(match_ids))
            .distinct(messages_table.c.match_id)
            .order_by(
                messages_table.c.match_id,
                messages_table.c.created_at.desc(),
                messages_table.c.seq.desc(),
            )
        )
        result = await self.session.execute(stmt)
        messages = [row_to_message(row._asdict()) for row in result.fetchall()]
        return {message.match_id: message for message in messages}

    async def mark_read(
        self,
        match_id: MatchId,
        reader_id: UserId,
        at: datetime,
        message_ids: Optional[Sequence[MessageId]] = None,
    ) -> int:
        """Set read_at on unread messages addressed to the reader."""
        stmt = (
            update(messages_table)
            .where(messages_table.c.match_id == match_id)
            .where(messages_table.c.sender_id != reader_id)
            .where(messages_table.c.read_at.is_(None))
            .values(read_at=at)
        )
        if message_ids is not None:
            if not message_ids:
                return 0
            stmt = stmt.where(messages_table.c.id.in_(message_ids))

        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_unread(self, match_id: MatchId, reader_id: UserId) -> int:
        """Count unread messages addressed to the reader."""
        stmt = (
            select(func.count())
            .select_from(messages_table)
            .where(messages_table.c.match_id == match_id)
            .where(messages_table.c.sender_id != reader_id)
            .where(messages_table.c.read_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
