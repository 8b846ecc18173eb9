"""In-memory message repository for testing."""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from skillswap.domain.model import Message
from skillswap.domain.model.common import utc_now
from skillswap.domain.repository import MessageRepository
from skillswap.domain.value import MatchId, MessageId, UserId


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._logs: dict[MatchId, list[Message]] = defaultdict(list)

    async def append(self, message: Message) -> Message:
        """Append with store-assigned seq and created_at."""
        log = self._logs[message.match_id]

        created_at = utc_now()
        seq = 1
        if log:
            last = log[-1]
            seq = last.seq + 1
            created_at = max(created_at, last.created_at + timedelta(microseconds=1))

        stored = message.model_copy(update={"seq": seq, "created_at": created_at})
        log.append(stored)
        return stored

    async def find_by_match(self, match_id: MatchId) -> List[Message]:
        """Full log of a match in order."""
        return sorted(self._logs.get(match_id, []), key=lambda m: (m.created_at, m.seq))

    async def find_last(self, match_ids: Sequence[MatchId]) -> dict[MatchId, Message]:
        """Latest message per match."""
        return {
            match_id: self._logs[match_id][-1]
            for match_id in match_ids
            if self._logs.get(match_id)
        }

    async def mark_read(
        self,
        match_id: MatchId,
        reader_id: UserId,
        at: datetime,
        message_ids: Optional[Sequence[MessageId]] = None,
    ) -> int:
        """Set read_at on unread messages addressed to the reader."""
        log = self._logs.get(match_id, [])
        wanted = set(message_ids) if message_ids is not None else None
        count = 0
        for index, message in enumerate(log):
            if message.sender_id == reader_id or message.read_at is not None:
                continue
            if wanted is not None and message.id not in wanted:
                continue
            log[index] = message.model_copy(update={"read_at": at})
            count += 1
        return count

    async def count_unread(self, match_id: MatchId, reader_id: UserId) -> int:
        """Count unread messages addressed to the reader."""
        return sum(
            1
            for message in self._logs.get(match_id, [])
            if message.sender_id != reader_id and message.read_at is None
        )
