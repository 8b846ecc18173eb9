"""Message repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from skillswap.domain.model.message import Message
from skillswap.domain.value import MatchId, MessageId, UserId


class MessageRepository(ABC):
    """Repository for the per-match message log."""

    @abstractmethod
    async def append(self, message: Message) -> Message:
        """Append a message to its match's log.

        The store assigns ``seq`` (previous + 1) and ``created_at`` (the
        later of now and one microsecond after the previous message), so
        ordering never depends on client clocks.

        Args:
            message: Message to append (created_at and seq are ignored)

        Returns:
            The stored message with its assigned created_at and seq
        """
        pass

    @abstractmethod
    async def find_by_match(self, match_id: MatchId) -> List[Message]:
        """Full log of a match ordered by (created_at, seq)."""
        pass

    @abstractmethod
    async def find_last(self, match_ids: Sequence[MatchId]) -> dict[MatchId, Message]:
        """Latest message of each match (batch query).

        Matches without messages are absent from the result.
        """
        pass

    @abstractmethod
    async def mark_read(
        self,
        match_id: MatchId,
        reader_id: UserId,
        at: datetime,
        message_ids: Optional[Sequence[MessageId]] = None,
    ) -> int:
        """Set read_at on unread messages not sent by the reader.

        Args:
            match_id: Conversation
            reader_id: User reading; their own messages are never touched
            at: Read timestamp
            message_ids: Restrict to these messages (all when None)

        Returns:
            Number of messages newly marked read
        """
        pass

    @abstractmethod
    async def count_unread(self, match_id: MatchId, reader_id: UserId) -> int:
        """Count unread messages addressed to the reader."""
        pass
