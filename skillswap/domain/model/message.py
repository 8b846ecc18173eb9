"""Message entity.

Messages form the ordered conversation log of an accepted match.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from skillswap.domain.model.common import DomainModel, utc_now
from skillswap.domain.value import MatchId, MessageId, MessageType, UserId


class Message(DomainModel):
    """Conversation entry.

    Ordering is (created_at, seq). Both are assigned by the store on append:
    created_at is strictly greater than every earlier message of the match
    and seq counts up from 1 per match.
    """

    id: MessageId
    match_id: MatchId
    sender_id: UserId
    body: str = Field(min_length=1, max_length=5000)
    type: MessageType = MessageType.TEXT
    file_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    read_at: Optional[datetime] = None
    seq: int = Field(default=0, ge=0)  # 0 until stored

    @property
    def is_read(self) -> bool:
        return self.read_at is not None
