"""Send message use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.model import Message
from skillswap.domain.service import ConversationService
from skillswap.domain.value import MatchId, MessageType, UserId


class MessageItem(BaseModel):
    """Conversation entry as returned to API clients."""

    message_id: str
    match_id: str
    sender_id: str
    body: str
    type: MessageType
    file_url: str | None
    seq: int
    created_at: datetime
    read_at: datetime | None


def to_message_item(message: Message) -> MessageItem:
    return MessageItem(
        message_id=str(message.id),
        match_id=str(message.match_id),
        sender_id=str(message.sender_id),
        body=message.body,
        type=message.type,
        file_url=message.file_url,
        seq=message.seq,
        created_at=message.created_at,
        read_at=message.read_at,
    )


class SendMessageRequest(BaseModel):
    """Send message request."""

    match_id: str  # UUID string
    sender_id: str  # User ID from authenticated user
    sender_name: str | None = None
    body: str = Field(min_length=1, max_length=5000)
    type: MessageType = MessageType.TEXT
    file_url: str | None = None


class SendMessageUseCase(BaseUseCase):
    """Use case for a participant writing to a match conversation."""

    def __init__(self, conversation_service: ConversationService) -> None:
        """Initialize send message use case.

        Args:
            conversation_service: Conversation domain service
        """
        self.conversation_service = conversation_service

    async def execute(self, request: SendMessageRequest) -> MessageItem:
        """Execute send flow.

        Raises:
            NotParticipantError: If the sender is not in the match
            ChannelNotOpenError: If the match is not accepted
            ValueError: If the message is invalid
        """
        message = await self.conversation_service.send(
            match_id=MatchId(UUID(request.match_id)),
            sender_id=UserId(UUID(request.sender_id)),
            body=request.body,
            message_type=request.type,
            file_url=request.file_url,
            sender_name=request.sender_name,
        )
        return to_message_item(message)
