"""Get messages use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import ConversationService
from skillswap.domain.value import MatchId, UserId

from .send_message import MessageItem, to_message_item


class GetMessagesRequest(BaseModel):
    """Get messages request."""

    match_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    mark_read: bool = True  # Opening a conversation reads it


class GetMessagesResponse(BaseModel):
    """Get messages response."""

    match_id: str
    messages: list[MessageItem]
    total: int
    marked_read: int


class GetMessagesUseCase(BaseUseCase):
    """Use case for loading a conversation transcript in order."""

    def __init__(self, conversation_service: ConversationService) -> None:
        """Initialize get messages use case.

        Args:
            conversation_service: Conversation domain service
        """
        self.conversation_service = conversation_service

    async def execute(self, request: GetMessagesRequest) -> GetMessagesResponse:
        match_id = MatchId(UUID(request.match_id))
        user_id = UserId(UUID(request.user_id))

        marked = 0
        if request.mark_read:
            marked = await self.conversation_service.mark_read(match_id, user_id)

        messages = await self.conversation_service.history(match_id, user_id)
        items = [to_message_item(message) for message in messages]

        return GetMessagesResponse(
            match_id=request.match_id,
            messages=items,
            total=len(items),
            marked_read=marked,
        )
