"""Mark conversation read use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import ConversationService
from skillswap.domain.value import MatchId, UserId


class MarkConversationReadRequest(BaseModel):
    """Mark conversation read request."""

    match_id: str  # UUID string
    reader_id: str  # User ID from authenticated user


class MarkConversationReadResponse(BaseModel):
    """Mark conversation read response."""

    match_id: str
    marked_read: int


class MarkConversationReadUseCase(BaseUseCase):
    """Use case for clearing the unread messages of a conversation."""

    def __init__(self, conversation_service: ConversationService) -> None:
        """Initialize mark read use case.

        Args:
            conversation_service: Conversation domain service
        """
        self.conversation_service = conversation_service

    async def execute(
        self, request: MarkConversationReadRequest
    ) -> MarkConversationReadResponse:
        count = await self.conversation_service.mark_read(
            MatchId(UUID(request.match_id)), UserId(UUID(request.reader_id))
        )
        return MarkConversationReadResponse(match_id=request.match_id, marked_read=count)
