"""List conversations use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.application.usecase.match.get_match import MatchItem, to_match_item
from skillswap.domain.service import ConversationService
from skillswap.domain.value import UserId

from .send_message import MessageItem, to_message_item


class ConversationItem(BaseModel):
    """Inbox row."""

    match: MatchItem
    counterpart_id: str
    last_message: MessageItem | None
    unread_count: int


class ListConversationsRequest(BaseModel):
    """List conversations request."""

    user_id: str  # User ID from authenticated user


class ListConversationsResponse(BaseModel):
    """List conversations response."""

    conversations: list[ConversationItem]
    total_unread: int


class ListConversationsUseCase(BaseUseCase):
    """Use case for the caller's inbox, most recently active first."""

    def __init__(self, conversation_service: ConversationService) -> None:
        """Initialize list conversations use case.

        Args:
            conversation_service: Conversation domain service
        """
        self.conversation_service = conversation_service

    async def execute(
        self, request: ListConversationsRequest
    ) -> ListConversationsResponse:
        user_id = UserId(UUID(request.user_id))
        summaries = await self.conversation_service.list_conversations(user_id)

        items = [
            ConversationItem(
                match=to_match_item(summary.match),
                counterpart_id=str(summary.match.counterpart_of(user_id)),
                last_message=(
                    to_message_item(summary.last_message)
                    if summary.last_message
                    else None
                ),
                unread_count=summary.unread_count,
            )
            for summary in summaries
        ]
        return ListConversationsResponse(
            conversations=items,
            total_unread=sum(item.unread_count for item in items),
        )
