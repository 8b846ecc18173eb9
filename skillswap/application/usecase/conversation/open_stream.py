"""Open message stream use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service import ConversationService, MessageStream
from skillswap.domain.value import MatchId, UserId


class OpenMessageStreamRequest(BaseModel):
    """Open message stream request."""

    match_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class OpenMessageStreamUseCase(BaseUseCase):
    """Use case for following a conversation live."""

    def __init__(
        self, conversation_service: ConversationService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize open stream use case.

        Args:
            conversation_service: Conversation domain service
            unit_of_work: Request transaction, finished before streaming
        """
        self.conversation_service = conversation_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: OpenMessageStreamRequest) -> MessageStream:
        """Validate access and subscribe.

        Returns:
            Open stream; the caller must close it
        """
        stream = await self.conversation_service.subscribe(
            MatchId(UUID(request.match_id)), UserId(UUID(request.user_id))
        )
        try:
            await self.unit_of_work.commit()
        except Exception:
            await stream.close()
            raise
        return stream
