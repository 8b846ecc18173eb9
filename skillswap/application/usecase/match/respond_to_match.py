"""Respond to match use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import MatchService
from skillswap.domain.value import MatchDecision, MatchId, UserId

from .get_match import MatchItem, to_match_item


class RespondToMatchRequest(BaseModel):
    """Respond to match request."""

    match_id: str  # UUID string
    responder_id: str  # User ID from authenticated user
    responder_name: str
    decision: MatchDecision


class RespondToMatchUseCase(BaseUseCase):
    """Use case for a teacher accepting or declining a request."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize respond to match use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: RespondToMatchRequest) -> MatchItem:
        """Execute respond flow.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the responder is not the teacher
            InvalidTransitionError: If the match was already answered
        """
        match = await self.match_service.respond(
            match_id=MatchId(UUID(request.match_id)),
            responder_id=UserId(UUID(request.responder_id)),
            decision=request.decision,
            responder_name=request.responder_name,
        )
        return to_match_item(match)
