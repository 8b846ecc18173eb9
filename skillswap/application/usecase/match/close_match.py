"""Complete and cancel match use cases."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import MatchService
from skillswap.domain.value import MatchId, UserId

from .get_match import MatchItem, to_match_item


class CloseMatchRequest(BaseModel):
    """Complete or cancel match request."""

    match_id: str  # UUID string
    actor_id: str | None = None  # None when called by the scheduling service


class CompleteMatchUseCase(BaseUseCase):
    """Use case for finishing an accepted match."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize complete match use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: CloseMatchRequest) -> MatchItem:
        actor_id = UserId(UUID(request.actor_id)) if request.actor_id else None
        match = await self.match_service.complete(
            MatchId(UUID(request.match_id)), actor_id
        )
        return to_match_item(match)


class CancelMatchUseCase(BaseUseCase):
    """Use case for calling off an accepted match."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize cancel match use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: CloseMatchRequest) -> MatchItem:
        actor_id = UserId(UUID(request.actor_id)) if request.actor_id else None
        match = await self.match_service.cancel(MatchId(UUID(request.match_id)), actor_id)
        return to_match_item(match)
