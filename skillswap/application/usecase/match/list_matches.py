"""List matches use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import MatchService
from skillswap.domain.value import MatchStatus, UserId

from .get_match import MatchItem, to_match_item


class ListMatchesRequest(BaseModel):
    """List matches request."""

    user_id: str  # User ID from authenticated user
    status: MatchStatus | None = None


class ListMatchesResponse(BaseModel):
    """List matches response."""

    matches: list[MatchItem]
    total: int


class ListMatchesUseCase(BaseUseCase):
    """Use case for the caller's matches as teacher or learner, newest first."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize list matches use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: ListMatchesRequest) -> ListMatchesResponse:
        matches = await self.match_service.list_matches(
            UserId(UUID(request.user_id)), request.status
        )
        items = [to_match_item(match) for match in matches]
        return ListMatchesResponse(matches=items, total=len(items))
