"""Get match use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.model import Match
from skillswap.domain.service import MatchService
from skillswap.domain.value import MatchId, MatchStatus, UserId


class MatchItem(BaseModel):
    """Match as returned to API clients."""

    match_id: str
    teacher_id: str
    learner_id: str
    skill_id: str
    status: MatchStatus
    message: str | None
    created_at: datetime
    updated_at: datetime
    accepted_at: datetime | None


def to_match_item(match: Match) -> MatchItem:
    return MatchItem(
        match_id=str(match.id),
        teacher_id=str(match.teacher_id),
        learner_id=str(match.learner_id),
        skill_id=str(match.skill_id),
        status=match.status,
        message=match.message,
        created_at=match.created_at,
        updated_at=match.updated_at,
        accepted_at=match.accepted_at,
    )


class GetMatchRequest(BaseModel):
    """Get match request."""

    match_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class GetMatchUseCase(BaseUseCase):
    """Use case for viewing one of the caller's matches."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize get match use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: GetMatchRequest) -> MatchItem:
        match = await self.match_service.get_match(
            MatchId(UUID(request.match_id)), UserId(UUID(request.user_id))
        )
        return to_match_item(match)
