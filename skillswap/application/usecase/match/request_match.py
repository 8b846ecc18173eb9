"""Request match use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import MatchService
from skillswap.domain.value import SkillId, UserId

from .get_match import MatchItem, to_match_item


class RequestMatchRequest(BaseModel):
    """Request match request."""

    learner_id: str  # User ID from authenticated user
    learner_name: str
    teacher_id: str  # UUID string
    skill_id: str  # UUID string
    message: str | None = Field(default=None, max_length=2000)


class RequestMatchUseCase(BaseUseCase):
    """Use case for a learner asking a teacher for a match."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize request match use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: RequestMatchRequest) -> MatchItem:
        """Execute request match flow.

        Args:
            request: Request match request

        Returns:
            The new pending match

        Raises:
            SelfMatchError: If the learner asked themselves
            DuplicatePendingError: If a pending request already exists
            SkillNotFoundError: If the skill is unknown
        """
        match = await self.match_service.request(
            learner_id=UserId(UUID(request.learner_id)),
            teacher_id=UserId(UUID(request.teacher_id)),
            skill_id=SkillId(UUID(request.skill_id)),
            message=request.message,
            learner_name=request.learner_name,
        )
        return to_match_item(match)
