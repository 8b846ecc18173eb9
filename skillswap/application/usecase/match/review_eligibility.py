"""Review eligibility use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import MatchService
from skillswap.domain.value import MatchId, MatchStatus, UserId


class ReviewEligibilityRequest(BaseModel):
    """Review eligibility request."""

    match_id: str  # UUID string
    reviewer_id: str  # User ID from authenticated user
    reviewee_id: str  # UUID string


class ReviewEligibilityResponse(BaseModel):
    """Review eligibility response."""

    match_id: str
    status: MatchStatus
    teacher_id: str
    learner_id: str
    eligible: bool


class ReviewEligibilityUseCase(BaseUseCase):
    """Use case answering whether a review may be written for a match."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize review eligibility use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(
        self, request: ReviewEligibilityRequest
    ) -> ReviewEligibilityResponse:
        result = await self.match_service.review_eligibility(
            MatchId(UUID(request.match_id)),
            UserId(UUID(request.reviewer_id)),
            UserId(UUID(request.reviewee_id)),
        )
        return ReviewEligibilityResponse(
            match_id=str(result.match_id),
            status=result.status,
            teacher_id=str(result.teacher_id),
            learner_id=str(result.learner_id),
            eligible=result.eligible,
        )
