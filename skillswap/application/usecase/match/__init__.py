"""Match use cases."""

from .close_match import CancelMatchUseCase, CloseMatchRequest, CompleteMatchUseCase
from .get_match import GetMatchRequest, GetMatchUseCase, MatchItem
from .list_matches import ListMatchesRequest, ListMatchesResponse, ListMatchesUseCase
from .request_match import RequestMatchRequest, RequestMatchUseCase
from .respond_to_match import RespondToMatchRequest, RespondToMatchUseCase
from .review_eligibility import (
    ReviewEligibilityRequest,
    ReviewEligibilityResponse,
    ReviewEligibilityUseCase,
)

__all__ = [
    "CancelMatchUseCase",
    "CloseMatchRequest",
    "CompleteMatchUseCase",
    "GetMatchRequest",
    "GetMatchUseCase",
    "ListMatchesRequest",
    "ListMatchesResponse",
    "ListMatchesUseCase",
    "MatchItem",
    "RequestMatchRequest",
    "RequestMatchUseCase",
    "RespondToMatchRequest",
    "RespondToMatchUseCase",
    "ReviewEligibilityRequest",
    "ReviewEligibilityResponse",
    "ReviewEligibilityUseCase",
]
