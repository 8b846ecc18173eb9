"""Match lifecycle routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from skillswap.application.usecase.match import (
    CancelMatchUseCase,
    CloseMatchRequest,
    CompleteMatchUseCase,
    GetMatchRequest,
    GetMatchUseCase,
    ListMatchesRequest,
    ListMatchesResponse,
    ListMatchesUseCase,
    MatchItem,
    RequestMatchRequest,
    RequestMatchUseCase,
    RespondToMatchRequest,
    RespondToMatchUseCase,
    ReviewEligibilityRequest,
    ReviewEligibilityResponse,
    ReviewEligibilityUseCase,
)
from skillswap.domain.service import JWTService
from skillswap.domain.value import MatchDecision, MatchStatus
from skillswap.interface.api.auth import require_principal

router = APIRouter(prefix="/matches", tags=["matches"], route_class=DishkaRoute)


class RequestMatchAPIRequest(BaseModel):
    """API request for asking a teacher for a match."""

    teacher_id: str
    skill_id: str
    message: str | None = Field(default=None, max_length=2000)


class RespondAPIRequest(BaseModel):
    """API request for the teacher's answer."""

    decision: MatchDecision


@router.post("", response_model=MatchItem, status_code=status.HTTP_201_CREATED)
async def request_match(
    request: RequestMatchAPIRequest,
    request_match_use_case: FromDishka[RequestMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MatchItem:
    """Ask a teacher for a match on one of their skills.

    Requires authentication. The caller becomes the learner.

    Returns:
        The new pending match

    Raises:
        HTTPException: 401 if not authenticated; domain errors are mapped
            by the app's error handlers (400 self match, 409 duplicate)
    """
    principal = require_principal(jwt_service, auth_token, "request a match")
    return await request_match_use_case.execute(
        RequestMatchRequest(
            learner_id=str(principal.user_id),
            learner_name=principal.name,
            teacher_id=request.teacher_id,
            skill_id=request.skill_id,
            message=request.message,
        )
    )


@router.get("", response_model=ListMatchesResponse)
async def list_matches(
    list_matches_use_case: FromDishka[ListMatchesUseCase],
    jwt_service: FromDishka[JWTService],
    status_filter: MatchStatus | None = Query(default=None, alias="status"),
    auth_token: str | None = Cookie(default=None),
) -> ListMatchesResponse:
    """List the caller's matches as teacher or learner, newest first."""
    principal = require_principal(jwt_service, auth_token, "list matches")
    return await list_matches_use_case.execute(
        ListMatchesRequest(user_id=str(principal.user_id), status=status_filter)
    )


@router.get("/{match_id}", response_model=MatchItem)
async def get_match(
    match_id: str,
    get_match_use_case: FromDishka[GetMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MatchItem:
    """Get one of the caller's matches."""
    principal = require_principal(jwt_service, auth_token, "view matches")
    return await get_match_use_case.execute(
        GetMatchRequest(match_id=match_id, user_id=str(principal.user_id))
    )


@router.post("/{match_id}/respond", response_model=MatchItem)
async def respond_to_match(
    match_id: str,
    request: RespondAPIRequest,
    respond_use_case: FromDishka[RespondToMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MatchItem:
    """Accept or decline a pending request.

    Only the teacher of the match may respond. Accepting opens the
    conversation.
    """
    principal = require_principal(jwt_service, auth_token, "respond to matches")
    return await respond_use_case.execute(
        RespondToMatchRequest(
            match_id=match_id,
            responder_id=str(principal.user_id),
            responder_name=principal.name,
            decision=request.decision,
        )
    )


@router.post("/{match_id}/complete", response_model=MatchItem)
async def complete_match(
    match_id: str,
    complete_use_case: FromDishka[CompleteMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MatchItem:
    """Mark an accepted match as completed. Repeating it is a no-op."""
    principal = require_principal(jwt_service, auth_token, "complete matches")
    return await complete_use_case.execute(
        CloseMatchRequest(match_id=match_id, actor_id=str(principal.user_id))
    )


@router.post("/{match_id}/cancel", response_model=MatchItem)
async def cancel_match(
    match_id: str,
    cancel_use_case: FromDishka[CancelMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MatchItem:
    """Cancel an accepted match. Repeating it is a no-op."""
    principal = require_principal(jwt_service, auth_token, "cancel matches")
    return await cancel_use_case.execute(
        CloseMatchRequest(match_id=match_id, actor_id=str(principal.user_id))
    )


@router.get("/{match_id}/review-eligibility", response_model=ReviewEligibilityResponse)
async def review_eligibility(
    match_id: str,
    eligibility_use_case: FromDishka[ReviewEligibilityUseCase],
    jwt_service: FromDishka[JWTService],
    reviewee_id: str = Query(),
    auth_token: str | None = Cookie(default=None),
) -> ReviewEligibilityResponse:
    """Whether the caller may review ``reviewee_id`` for this match."""
    principal = require_principal(jwt_service, auth_token, "write reviews")
    return await eligibility_use_case.execute(
        ReviewEligibilityRequest(
            match_id=match_id,
            reviewer_id=str(principal.user_id),
            reviewee_id=reviewee_id,
        )
    )
