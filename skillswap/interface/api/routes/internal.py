"""Routes for trusted collaborators (scheduling service)."""

import hmac

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from skillswap.application.usecase.match import (
    CloseMatchRequest,
    CompleteMatchUseCase,
    MatchItem,
)
from skillswap.config import Settings

router = APIRouter(prefix="/internal", tags=["internal"], route_class=DishkaRoute)


def _verify_integration_token(settings: Settings, token: str | None) -> None:
    expected = settings.integrations.scheduling_token
    if not expected or not token or not hmac.compare_digest(token, expected):
        logfire.warn("Internal call rejected", token_present=token is not None)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid integration token",
        )


@router.post("/matches/{match_id}/complete", response_model=MatchItem)
async def complete_match(
    match_id: str,
    complete_use_case: FromDishka[CompleteMatchUseCase],
    settings: FromDishka[Settings],
    x_integration_token: str | None = Header(default=None),
) -> MatchItem:
    """Complete a match once its sessions are finished.

    Called by the scheduling service, authenticated with the
    ``X-Integration-Token`` header. Repeating it is a no-op.
    """
    _verify_integration_token(settings, x_integration_token)
    return await complete_use_case.execute(CloseMatchRequest(match_id=match_id))
