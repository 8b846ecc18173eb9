"""Cookie authentication for API routes."""

from fastapi import HTTPException, status

from skillswap.domain.service import JWTService
from skillswap.domain.value import Principal


def require_principal(
    jwt_service: JWTService, auth_token: str | None, action: str = "continue"
) -> Principal:
    """Resolve the caller from the ``auth_token`` cookie.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        action: What the caller tried to do, used in the 401 detail

    Returns:
        Authenticated principal

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    principal = jwt_service.get_principal(auth_token)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return principal
