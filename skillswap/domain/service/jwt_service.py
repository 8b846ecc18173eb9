"""JWT token domain service."""

from typing import Optional
from uuid import UUID

import logfire

from skillswap.config import AuthSettings
from skillswap.domain.value import Principal, UserId
from skillswap.util.jwt import JWTError, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Verifies identity provider tokens and turns them into principals."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self,
        user_id: str,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            display_name: Profile display name
            email: Profile email

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, self.auth_settings, display_name, email)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify(self, token: str) -> Principal:
        """Verify JWT token and extract the caller.

        Args:
            token: JWT token string

        Returns:
            Authenticated principal

        Raises:
            JWTError: If token is invalid, expired or carries a malformed user id
        """
        with logfire.span("jwt_service.verify"):
            try:
                payload = verify_token(token, self.auth_settings)
                principal = Principal(
                    user_id=UserId(UUID(payload.user_id)),
                    display_name=payload.display_name,
                    email=payload.email,
                )
            except ValueError as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise JWTError("Invalid token subject") from e
            except JWTError as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

            logfire.debug("JWT token verified", user_id=payload.user_id)
            return principal

    def get_principal(self, token: str | None) -> Principal | None:
        """Extract the caller from a token without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            Principal if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify(token)
        except JWTError as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
