"""JWT token domain service."""

from uuid import UUID

import logfire

from undead.config import AuthSettings
from undead.domain.value import Principal, UserId
from undead.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, principal: Principal) -> str:
        """Create a JWT token for a principal.

        Args:
            principal: The user to issue a token for

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", user_id=str(principal.user_id)
        ):
            return create_token(
                str(principal.user_id), principal.is_admin, self.auth_settings
            )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            return verify_token(token, self.auth_settings)

    def get_principal_from_token(self, token: str | None) -> Principal | None:
        """Decode the caller from a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Principal if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Principal(
                user_id=UserId(UUID(payload.user_id)), is_admin=payload.is_admin
            )
        except (JWTError, ValueError) as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
