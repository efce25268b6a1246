"""Resolve the calling principal from the ``auth_token`` cookie."""

from fastapi import HTTPException, status

from undead.domain.service import JWTService
from undead.domain.value import Principal


def optional_principal(
    jwt_service: JWTService, auth_token: str | None
) -> Principal | None:
    """Principal for the cookie, or None when absent or invalid."""
    return jwt_service.get_principal_from_token(auth_token)


def require_principal(jwt_service: JWTService, auth_token: str | None) -> Principal:
    """Principal for the cookie.

    Raises:
        HTTPException: 401 if the cookie is missing or invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    principal = jwt_service.get_principal_from_token(auth_token)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
    return principal
