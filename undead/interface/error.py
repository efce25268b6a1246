"""Domain error to HTTP status mapping for route handlers."""

import logfire
from fastapi import HTTPException, status

from undead.domain.error import (
    ConflictError,
    DomainError,
    DownloadLimitExceededError,
    ExpiredError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)

# Checked in order; first isinstance match wins
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (ExpiredError, status.HTTP_410_GONE),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (DownloadLimitExceededError, status.HTTP_403_FORBIDDEN),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error (400 for unmapped ones)."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def to_http_exception(error: DomainError, action: str) -> HTTPException:
    """Log a domain error and convert it to an HTTPException.

    Args:
        error: The domain error raised by a use case
        action: Short description for the log event, e.g. "Vote"

    Returns:
        HTTPException carrying the mapped status and the error message
    """
    code = status_for(error)
    logfire.warn(
        f"{action} failed",
        error=str(error),
        error_type=type(error).__name__,
        status_code=code,
    )
    return HTTPException(status_code=code, detail=str(error))


def internal_error(action: str, error: Exception) -> HTTPException:
    """Log an unexpected error and return a generic 500."""
    logfire.error(f"Unexpected error: {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action.lower()}",
    )
