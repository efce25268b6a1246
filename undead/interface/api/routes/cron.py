"""Scheduled job routes, called by the platform's cron with a bearer secret."""

import secrets

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from undead.application.usecase.backpage import (
    CleanupExpiredPostsRequest,
    CleanupExpiredPostsResponse,
    CleanupExpiredPostsUseCase,
)
from undead.config import CronSettings
from undead.interface.error import internal_error

router = APIRouter(prefix="/cron", tags=["cron"], route_class=DishkaRoute)


def _check_cron_secret(settings: CronSettings, authorization: str | None) -> None:
    """Reject the call unless it carries ``Bearer <CRON__SECRET>``.

    Raises:
        HTTPException: 401 if the secret is unset or doesn't match
    """
    expected = f"Bearer {settings.secret}" if settings.secret else None
    if (
        expected is None
        or authorization is None
        or not secrets.compare_digest(authorization, expected)
    ):
        logfire.warn("Unauthorized cron call", has_header=authorization is not None)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )


@router.post("/cleanup-backpage", response_model=CleanupExpiredPostsResponse)
async def cleanup_backpage(
    use_case: FromDishka[CleanupExpiredPostsUseCase],
    cron_settings: FromDishka[CronSettings],
    authorization: str | None = Header(default=None),
) -> CleanupExpiredPostsResponse:
    """Purge every expired BackPage post."""
    _check_cron_secret(cron_settings, authorization)

    try:
        return await use_case.execute(CleanupExpiredPostsRequest())
    except Exception as e:
        raise internal_error("Clean up BackPage", e)
