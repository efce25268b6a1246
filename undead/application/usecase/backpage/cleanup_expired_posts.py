"""Cleanup expired BackPage posts use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from undead.domain.model.common import as_utc
from undead.domain.service import BackpageService

from ..base import BaseUseCase


class CleanupExpiredPostsRequest(BaseModel):
    """Cleanup request; ``now`` defaults to the current time."""

    now: datetime | None = None


class CleanupExpiredPostsResponse(BaseModel):
    """Number of posts purged and when the sweep ran."""

    deleted: int
    timestamp: datetime


class CleanupExpiredPostsUseCase(BaseUseCase):
    """Use case for the weekly purge, run by cron or the CLI script."""

    def __init__(self, backpage_service: BackpageService) -> None:
        """Initialize cleanup use case.

        Args:
            backpage_service: BackPage domain service
        """
        self.backpage_service = backpage_service

    async def execute(
        self, request: CleanupExpiredPostsRequest
    ) -> CleanupExpiredPostsResponse:
        """Execute cleanup flow."""
        now = as_utc(request.now)
        with logfire.span("cleanup_expired_posts.execute"):
            deleted = await self.backpage_service.cleanup_expired_posts(now)
            return CleanupExpiredPostsResponse(deleted=deleted, timestamp=now)
