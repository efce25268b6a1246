#!/usr/bin/env python3
"""Purge expired BackPage posts outside the HTTP cron endpoint.

Usage:
    python scripts/cleanup_backpage.py
"""

import asyncio
import sys

import logfire

from undead.application.usecase.backpage import (
    CleanupExpiredPostsRequest,
    CleanupExpiredPostsUseCase,
)
from undead.config import Settings
from undead.domain.service import BackpageService
from undead.persistence.database import (
    create_engine,
    create_session_factory,
    get_session,
)
from undead.persistence.repository import PostgresBackpagePostRepository
from undead.util.observability import configure_logfire


async def run(settings: Settings) -> int:
    """Run one cleanup sweep and return the number of posts purged."""
    engine = create_engine(settings)
    try:
        async with get_session(create_session_factory(engine)) as session:
            use_case = CleanupExpiredPostsUseCase(
                BackpageService(PostgresBackpagePostRepository(session))
            )
            result = await use_case.execute(CleanupExpiredPostsRequest())
            return result.deleted
    finally:
        await engine.dispose()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    try:
        deleted = asyncio.run(run(settings))
        print(f"Deleted {deleted} expired BackPage post(s)")
        return 0
    except Exception as e:
        logfire.error(
            "BackPage cleanup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
