"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from undead.config import Settings
from undead.interface.api.routes import backpage, cron, downloads, health, moderation
from undead.util.di.container import create_container, setup_di
from undead.util.error import ConfigurationError
from undead.util.observability import instrument_fastapi

_DEFAULT_SECRET = "CHANGE_ME_IN_PRODUCTION"


def check_settings(settings: Settings) -> None:
    """Refuse to start a production server with placeholder secrets.

    Raises:
        ConfigurationError: If a required secret is still the default
    """
    if settings.environment != "production":
        return
    if settings.auth.jwt_secret == _DEFAULT_SECRET:
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
    if not settings.cron.secret:
        raise ConfigurationError("CRON__SECRET must be set in production")


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use (defaults to the production one)
    """
    settings = Settings()
    check_settings(settings)

    app_instance = FastAPI(
        title="UndeadList API",
        description="Download entitlements and the BackPage weekly board for UndeadList",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(downloads.router)
    app_instance.include_router(backpage.router)
    app_instance.include_router(moderation.router)
    app_instance.include_router(cron.router)

    return app_instance
