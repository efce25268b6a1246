"""Core DI providers (non-mockable)."""

from datetime import timedelta

from dishka import Scope, provide

from undead.config import AuthSettings, CronSettings, Settings
from undead.domain.value.limits import BACKPAGE_LIMITS, BackpageLimits
from undead.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_cron_settings(self, settings: Settings) -> CronSettings:
        """Provide cron settings."""
        return settings.cron

    @provide(scope=Scope.APP)
    def provide_backpage_limits(self, settings: Settings) -> BackpageLimits:
        """BackPage limits with the configurable quotas applied."""
        backpage = settings.backpage
        return BACKPAGE_LIMITS.model_copy(
            update={
                "posts_per_window": backpage.posts_per_window,
                "rate_window": timedelta(hours=backpage.rate_window_hours),
                "posts_per_page": backpage.posts_per_page,
                "slug_attempts": backpage.slug_attempts,
            }
        )
