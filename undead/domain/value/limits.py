"""BackPage content limits."""

from datetime import timedelta

from undead.domain.value.common import ValueObject


class BackpageLimits(ValueObject):
    """Character limits and quotas for the weekly board."""

    title_min: int = 3
    title_max: int = 100
    body_min: int = 10
    body_max: int = 5000
    reply_min: int = 2
    reply_max: int = 2000
    report_details_max: int = 500
    posts_per_page: int = 20
    posts_per_window: int = 1
    rate_window: timedelta = timedelta(hours=24)
    slug_base_max: int = 50
    slug_attempts: int = 5


BACKPAGE_LIMITS = BackpageLimits()
