"""BackPage post domain service.

BackPage is a weekly board: every post expires at Monday 00:00 UTC after it
was created, and the cleanup job purges expired posts.
"""

import re
import secrets
import string
from datetime import datetime, timedelta
from typing import Callable
from uuid import uuid4

import logfire

from undead.domain.error import (
    ConflictError,
    ExpiredError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from undead.domain.model.backpage_post import BackpagePost
from undead.domain.model.common import as_utc
from undead.domain.repository import BackpagePostRepository
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    PostState,
    Principal,
    Slug,
)
from undead.domain.value.limits import BACKPAGE_LIMITS, BackpageLimits

from .base import Service

_BASE36 = string.digits + string.ascii_lowercase


def next_monday(after: datetime) -> datetime:
    """Monday 00:00 UTC strictly after ``after``.

    Sunday advances one day, Monday a full week. Naive datetimes are
    treated as UTC.

    Args:
        after: Reference instant (usually the creation time)

    Returns:
        Aware UTC datetime of the next Monday midnight
    """
    after = as_utc(after)

    # weekday(): Monday == 0, Sunday == 6
    days_until_monday = 7 - after.weekday()
    midnight = after.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=days_until_monday)


def slugify(title: str, max_length: int = BACKPAGE_LIMITS.slug_base_max) -> str:
    """Convert a title to the base part of a slug.

    Args:
        title: Post title
        max_length: Maximum length of the base

    Returns:
        Lowercase hyphenated slug base, "post" if the title has no usable chars
    """
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    slug = slug[:max_length].rstrip("-")
    return slug or "post"


def random_suffix(length: int = 6) -> str:
    """Short random base36 token used to disambiguate slugs."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


class BackpageService(Service):
    """Domain service for BackPage post lifecycle."""

    def __init__(
        self,
        post_repository: BackpagePostRepository,
        limits: BackpageLimits = BACKPAGE_LIMITS,
        suffix_factory: Callable[[], str] = random_suffix,
    ) -> None:
        """Initialize BackPage service.

        Args:
            post_repository: BackPage post repository
            limits: Content limits and quotas
            suffix_factory: Produces slug disambiguators
        """
        self.post_repository = post_repository
        self.limits = limits
        self.suffix_factory = suffix_factory

    def validate_category(self, category: str) -> BackpageCategory:
        """Parse a category, raising ValidationError if it isn't allowed."""
        try:
            return BackpageCategory(category)
        except ValueError:
            allowed = ", ".join(c.value for c in BackpageCategory)
            raise ValidationError(f"Category must be one of: {allowed}")

    def validate_length(self, field: str, value: str, minimum: int, maximum: int) -> str:
        """Check a text field's trimmed length, returning the trimmed value."""
        value = value.strip()
        if len(value) < minimum:
            raise ValidationError(f"{field} must be at least {minimum} characters")
        if len(value) > maximum:
            raise ValidationError(f"{field} must be at most {maximum} characters")
        return value

    async def create_post(
        self,
        principal: Principal,
        category: str,
        title: str,
        body: str,
        now: datetime | None = None,
    ) -> BackpagePost:
        """Create a BackPage post.

        Steps:
        1. Validate category and content lengths
        2. Enforce the per-author rolling window rate limit
        3. Insert with a fresh slug, retrying on slug conflicts

        Args:
            principal: Authenticated author
            category: Category name
            title: Post title
            body: Post body
            now: Creation instant (defaults to current time)

        Returns:
            Created post

        Raises:
            ValidationError: If category or content is invalid
            RateLimitedError: If the author posted too recently
            ConflictError: If no unique slug was found within the retry budget
        """
        now = as_utc(now)
        limits = self.limits

        with logfire.span(
            "backpage_service.create_post",
            author_id=str(principal.user_id),
            category=category,
        ):
            parsed_category = self.validate_category(category)
            title = self.validate_length(
                "Title", title, limits.title_min, limits.title_max
            )
            body = self.validate_length(
                "Content", body, limits.body_min, limits.body_max
            )

            recent = await self.post_repository.count_by_author_since(
                principal.user_id, now - limits.rate_window
            )
            if recent >= limits.posts_per_window:
                logfire.warn(
                    "BackPage rate limit hit",
                    author_id=str(principal.user_id),
                    recent_posts=recent,
                )
                raise RateLimitedError(
                    limits.posts_per_window,
                    int(limits.rate_window.total_seconds() // 3600),
                )

            post_id = BackpagePostId(uuid4())
            expires_at = next_monday(now)
            base = slugify(title, limits.slug_base_max)

            for attempt in range(1, limits.slug_attempts + 1):
                post = BackpagePost(
                    id=post_id,
                    slug=Slug(f"{base}-{self.suffix_factory()}"),
                    author_id=principal.user_id,
                    category=parsed_category,
                    title=title,
                    body=body,
                    created_at=now,
                    expires_at=expires_at,
                )
                try:
                    saved = await self.post_repository.create(post)
                except ConflictError:
                    logfire.debug(
                        "Slug collision, retrying",
                        slug=str(post.slug),
                        attempt=attempt,
                    )
                    continue

                logfire.info(
                    "BackPage post created",
                    post_id=str(saved.id),
                    slug=str(saved.slug),
                    expires_at=saved.expires_at.isoformat(),
                )
                return saved

            logfire.error("Could not generate unique slug", base_slug=base)
            raise ConflictError(
                f"Could not generate a unique slug after {limits.slug_attempts} attempts"
            )

    async def get_post_by_slug(self, slug: str) -> BackpagePost | None:
        """Get a post by slug regardless of state."""
        try:
            parsed = Slug(slug)
        except ValueError:
            return None
        return await self.post_repository.find_by_slug(parsed)

    async def get_live_post(self, slug: str, now: datetime | None = None) -> BackpagePost:
        """Get a post that can still be read, replied to and voted on.

        Args:
            slug: Post slug
            now: Reference instant (defaults to current time)

        Returns:
            The active post

        Raises:
            NotFoundError: If the post doesn't exist or was deleted
            ExpiredError: If the post is past its expiry
        """
        now = as_utc(now)
        post = await self.get_post_by_slug(slug)
        if post is None:
            raise NotFoundError("BackPage post", slug)

        state = post.state(now)
        if state == PostState.DELETED:
            raise NotFoundError("BackPage post", slug)
        if state == PostState.EXPIRED:
            raise ExpiredError("BackPage post", slug)
        return post

    async def list_active(
        self,
        category: BackpageCategory | None = None,
        page: int = 1,
        now: datetime | None = None,
    ) -> tuple[list[BackpagePost], int]:
        """List live posts, newest first.

        Args:
            category: Filter by category (None for all)
            page: 1-based page number
            now: Reference instant (defaults to current time)

        Returns:
            Tuple of (posts on the page, total live posts)
        """
        now = as_utc(now)
        page = max(1, page)
        per_page = self.limits.posts_per_page

        with logfire.span(
            "backpage_service.list_active",
            category=category.value if category else None,
            page=page,
        ):
            posts = await self.post_repository.find_active(
                now, category=category, limit=per_page, offset=(page - 1) * per_page
            )
            total = await self.post_repository.count_active(now, category=category)
            return posts, total

    async def list_for_moderation(
        self,
        state: PostState | None = None,
        category: BackpageCategory | None = None,
        page: int = 1,
        per_page: int = 50,
        now: datetime | None = None,
    ) -> tuple[list[BackpagePost], int, int]:
        """List posts in every state for moderators, newest first.

        Args:
            state: Filter by state at ``now`` (None for all)
            category: Filter by category (None for all)
            page: 1-based page number
            per_page: Page size
            now: Reference instant (defaults to current time)

        Returns:
            Tuple of (posts on the page, total matching, live posts overall)
        """
        now = as_utc(now)
        page = max(1, page)

        with logfire.span(
            "backpage_service.list_for_moderation",
            state=state.value if state else None,
            category=category.value if category else None,
            page=page,
        ):
            posts = await self.post_repository.find_for_moderation(
                now,
                state=state,
                category=category,
                limit=per_page,
                offset=(page - 1) * per_page,
            )
            total = await self.post_repository.count_for_moderation(
                now, state=state, category=category
            )
            active = await self.post_repository.count_active(now)
            return posts, total, active

    def validate_state(self, state: str) -> PostState:
        """Parse a post state filter, raising ValidationError if unknown."""
        try:
            return PostState(state)
        except ValueError:
            allowed = ", ".join(s.value for s in PostState)
            raise ValidationError(f"State must be one of: {allowed}")

    async def delete_post(
        self, principal: Principal, slug: str, now: datetime | None = None
    ) -> BackpagePost:
        """Soft delete a post. Only the author or an admin may do this.

        Raises:
            NotFoundError: If the post doesn't exist or is already deleted
            NotAuthorizedError: If the principal isn't the author or an admin
        """
        now = as_utc(now)
        with logfire.span(
            "backpage_service.delete_post", slug=slug, user_id=str(principal.user_id)
        ):
            post = await self.get_post_by_slug(slug)
            if post is None or post.deleted_at is not None:
                raise NotFoundError("BackPage post", slug)

            if not principal.can_moderate(post.author_id):
                raise NotAuthorizedError(
                    "BackPage post", str(post.id), str(principal.user_id)
                )

            deleted = await self.post_repository.soft_delete(
                post.id, deleted_by=principal.user_id, deleted_at=now
            )
            if deleted is None:
                raise NotFoundError("BackPage post", slug)

            logfire.info("BackPage post deleted", post_id=str(post.id))
            return deleted

    async def remove_post(
        self,
        moderator: Principal,
        post_id: BackpagePostId,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> BackpagePost:
        """Moderator removal of a post, recording the reason.

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If the post is already removed
        """
        now = as_utc(now)
        with logfire.span(
            "backpage_service.remove_post",
            post_id=str(post_id),
            moderator_id=str(moderator.user_id),
        ):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                raise NotFoundError("BackPage post", str(post_id))
            if post.deleted_at is not None:
                raise ValidationError("Post is already removed")

            removed = await self.post_repository.soft_delete(
                post_id,
                deleted_by=moderator.user_id,
                deleted_at=now,
                reason=reason or "Removed by admin",
            )
            if removed is None:
                raise ValidationError("Post is already removed")

            logfire.info(
                "BackPage post removed by moderator",
                post_id=str(post_id),
                author_id=str(post.author_id),
                reason=removed.removal_reason,
            )
            return removed

    async def cleanup_expired_posts(self, now: datetime | None = None) -> int:
        """Purge every post past its expiry.

        Rows are deleted one at a time; a row that fails is logged and
        skipped so the rest of the sweep still runs. Running it again
        purges nothing new.

        Args:
            now: Reference instant (defaults to current time)

        Returns:
            Number of posts purged
        """
        now = as_utc(now)
        with logfire.span("backpage_service.cleanup_expired_posts", now=now.isoformat()):
            expired_ids = await self.post_repository.find_expired_ids(now)

            purged = 0
            for post_id in expired_ids:
                try:
                    if await self.post_repository.delete(post_id):
                        purged += 1
                except Exception as e:
                    logfire.error(
                        "Failed to purge expired post",
                        post_id=str(post_id),
                        error=str(e),
                    )

            logfire.info(
                "BackPage cleanup finished",
                expired=len(expired_ids),
                purged=purged,
            )
            return purged
