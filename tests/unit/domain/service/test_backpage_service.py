"""Unit tests for BackpageService."""

from datetime import datetime, timedelta, timezone
from itertools import count
from uuid import uuid4

import pytest

from undead.domain.error import (
    ConflictError,
    ExpiredError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from undead.domain.repository import BackpagePostRepository
from undead.domain.service import BackpageService, next_monday, slugify
from undead.domain.value import BackpageCategory, BackpagePostId, PostState
from undead.domain.value.limits import BACKPAGE_LIMITS
from undead.persistence.repository.inmemory import InMemoryBackpagePostRepository
from tests.conftest import WEDNESDAY, after_expiry, make_post, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

BODY = "Anyone else building with htmx? Looking to compare notes."


class TestNextMonday:
    """Tests for the weekly expiry boundary."""

    def test_wednesday_expires_next_monday(self):
        assert next_monday(WEDNESDAY) == datetime(2025, 1, 20, tzinfo=timezone.utc)

    def test_sunday_expires_one_day_later(self):
        sunday = datetime(2025, 1, 19, 23, 59, tzinfo=timezone.utc)
        assert next_monday(sunday) == datetime(2025, 1, 20, tzinfo=timezone.utc)

    def test_monday_midnight_expires_a_week_later(self):
        monday = datetime(2025, 1, 20, tzinfo=timezone.utc)
        assert next_monday(monday) == datetime(2025, 1, 27, tzinfo=timezone.utc)

    def test_naive_datetime_is_treated_as_utc(self):
        naive = datetime(2025, 1, 15, 12, 0)
        assert next_monday(naive) == datetime(2025, 1, 20, tzinfo=timezone.utc)

    def test_other_timezones_are_normalized(self):
        # Monday 01:00 in UTC+2 is still Sunday 23:00 UTC
        plus_two = timezone(timedelta(hours=2))
        local = datetime(2025, 1, 20, 1, 0, tzinfo=plus_two)
        assert next_monday(local) == datetime(2025, 1, 20, tzinfo=timezone.utc)


class TestSlugify:
    """Tests for slug base generation."""

    def test_title_is_lowercased_and_hyphenated(self):
        assert slugify("Selling My SaaS Boilerplate!") == "selling-my-saas-boilerplate"

    def test_long_titles_are_truncated_without_trailing_hyphen(self):
        slug = slugify("a" * 49 + " b" * 10)
        assert len(slug) <= BACKPAGE_LIMITS.slug_base_max
        assert not slug.endswith("-")

    def test_unusable_title_falls_back(self):
        assert slugify("!!!") == "post"


class TestCreatePost:
    """Tests for create_post."""

    @pytest.mark.asyncio
    async def test_create_post_sets_expiry_and_slug(self, unit_env):
        """A created post expires next Monday and gets a suffixed slug."""
        service = await unit_env.get(BackpageService)
        author = make_principal()

        post = await service.create_post(
            author, "SHOW_TELL", "  My weekend project  ", BODY, now=WEDNESDAY
        )

        assert post.title == "My weekend project"
        assert post.category == BackpageCategory.SHOW_TELL
        assert post.expires_at == datetime(2025, 1, 20, tzinfo=timezone.utc)
        assert str(post.slug).startswith("my-weekend-project-")
        assert post.upvotes == 0 and post.downvotes == 0 and post.reply_count == 0
        assert post.state(WEDNESDAY) == PostState.ACTIVE

    @pytest.mark.asyncio
    async def test_same_title_gets_distinct_slugs(self, unit_env):
        """Two authors with the same title get different slugs."""
        service = await unit_env.get(BackpageService)

        first = await service.create_post(
            make_principal(), "GENERAL", "Hello world", BODY, now=WEDNESDAY
        )
        second = await service.create_post(
            make_principal(), "GENERAL", "Hello world", BODY, now=WEDNESDAY
        )

        assert first.slug != second.slug

    @pytest.mark.asyncio
    async def test_slug_collision_is_retried(self, unit_env):
        """A colliding slug is retried with a fresh suffix."""
        repo = await unit_env.get(BackpagePostRepository)
        suffixes = iter(["aaaaaa", "aaaaaa", "bbbbbb"])
        service = BackpageService(repo, suffix_factory=lambda: next(suffixes))

        first = await service.create_post(
            make_principal(), "GENERAL", "Hello world", BODY, now=WEDNESDAY
        )
        second = await service.create_post(
            make_principal(), "GENERAL", "Hello world", BODY, now=WEDNESDAY
        )

        assert str(first.slug) == "hello-world-aaaaaa"
        assert str(second.slug) == "hello-world-bbbbbb"

    @pytest.mark.asyncio
    async def test_slug_retries_are_bounded(self, unit_env):
        """Exhausting the retry budget raises ConflictError."""
        repo = await unit_env.get(BackpagePostRepository)
        attempts = count()

        def constant_suffix() -> str:
            next(attempts)
            return "zzzzzz"

        service = BackpageService(repo, suffix_factory=constant_suffix)
        await service.create_post(
            make_principal(), "GENERAL", "Hello world", BODY, now=WEDNESDAY
        )

        with pytest.raises(ConflictError):
            await service.create_post(
                make_principal(), "GENERAL", "Hello world", BODY, now=WEDNESDAY
            )
        assert next(attempts) == 1 + BACKPAGE_LIMITS.slug_attempts

    @pytest.mark.asyncio
    async def test_invalid_category_rejected(self, unit_env):
        service = await unit_env.get(BackpageService)

        with pytest.raises(ValidationError, match="Category"):
            await service.create_post(
                make_principal(), "RANTS", "Hello world", BODY, now=WEDNESDAY
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title, body, message",
        [
            ("Hi", BODY, "Title must be at least 3"),
            ("x" * 101, BODY, "Title must be at most 100"),
            ("Hello world", "too short", "Content must be at least 10"),
            ("Hello world", "x" * 5001, "Content must be at most 5000"),
        ],
    )
    async def test_content_lengths_enforced(self, unit_env, title, body, message):
        """Titles and bodies must be within their character limits."""
        service = await unit_env.get(BackpageService)

        with pytest.raises(ValidationError, match=message):
            await service.create_post(
                make_principal(), "GENERAL", title, body, now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_second_post_within_window_is_rate_limited(self, unit_env):
        """An author may post once per rolling 24 hours."""
        service = await unit_env.get(BackpageService)
        author = make_principal()
        await service.create_post(author, "GENERAL", "First post", BODY, now=WEDNESDAY)

        with pytest.raises(RateLimitedError):
            await service.create_post(
                author,
                "GENERAL",
                "Second post",
                BODY,
                now=WEDNESDAY + timedelta(hours=23),
            )

    @pytest.mark.asyncio
    async def test_post_allowed_after_window(self, unit_env):
        """After the window has passed the author may post again."""
        service = await unit_env.get(BackpageService)
        author = make_principal()
        await service.create_post(author, "GENERAL", "First post", BODY, now=WEDNESDAY)

        post = await service.create_post(
            author,
            "GENERAL",
            "Second post",
            BODY,
            now=WEDNESDAY + timedelta(hours=25),
        )

        assert post.title == "Second post"


class TestGetLivePost:
    """Tests for get_live_post."""

    @pytest.mark.asyncio
    async def test_unknown_and_malformed_slugs_are_not_found(self, unit_env):
        service = await unit_env.get(BackpageService)

        with pytest.raises(NotFoundError):
            await service.get_live_post("no-such-post", WEDNESDAY)
        with pytest.raises(NotFoundError):
            await service.get_live_post("Not A Slug!", WEDNESDAY)

    @pytest.mark.asyncio
    async def test_expired_post_raises_expired(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        post = await repo.create(make_post())

        with pytest.raises(ExpiredError):
            await service.get_live_post(str(post.slug), after_expiry(post))

    @pytest.mark.asyncio
    async def test_deleted_post_is_not_found(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        author = make_principal()
        post = await repo.create(make_post(author_id=author.user_id))
        await service.delete_post(author, str(post.slug), now=WEDNESDAY)

        with pytest.raises(NotFoundError):
            await service.get_live_post(str(post.slug), WEDNESDAY)


class TestListActive:
    """Tests for list_active."""

    @pytest.mark.asyncio
    async def test_lists_live_posts_newest_first(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        older = await repo.create(make_post(created_at=WEDNESDAY))
        newer = await repo.create(
            make_post(
                created_at=WEDNESDAY + timedelta(hours=1),
                category=BackpageCategory.HELP,
            )
        )
        deleted = await repo.create(make_post())
        await repo.soft_delete(deleted.id, deleted.author_id, WEDNESDAY)
        # Last week's post, already expired
        await repo.create(make_post(created_at=WEDNESDAY - timedelta(days=7)))

        now = WEDNESDAY + timedelta(hours=2)
        posts, total = await service.list_active(now=now)

        assert [p.id for p in posts] == [newer.id, older.id]
        assert total == 2

        help_posts, help_total = await service.list_active(
            category=BackpageCategory.HELP, now=now
        )
        assert [p.id for p in help_posts] == [newer.id]
        assert help_total == 1

    @pytest.mark.asyncio
    async def test_pages_are_clamped_to_one(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        post = await repo.create(make_post())

        posts, total = await service.list_active(page=0, now=WEDNESDAY)

        assert [p.id for p in posts] == [post.id]
        assert total == 1


class TestListForModeration:
    """Tests for list_for_moderation and validate_state."""

    async def _seed(self, repo):
        live = await repo.create(make_post(category=BackpageCategory.HELP))
        removed = await repo.create(
            make_post(created_at=WEDNESDAY + timedelta(hours=1))
        )
        await repo.soft_delete(removed.id, removed.author_id, WEDNESDAY, "Spam")
        expired = await repo.create(
            make_post(created_at=WEDNESDAY - timedelta(days=7))
        )
        return live, removed, expired

    @pytest.mark.asyncio
    async def test_lists_every_state_newest_first(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        live, removed, expired = await self._seed(repo)

        posts, total, active = await service.list_for_moderation(now=WEDNESDAY)

        assert [p.id for p in posts] == [removed.id, live.id, expired.id]
        assert total == 3
        assert active == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("state", list(PostState))
    async def test_state_filter(self, unit_env, state):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        live, removed, expired = await self._seed(repo)
        expected = {
            PostState.ACTIVE: live.id,
            PostState.EXPIRED: expired.id,
            PostState.DELETED: removed.id,
        }[state]

        posts, total, active = await service.list_for_moderation(
            state=state, now=WEDNESDAY
        )

        assert [p.id for p in posts] == [expected]
        assert total == 1
        assert active == 1

    @pytest.mark.asyncio
    async def test_category_filter_and_paging(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        live, _, expired = await self._seed(repo)

        posts, total, _ = await service.list_for_moderation(
            category=BackpageCategory.HELP, now=WEDNESDAY
        )
        assert [p.id for p in posts] == [live.id]
        assert total == 1

        second_page, total, _ = await service.list_for_moderation(
            page=2, per_page=2, now=WEDNESDAY
        )
        assert [p.id for p in second_page] == [expired.id]
        assert total == 3

    def test_validate_state(self):
        service = BackpageService(post_repository=InMemoryBackpagePostRepository())

        assert service.validate_state("EXPIRED") == PostState.EXPIRED
        with pytest.raises(ValidationError, match="State"):
            service.validate_state("PURGED")

class TestDeletePost:
    """Tests for delete_post."""

    @pytest.mark.asyncio
    async def test_author_can_delete(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        author = make_principal()
        post = await repo.create(make_post(author_id=author.user_id))

        deleted = await service.delete_post(author, str(post.slug), now=WEDNESDAY)

        assert deleted.deleted_at == WEDNESDAY
        assert deleted.deleted_by == author.user_id

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_post(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        post = await repo.create(make_post())

        deleted = await service.delete_post(
            make_principal(is_admin=True), str(post.slug), now=WEDNESDAY
        )

        assert deleted.deleted_at is not None

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        post = await repo.create(make_post())

        with pytest.raises(NotAuthorizedError):
            await service.delete_post(make_principal(), str(post.slug), now=WEDNESDAY)

    @pytest.mark.asyncio
    async def test_deleting_twice_is_not_found(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        author = make_principal()
        post = await repo.create(make_post(author_id=author.user_id))
        await service.delete_post(author, str(post.slug), now=WEDNESDAY)

        with pytest.raises(NotFoundError):
            await service.delete_post(author, str(post.slug), now=WEDNESDAY)


class TestRemovePost:
    """Tests for moderator remove_post."""

    @pytest.mark.asyncio
    async def test_remove_records_reason(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        moderator = make_principal(is_admin=True)
        post = await repo.create(make_post())

        removed = await service.remove_post(moderator, post.id, "Spam", now=WEDNESDAY)

        assert removed.removal_reason == "Spam"
        assert removed.deleted_by == moderator.user_id

    @pytest.mark.asyncio
    async def test_remove_defaults_reason(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        post = await repo.create(make_post())

        removed = await service.remove_post(
            make_principal(is_admin=True), post.id, now=WEDNESDAY
        )

        assert removed.removal_reason == "Removed by admin"

    @pytest.mark.asyncio
    async def test_remove_twice_is_rejected(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        moderator = make_principal(is_admin=True)
        post = await repo.create(make_post())
        await service.remove_post(moderator, post.id, now=WEDNESDAY)

        with pytest.raises(ValidationError, match="already removed"):
            await service.remove_post(moderator, post.id, now=WEDNESDAY)

    @pytest.mark.asyncio
    async def test_remove_unknown_post(self, unit_env):
        service = await unit_env.get(BackpageService)

        with pytest.raises(NotFoundError):
            await service.remove_post(
                make_principal(is_admin=True), BackpagePostId(uuid4())
            )


class TestCleanupExpiredPosts:
    """Tests for cleanup_expired_posts."""

    @pytest.mark.asyncio
    async def test_cleanup_purges_only_expired_posts(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        last_week = await repo.create(
            make_post(created_at=WEDNESDAY - timedelta(days=7))
        )
        this_week = await repo.create(make_post())

        purged = await service.cleanup_expired_posts(now=WEDNESDAY)

        assert purged == 1
        assert await repo.find_by_id(last_week.id) is None
        assert await repo.find_by_id(this_week.id) is not None

    @pytest.mark.asyncio
    async def test_cleanup_is_idempotent(self, unit_env):
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        await repo.create(make_post(created_at=WEDNESDAY - timedelta(days=7)))

        assert await service.cleanup_expired_posts(now=WEDNESDAY) == 1
        assert await service.cleanup_expired_posts(now=WEDNESDAY) == 0

    @pytest.mark.asyncio
    async def test_cleanup_purges_deleted_expired_posts(self, unit_env):
        """Soft-deleted posts are purged too once expired."""
        service = await unit_env.get(BackpageService)
        repo = await unit_env.get(BackpagePostRepository)
        post = await repo.create(make_post())
        await repo.soft_delete(post.id, post.author_id, WEDNESDAY)

        assert await service.cleanup_expired_posts(now=after_expiry(post)) == 1

    @pytest.mark.asyncio
    async def test_failing_row_is_skipped_and_sweep_continues(self):
        """A row whose delete raises stays put; the other expired rows go."""

        class FlakyPostRepository(InMemoryBackpagePostRepository):
            def __init__(self, broken_id: BackpagePostId) -> None:
                super().__init__()
                self.broken_id = broken_id

            async def delete(self, post_id: BackpagePostId) -> bool:
                if post_id == self.broken_id:
                    raise RuntimeError("deadlock detected")
                return await super().delete(post_id)

        last_week = WEDNESDAY - timedelta(days=7)
        posts = [make_post(created_at=last_week) for _ in range(3)]
        broken = posts[1]
        repo = FlakyPostRepository(broken.id)
        for post in posts:
            await repo.create(post)
        live = await repo.create(make_post())
        service = BackpageService(post_repository=repo)

        purged = await service.cleanup_expired_posts(now=WEDNESDAY)

        assert purged == 2
        assert await repo.find_by_id(broken.id) is not None
        assert await repo.find_by_id(posts[0].id) is None
        assert await repo.find_by_id(posts[2].id) is None
        assert await repo.find_by_id(live.id) is not None
