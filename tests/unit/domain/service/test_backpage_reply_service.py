"""Unit tests for BackpageReplyService."""

from uuid import uuid4

import pytest

from undead.domain.error import (
    ExpiredError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from undead.domain.repository import BackpagePostRepository
from undead.domain.service import BackpageReplyService
from undead.domain.value import BackpageReplyId
from tests.conftest import WEDNESDAY, after_expiry, make_post, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateReply:
    """Tests for create_reply."""

    @pytest.mark.asyncio
    async def test_reply_increments_reply_count(self, unit_env):
        """Replying should store the reply and bump the post's counter."""
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        author = make_principal()

        reply = await service.create_reply(
            author, str(post.slug), "  Count me in  ", now=WEDNESDAY
        )

        assert reply.body == "Count me in"
        assert reply.author_id == author.user_id
        assert reply.post_id == post.id
        updated = await post_repo.find_by_id(post.id)
        assert updated.reply_count == 1

    @pytest.mark.asyncio
    async def test_reply_to_expired_post_raises(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())

        with pytest.raises(ExpiredError):
            await service.create_reply(
                make_principal(), str(post.slug), "Too late?", now=after_expiry(post)
            )

    @pytest.mark.asyncio
    async def test_reply_to_unknown_post_raises(self, unit_env):
        service = await unit_env.get(BackpageReplyService)

        with pytest.raises(NotFoundError):
            await service.create_reply(
                make_principal(), "missing-post", "Hello?", now=WEDNESDAY
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["x", " x ", "y" * 2001])
    async def test_reply_length_enforced(self, unit_env, body):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())

        with pytest.raises(ValidationError):
            await service.create_reply(
                make_principal(), str(post.slug), body, now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_replies_listed_oldest_first(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())

        first = await service.create_reply(
            make_principal(), str(post.slug), "First!", now=WEDNESDAY
        )
        second = await service.create_reply(
            make_principal(),
            str(post.slug),
            "Second",
            now=WEDNESDAY.replace(hour=13),
        )

        replies = await service.list_replies(post.id)
        assert [r.id for r in replies] == [first.id, second.id]


class TestDeleteReply:
    """Tests for delete_reply."""

    @pytest.mark.asyncio
    async def test_author_deletes_reply(self, unit_env):
        """Deleting hides the reply and decrements the counter."""
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        author = make_principal()
        reply = await service.create_reply(
            author, str(post.slug), "Oops, wrong thread", now=WEDNESDAY
        )

        deleted = await service.delete_reply(
            author, str(post.slug), reply.id, now=WEDNESDAY
        )

        assert deleted.deleted_by == author.user_id
        assert await service.list_replies(post.id) == []
        updated = await post_repo.find_by_id(post.id)
        assert updated.reply_count == 0

    @pytest.mark.asyncio
    async def test_admin_deletes_any_reply(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reply = await service.create_reply(
            make_principal(), str(post.slug), "Buy my course", now=WEDNESDAY
        )

        deleted = await service.delete_reply(
            make_principal(is_admin=True), str(post.slug), reply.id, now=WEDNESDAY
        )

        assert deleted.deleted_at == WEDNESDAY

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete_reply(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reply = await service.create_reply(
            make_principal(), str(post.slug), "Mine", now=WEDNESDAY
        )

        with pytest.raises(NotAuthorizedError):
            await service.delete_reply(
                make_principal(), str(post.slug), reply.id, now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_reply_on_other_post_is_not_found(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        other = await post_repo.create(make_post())
        author = make_principal()
        reply = await service.create_reply(
            author, str(post.slug), "On the first post", now=WEDNESDAY
        )

        with pytest.raises(NotFoundError):
            await service.delete_reply(
                author, str(other.slug), reply.id, now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_delete_twice_or_unknown_is_not_found(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        author = make_principal()
        reply = await service.create_reply(
            author, str(post.slug), "Short lived", now=WEDNESDAY
        )
        await service.delete_reply(author, str(post.slug), reply.id, now=WEDNESDAY)

        with pytest.raises(NotFoundError):
            await service.delete_reply(
                author, str(post.slug), reply.id, now=WEDNESDAY
            )
        with pytest.raises(NotFoundError):
            await service.delete_reply(
                author, str(post.slug), BackpageReplyId(uuid4()), now=WEDNESDAY
            )


class TestRemoveReply:
    """Tests for remove_reply."""

    @pytest.mark.asyncio
    async def test_moderator_removal_records_reason(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reply = await service.create_reply(
            make_principal(), str(post.slug), "Click this link", now=WEDNESDAY
        )
        moderator = make_principal(is_admin=True)

        removed = await service.remove_reply(
            moderator, reply.id, reason="Phishing", now=WEDNESDAY
        )

        assert removed.deleted_by == moderator.user_id
        assert removed.removal_reason == "Phishing"
        assert await service.list_replies(post.id) == []
        updated = await post_repo.find_by_id(post.id)
        assert updated.reply_count == 0

    @pytest.mark.asyncio
    async def test_default_reason(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reply = await service.create_reply(
            make_principal(), str(post.slug), "Off topic", now=WEDNESDAY
        )

        removed = await service.remove_reply(
            make_principal(is_admin=True), reply.id, now=WEDNESDAY
        )

        assert removed.removal_reason == "Removed by admin"

    @pytest.mark.asyncio
    async def test_removing_twice_is_rejected(self, unit_env):
        service = await unit_env.get(BackpageReplyService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reply = await service.create_reply(
            make_principal(), str(post.slug), "Gone soon", now=WEDNESDAY
        )
        moderator = make_principal(is_admin=True)
        await service.remove_reply(moderator, reply.id, now=WEDNESDAY)

        with pytest.raises(ValidationError, match="already removed"):
            await service.remove_reply(moderator, reply.id, now=WEDNESDAY)
        updated = await post_repo.find_by_id(post.id)
        assert updated.reply_count == 0

    @pytest.mark.asyncio
    async def test_unknown_reply_is_not_found(self, unit_env):
        service = await unit_env.get(BackpageReplyService)

        with pytest.raises(NotFoundError):
            await service.remove_reply(
                make_principal(is_admin=True), BackpageReplyId(uuid4())
            )
