"""Unit tests for BackpageReportService."""

from uuid import uuid4

import pytest

from undead.domain.error import ConflictError, NotFoundError, ValidationError
from undead.domain.repository import BackpagePostRepository
from undead.domain.service import BackpageReplyService, BackpageReportService
from undead.domain.value import (
    BackpageReplyId,
    BackpageReportId,
    ReportReason,
    ReportStatus,
)
from tests.conftest import WEDNESDAY, after_expiry, make_post, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestReportPost:
    """Tests for report_post."""

    @pytest.mark.asyncio
    async def test_report_is_queued_pending(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reporter = make_principal()

        report = await service.report_post(
            reporter, str(post.slug), "SPAM", "  Same link posted 5 times  ", WEDNESDAY
        )

        assert report.status == ReportStatus.PENDING
        assert report.reason == ReportReason.SPAM
        assert report.details == "Same link posted 5 times"
        assert report.reporter_id == reporter.user_id

    @pytest.mark.asyncio
    async def test_duplicate_report_conflicts(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        reporter = make_principal()
        await service.report_post(reporter, str(post.slug), "SCAM", now=WEDNESDAY)

        with pytest.raises(ConflictError, match="already reported"):
            await service.report_post(
                reporter, str(post.slug), "OTHER", now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_cannot_report_own_post(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        author = make_principal()
        post = await post_repo.create(make_post(author_id=author.user_id))

        with pytest.raises(ValidationError, match="your own post"):
            await service.report_post(author, str(post.slug), "SPAM", now=WEDNESDAY)

    @pytest.mark.asyncio
    async def test_cannot_report_removed_post(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        await post_repo.soft_delete(post.id, post.author_id, WEDNESDAY)

        with pytest.raises(ValidationError, match="removed"):
            await service.report_post(
                make_principal(), str(post.slug), "SPAM", now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_expired_post_can_still_be_reported(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())

        report = await service.report_post(
            make_principal(), str(post.slug), "HARASSMENT", now=after_expiry(post)
        )

        assert report.post_id == post.id

    @pytest.mark.asyncio
    async def test_invalid_reason_and_long_details_rejected(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())

        with pytest.raises(ValidationError, match="Reason"):
            await service.report_post(
                make_principal(), str(post.slug), "BORING", now=WEDNESDAY
            )
        with pytest.raises(ValidationError, match="Details"):
            await service.report_post(
                make_principal(), str(post.slug), "OTHER", "x" * 501, WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_report_unknown_post(self, unit_env):
        service = await unit_env.get(BackpageReportService)

        with pytest.raises(NotFoundError):
            await service.report_post(
                make_principal(), "missing-post", "SPAM", now=WEDNESDAY
            )


async def _post_with_reply(env, author=None):
    post_repo = await env.get(BackpagePostRepository)
    replies = await env.get(BackpageReplyService)
    post = await post_repo.create(make_post())
    reply = await replies.create_reply(
        author or make_principal(),
        str(post.slug),
        "DM me for cheap followers",
        now=WEDNESDAY,
    )
    return post, reply


class TestReportReply:
    """Tests for report_reply."""

    @pytest.mark.asyncio
    async def test_reply_report_carries_post_and_reply(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post, reply = await _post_with_reply(unit_env)

        report = await service.report_reply(
            make_principal(), str(post.slug), reply.id, "SPAM", now=WEDNESDAY
        )

        assert report.is_reply_report
        assert report.reply_id == reply.id
        assert report.post_id == post.id
        assert report.status == ReportStatus.PENDING
        assert await service.count_pending() == 1

    @pytest.mark.asyncio
    async def test_duplicate_reply_report_conflicts(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post, reply = await _post_with_reply(unit_env)
        reporter = make_principal()
        await service.report_reply(
            reporter, str(post.slug), reply.id, "SPAM", now=WEDNESDAY
        )

        with pytest.raises(ConflictError, match="already reported this reply"):
            await service.report_reply(
                reporter, str(post.slug), reply.id, "SCAM", now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_post_and_reply_reports_by_same_user_coexist(self, unit_env):
        """Reporting a reply doesn't count as having reported its post."""
        service = await unit_env.get(BackpageReportService)
        replies = await unit_env.get(BackpageReplyService)
        post, reply = await _post_with_reply(unit_env)
        second = await replies.create_reply(
            make_principal(), str(post.slug), "Also spam", now=WEDNESDAY
        )
        reporter = make_principal()

        await service.report_reply(
            reporter, str(post.slug), reply.id, "SPAM", now=WEDNESDAY
        )
        await service.report_reply(
            reporter, str(post.slug), second.id, "SPAM", now=WEDNESDAY
        )
        await service.report_post(reporter, str(post.slug), "OTHER", now=WEDNESDAY)

        assert await service.count_pending() == 3

    @pytest.mark.asyncio
    async def test_cannot_report_own_reply(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        author = make_principal()
        post, reply = await _post_with_reply(unit_env, author=author)

        with pytest.raises(ValidationError, match="your own reply"):
            await service.report_reply(
                author, str(post.slug), reply.id, "SPAM", now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_cannot_report_removed_reply(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        replies = await unit_env.get(BackpageReplyService)
        post, reply = await _post_with_reply(unit_env)
        await replies.remove_reply(
            make_principal(is_admin=True), reply.id, now=WEDNESDAY
        )

        with pytest.raises(ValidationError, match="removed"):
            await service.report_reply(
                make_principal(), str(post.slug), reply.id, "SPAM", now=WEDNESDAY
            )

    @pytest.mark.asyncio
    async def test_reply_under_other_post_or_unknown_is_not_found(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post, reply = await _post_with_reply(unit_env)
        other = await post_repo.create(make_post())

        with pytest.raises(NotFoundError):
            await service.report_reply(
                make_principal(), str(other.slug), reply.id, "SPAM", now=WEDNESDAY
            )
        with pytest.raises(NotFoundError):
            await service.report_reply(
                make_principal(),
                str(post.slug),
                BackpageReplyId(uuid4()),
                "SPAM",
                now=WEDNESDAY,
            )
        with pytest.raises(NotFoundError):
            await service.report_reply(
                make_principal(), "missing-post", reply.id, "SPAM", now=WEDNESDAY
            )

class TestModerationQueue:
    """Tests for list_reports and resolve_report."""

    @pytest.mark.asyncio
    async def test_resolve_moves_report_out_of_pending(self, unit_env):
        service = await unit_env.get(BackpageReportService)
        post_repo = await unit_env.get(BackpagePostRepository)
        post = await post_repo.create(make_post())
        report = await service.report_post(
            make_principal(), str(post.slug), "SPAM", now=WEDNESDAY
        )
        moderator = make_principal(is_admin=True)

        assert [r.id for r in await service.list_reports("PENDING")] == [report.id]

        resolved = await service.resolve_report(
            moderator, report.id, "DISMISSED", now=WEDNESDAY
        )

        assert resolved.status == ReportStatus.DISMISSED
        assert resolved.resolved_by == moderator.user_id
        assert resolved.resolved_at == WEDNESDAY
        assert await service.list_reports("PENDING") == []
        assert len(await service.list_reports()) == 1

    @pytest.mark.asyncio
    async def test_resolve_to_pending_rejected(self, unit_env):
        service = await unit_env.get(BackpageReportService)

        with pytest.raises(ValidationError):
            await service.resolve_report(
                make_principal(is_admin=True), BackpageReportId(uuid4()), "PENDING"
            )

    @pytest.mark.asyncio
    async def test_resolve_unknown_report(self, unit_env):
        service = await unit_env.get(BackpageReportService)

        with pytest.raises(NotFoundError):
            await service.resolve_report(
                make_principal(is_admin=True), BackpageReportId(uuid4()), "RESOLVED"
            )

    @pytest.mark.asyncio
    async def test_unknown_status_filter_rejected(self, unit_env):
        service = await unit_env.get(BackpageReportService)

        with pytest.raises(ValidationError, match="Status"):
            await service.list_reports("OPEN")
