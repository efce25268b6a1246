"""Integration tests for BackpageReportRepository.

Post reports and reply reports are deduplicated by separate partial
unique indexes.
"""

from uuid import uuid4

import pytest

from undead.domain.error import ConflictError
from undead.domain.model import BackpageReply, BackpageReport
from undead.domain.repository import (
    BackpagePostRepository,
    BackpageReplyRepository,
    BackpageReportRepository,
)
from undead.domain.value import (
    BackpageReplyId,
    BackpageReportId,
    ReportReason,
    ReportStatus,
    UserId,
)
from tests.conftest import WEDNESDAY, make_post
from tests.harness import create_env_fixture

integration_env = create_env_fixture(unmock={"persistence"})


def _report(post_id, reporter_id, reply_id=None):
    return BackpageReport(
        id=BackpageReportId(uuid4()),
        post_id=post_id,
        reply_id=reply_id,
        reporter_id=reporter_id,
        reason=ReportReason.SPAM,
        created_at=WEDNESDAY,
    )


class TestBackpageReportRepositoryIntegration:
    """Integration tests for PostgresBackpageReportRepository."""

    @pytest.mark.asyncio
    async def test_post_and_reply_reports_are_deduplicated_separately(
        self, integration_env
    ):
        post_repo = await integration_env.get(BackpagePostRepository)
        reply_repo = await integration_env.get(BackpageReplyRepository)
        report_repo = await integration_env.get(BackpageReportRepository)
        post = await post_repo.create(make_post())
        replies = [
            await reply_repo.save(
                BackpageReply(
                    id=BackpageReplyId(uuid4()),
                    post_id=post.id,
                    author_id=UserId(uuid4()),
                    body=body,
                    created_at=WEDNESDAY,
                )
            )
            for body in ("First spam", "Second spam")
        ]
        reporter = UserId(uuid4())

        await report_repo.create(_report(post.id, reporter))
        await report_repo.create(_report(post.id, reporter, replies[0].id))
        await report_repo.create(_report(post.id, reporter, replies[1].id))

        with pytest.raises(ConflictError, match="Post already reported"):
            await report_repo.create(_report(post.id, reporter))
        with pytest.raises(ConflictError, match="Reply already reported"):
            await report_repo.create(_report(post.id, reporter, replies[0].id))

        # Another reporter is unaffected
        other = await report_repo.create(_report(post.id, UserId(uuid4())))
        assert await report_repo.find_by_id(other.id) is not None

    @pytest.mark.asyncio
    async def test_resolving_moves_report_out_of_pending(self, integration_env):
        post_repo = await integration_env.get(BackpagePostRepository)
        report_repo = await integration_env.get(BackpageReportRepository)
        post = await post_repo.create(make_post())
        report = await report_repo.create(_report(post.id, UserId(uuid4())))
        pending_before = await report_repo.count_by_status(ReportStatus.PENDING)
        moderator = UserId(uuid4())

        updated = await report_repo.update_status(
            report.id, ReportStatus.DISMISSED, moderator, WEDNESDAY
        )

        assert updated.status == ReportStatus.DISMISSED
        assert updated.resolved_by == moderator
        assert updated.reply_id is None
        assert (
            await report_repo.count_by_status(ReportStatus.PENDING)
            == pending_before - 1
        )
