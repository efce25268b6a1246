"""BackPage report entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from undead.domain.model.common import DomainModel, utc_now
from undead.domain.value import (
    BackpagePostId,
    BackpageReplyId,
    BackpageReportId,
    ReportReason,
    ReportStatus,
    UserId,
)


class BackpageReport(DomainModel):
    """A user's report of a BackPage post or reply, queued for moderators.

    Reply reports carry the reply's post as well, so they go with the post
    when it is purged. One report per reporter per post, and one per
    reporter per reply.
    """

    id: BackpageReportId
    post_id: BackpagePostId
    reply_id: Optional[BackpageReplyId] = None
    reporter_id: UserId
    reason: ReportReason
    details: Optional[str] = Field(default=None, max_length=500)
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[UserId] = None

    @property
    def is_reply_report(self) -> bool:
        return self.reply_id is not None
