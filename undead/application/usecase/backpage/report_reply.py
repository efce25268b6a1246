"""Report BackPage reply use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from undead.domain.service import BackpageReportService
from undead.domain.value import BackpageReplyId, Principal

from ..base import BaseUseCase


class ReportReplyRequest(BaseModel):
    """Report reply request."""

    principal: Principal
    slug: str
    reply_id: str  # UUID string
    reason: str
    details: str | None = None
    now: datetime | None = None


class ReportReplyResponse(BaseModel):
    """Report reply response."""

    report_id: str
    message: str = "Report submitted. Thank you for helping keep the community safe."


class ReportReplyUseCase(BaseUseCase):
    """Use case for flagging a reply to moderators."""

    def __init__(self, report_service: BackpageReportService) -> None:
        """Initialize report reply use case.

        Args:
            report_service: BackPage report domain service
        """
        self.report_service = report_service

    async def execute(self, request: ReportReplyRequest) -> ReportReplyResponse:
        """Execute reply report flow.

        Raises:
            NotFoundError: If the post or reply doesn't exist
            ValidationError: If the reply was removed or is the caller's own
            ConflictError: If the caller already reported this reply
        """
        report = await self.report_service.report_reply(
            request.principal,
            request.slug,
            BackpageReplyId(UUID(request.reply_id)),
            request.reason,
            details=request.details,
            now=request.now,
        )
        return ReportReplyResponse(report_id=str(report.id))
