"""Report BackPage post use case."""

from datetime import datetime

from pydantic import BaseModel

from undead.domain.service import BackpageReportService
from undead.domain.value import Principal

from ..base import BaseUseCase


class ReportPostRequest(BaseModel):
    """Report post request."""

    principal: Principal
    slug: str
    reason: str
    details: str | None = None
    now: datetime | None = None


class ReportPostResponse(BaseModel):
    """Report post response."""

    report_id: str
    message: str = "Report submitted. Thank you for helping keep the community safe."


class ReportPostUseCase(BaseUseCase):
    """Use case for flagging a post to moderators."""

    def __init__(self, report_service: BackpageReportService) -> None:
        """Initialize report post use case.

        Args:
            report_service: BackPage report domain service
        """
        self.report_service = report_service

    async def execute(self, request: ReportPostRequest) -> ReportPostResponse:
        """Execute report flow.

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If the post was removed or is the caller's own
            ConflictError: If the caller already reported this post
        """
        report = await self.report_service.report_post(
            request.principal,
            request.slug,
            request.reason,
            details=request.details,
            now=request.now,
        )
        return ReportPostResponse(report_id=str(report.id))
