"""List BackPage reports use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from undead.domain.service import BackpageReportService
from undead.domain.value import Principal

from ..base import BaseUseCase
from .common import require_admin


class ReportItem(BaseModel):
    """A report in the moderation queue."""

    report_id: str
    post_id: str
    reply_id: str | None  # Set for reports against a reply
    reporter_id: str
    reason: str
    details: str | None
    status: str
    created_at: datetime
    resolved_at: datetime | None
    resolved_by: str | None


class ListReportsRequest(BaseModel):
    """List reports request."""

    principal: Principal
    status: str | None = None  # PENDING, RESOLVED, DISMISSED or None for all
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListReportsResponse(BaseModel):
    """List reports response."""

    reports: list[ReportItem]
    limit: int
    offset: int


class ListReportsUseCase(BaseUseCase):
    """Use case for admins reviewing reported posts."""

    def __init__(self, report_service: BackpageReportService) -> None:
        """Initialize list reports use case.

        Args:
            report_service: BackPage report domain service
        """
        self.report_service = report_service

    async def execute(self, request: ListReportsRequest) -> ListReportsResponse:
        """Execute list reports flow.

        Raises:
            NotAuthorizedError: If the caller isn't an admin
            ValidationError: If the status filter is unknown
        """
        require_admin(request.principal, "BackPage reports", "*")

        reports = await self.report_service.list_reports(
            request.status, limit=request.limit, offset=request.offset
        )
        return ListReportsResponse(
            reports=[
                ReportItem(
                    report_id=str(r.id),
                    post_id=str(r.post_id),
                    reply_id=str(r.reply_id) if r.reply_id else None,
                    reporter_id=str(r.reporter_id),
                    reason=r.reason.value,
                    details=r.details,
                    status=r.status.value,
                    created_at=r.created_at,
                    resolved_at=r.resolved_at,
                    resolved_by=str(r.resolved_by) if r.resolved_by else None,
                )
                for r in reports
            ],
            limit=request.limit,
            offset=request.offset,
        )
