"""Resolve BackPage report use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from undead.domain.service import BackpageReportService
from undead.domain.value import BackpageReportId, Principal

from ..base import BaseUseCase
from .common import require_admin


class ResolveReportRequest(BaseModel):
    """Resolve report request."""

    principal: Principal
    report_id: str  # UUID string
    status: str  # RESOLVED or DISMISSED
    now: datetime | None = None


class ResolveReportResponse(BaseModel):
    """Resolve report response."""

    report_id: str
    status: str
    resolved_at: datetime


class ResolveReportUseCase(BaseUseCase):
    """Use case for an admin closing a report."""

    def __init__(self, report_service: BackpageReportService) -> None:
        """Initialize resolve report use case.

        Args:
            report_service: BackPage report domain service
        """
        self.report_service = report_service

    async def execute(self, request: ResolveReportRequest) -> ResolveReportResponse:
        """Execute resolve report flow.

        Raises:
            NotAuthorizedError: If the caller isn't an admin
            ValidationError: If status isn't RESOLVED or DISMISSED
            NotFoundError: If the report doesn't exist
        """
        require_admin(request.principal, "BackPage report", request.report_id)

        report = await self.report_service.resolve_report(
            request.principal,
            BackpageReportId(UUID(request.report_id)),
            request.status,
            now=request.now,
        )
        return ResolveReportResponse(
            report_id=str(report.id),
            status=report.status.value,
            resolved_at=report.resolved_at,
        )
