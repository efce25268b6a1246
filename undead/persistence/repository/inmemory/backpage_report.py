"""In-memory BackPage report repository for testing."""

from datetime import datetime
from typing import List, Optional

from undead.domain.error import ConflictError
from undead.domain.model.backpage_report import BackpageReport
from undead.domain.repository.backpage_report import BackpageReportRepository
from undead.domain.value import BackpageReportId, ReportStatus, UserId


class InMemoryBackpageReportRepository(BackpageReportRepository):
    """In-memory implementation of BackpageReportRepository for testing."""

    def __init__(self) -> None:
        self._reports: dict[BackpageReportId, BackpageReport] = {}

    async def find_by_id(
        self, report_id: BackpageReportId
    ) -> Optional[BackpageReport]:
        """Find a report by ID."""
        return self._reports.get(report_id)

    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackpageReport]:
        """Find reports, newest first."""
        reports = [
            r
            for r in self._reports.values()
            if status is None or r.status == status
        ]
        reports.sort(key=lambda r: r.created_at, reverse=True)
        return reports[offset : offset + limit]

    async def count_by_status(self, status: ReportStatus) -> int:
        """Count reports in a given status."""
        return sum(1 for r in self._reports.values() if r.status == status)

    async def create(self, report: BackpageReport) -> BackpageReport:
        """Insert a report.

        Raises:
            ConflictError: If the reporter already reported the post or reply
        """
        for existing in self._reports.values():
            if existing.reporter_id != report.reporter_id:
                continue
            if report.is_reply_report and existing.reply_id == report.reply_id:
                raise ConflictError("Reply already reported by this user")
            if (
                not report.is_reply_report
                and not existing.is_reply_report
                and existing.post_id == report.post_id
            ):
                raise ConflictError("Post already reported by this user")
        self._reports[report.id] = report
        return report

    async def update_status(
        self,
        report_id: BackpageReportId,
        status: ReportStatus,
        resolved_by: UserId,
        resolved_at: datetime,
    ) -> Optional[BackpageReport]:
        """Record a moderator's decision."""
        report = self._reports.get(report_id)
        if report is None:
            return None
        updated = report.model_copy(
            update={
                "status": status,
                "resolved_by": resolved_by,
                "resolved_at": resolved_at,
            }
        )
        self._reports[report_id] = updated
        return updated
