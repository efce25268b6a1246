"""BackPage report repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from undead.domain.model.backpage_report import BackpageReport
from undead.domain.value import BackpageReportId, ReportStatus, UserId


class BackpageReportRepository(ABC):
    """Repository for BackpageReport entity."""

    @abstractmethod
    async def find_by_id(
        self, report_id: BackpageReportId
    ) -> Optional[BackpageReport]:
        """Find a report by ID.

        Args:
            report_id: The report's unique identifier

        Returns:
            The report if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackpageReport]:
        """Find reports, newest first.

        Args:
            status: Filter by status (None for all)
            limit: Maximum number of reports to return
            offset: Number of reports to skip

        Returns:
            List of reports
        """
        pass

    @abstractmethod
    async def count_by_status(self, status: ReportStatus) -> int:
        """Count reports in a given status.

        Args:
            status: Report status

        Returns:
            Number of reports
        """
        pass

    @abstractmethod
    async def create(self, report: BackpageReport) -> BackpageReport:
        """Insert a report.

        Args:
            report: The report to insert

        Returns:
            The inserted report

        Raises:
            ConflictError: If the reporter already reported this post (or,
                for a reply report, this reply)
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        report_id: BackpageReportId,
        status: ReportStatus,
        resolved_by: UserId,
        resolved_at: datetime,
    ) -> Optional[BackpageReport]:
        """Record a moderator's decision on a report.

        Args:
            report_id: The report ID
            status: New status
            resolved_by: Moderator's user ID
            resolved_at: Decision timestamp

        Returns:
            Updated report, or None if it doesn't exist
        """
        pass
