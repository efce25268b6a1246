"""PostgreSQL implementation of BackPage report repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from undead.domain.error import ConflictError
from undead.domain.model import BackpageReport
from undead.domain.repository import BackpageReportRepository
from undead.domain.value import BackpageReportId, ReportStatus, UserId
from undead.persistence.mappers import (
    backpage_report_to_dict,
    row_to_backpage_report,
)
from undead.persistence.tables import backpage_reports_table

reports = backpage_reports_table


class PostgresBackpageReportRepository(BackpageReportRepository):
    """PostgreSQL implementation of BackpageReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, report_id: BackpageReportId
    ) -> Optional[BackpageReport]:
        """Find a report by ID."""
        stmt = select(reports).where(reports.c.id == report_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_backpage_report(row._asdict()) if row else None

    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackpageReport]:
        """Find reports, newest first."""
        stmt = select(reports)
        if status is not None:
            stmt = stmt.where(reports.c.status == status.value)
        stmt = (
            stmt.order_by(reports.c.created_at.desc(), reports.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_backpage_report(row._asdict()) for row in result.fetchall()]

    async def count_by_status(self, status: ReportStatus) -> int:
        """Count reports in a given status."""
        stmt = (
            select(func.count())
            .select_from(reports)
            .where(reports.c.status == status.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create(self, report: BackpageReport) -> BackpageReport:
        """Insert a report.

        Partial unique indexes allow one post report and one report per
        reply for each reporter.
        """
        stmt = insert(reports).values(**backpage_report_to_dict(report))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            target = "Reply" if report.is_reply_report else "Post"
            raise ConflictError(f"{target} already reported by this user") from e
        return report

    async def update_status(
        self,
        report_id: BackpageReportId,
        status: ReportStatus,
        resolved_by: UserId,
        resolved_at: datetime,
    ) -> Optional[BackpageReport]:
        """Record a moderator's decision."""
        stmt = (
            update(reports)
            .where(reports.c.id == report_id)
            .values(
                status=status.value,
                resolved_by=resolved_by,
                resolved_at=resolved_at,
            )
            .returning(reports)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_backpage_report(row._asdict()) if row else None
