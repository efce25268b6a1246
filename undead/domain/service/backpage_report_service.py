"""BackPage report domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from undead.domain.error import ConflictError, NotFoundError, ValidationError
from undead.domain.model.backpage_report import BackpageReport
from undead.domain.model.common import as_utc
from undead.domain.repository import BackpageReplyRepository, BackpageReportRepository
from undead.domain.value import (
    BackpageReplyId,
    BackpageReportId,
    Principal,
    ReportReason,
    ReportStatus,
)

from .backpage_service import BackpageService
from .base import Service


class BackpageReportService(Service):
    """Domain service for user reports and the moderation queue."""

    def __init__(
        self,
        report_repository: BackpageReportRepository,
        reply_repository: BackpageReplyRepository,
        backpage_service: BackpageService,
    ) -> None:
        """Initialize report service.

        Args:
            report_repository: BackPage report repository
            reply_repository: BackPage reply repository (reply reports)
            backpage_service: BackPage post service
        """
        self.report_repository = report_repository
        self.reply_repository = reply_repository
        self.backpage_service = backpage_service

    async def report_post(
        self,
        principal: Principal,
        slug: str,
        reason: str,
        details: str | None = None,
        now: datetime | None = None,
    ) -> BackpageReport:
        """File a report against a post.

        Expired posts can still be reported until they are purged.

        Args:
            principal: Authenticated reporter
            slug: Post slug
            reason: Report reason name
            details: Optional free text
            now: Report instant (defaults to current time)

        Returns:
            Created report

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If the post was removed, belongs to the
                reporter, or the reason/details are invalid
            ConflictError: If the reporter already reported this post
        """
        now = as_utc(now)
        with logfire.span(
            "backpage_report_service.report_post",
            slug=slug,
            reporter_id=str(principal.user_id),
        ):
            post = await self.backpage_service.get_post_by_slug(slug)
            if post is None:
                raise NotFoundError("BackPage post", slug)
            if post.deleted_at is not None:
                raise ValidationError("This post has been removed")
            if post.author_id == principal.user_id:
                raise ValidationError("You cannot report your own post")

            report = BackpageReport(
                id=BackpageReportId(uuid4()),
                post_id=post.id,
                reporter_id=principal.user_id,
                reason=self._parse_reason(reason),
                details=self._clean_details(details),
                created_at=now,
            )
            try:
                saved = await self.report_repository.create(report)
            except ConflictError:
                logfire.warn(
                    "Duplicate report attempt",
                    post_id=str(post.id),
                    reporter_id=str(principal.user_id),
                )
                raise ConflictError("You have already reported this post")

            logfire.info(
                "BackPage post reported",
                report_id=str(saved.id),
                post_id=str(post.id),
                reason=saved.reason.value,
            )
            return saved

    async def report_reply(
        self,
        principal: Principal,
        slug: str,
        reply_id: BackpageReplyId,
        reason: str,
        details: str | None = None,
        now: datetime | None = None,
    ) -> BackpageReport:
        """File a report against a reply.

        Args:
            principal: Authenticated reporter
            slug: Slug of the reply's post
            reply_id: Reply ID
            reason: Report reason name
            details: Optional free text
            now: Report instant (defaults to current time)

        Returns:
            Created report, targeting the reply

        Raises:
            NotFoundError: If the post or reply doesn't exist, or the reply
                belongs to another post
            ValidationError: If the reply was removed, belongs to the
                reporter, or the reason/details are invalid
            ConflictError: If the reporter already reported this reply
        """
        now = as_utc(now)
        with logfire.span(
            "backpage_report_service.report_reply",
            slug=slug,
            reply_id=str(reply_id),
            reporter_id=str(principal.user_id),
        ):
            post = await self.backpage_service.get_post_by_slug(slug)
            if post is None:
                raise NotFoundError("BackPage post", slug)

            reply = await self.reply_repository.find_by_id(reply_id)
            if reply is None or reply.post_id != post.id:
                raise NotFoundError("BackPage reply", str(reply_id))
            if reply.deleted_at is not None:
                raise ValidationError("This reply has been removed")
            if reply.author_id == principal.user_id:
                raise ValidationError("You cannot report your own reply")

            report = BackpageReport(
                id=BackpageReportId(uuid4()),
                post_id=post.id,
                reply_id=reply.id,
                reporter_id=principal.user_id,
                reason=self._parse_reason(reason),
                details=self._clean_details(details),
                created_at=now,
            )
            try:
                saved = await self.report_repository.create(report)
            except ConflictError:
                logfire.warn(
                    "Duplicate reply report attempt",
                    reply_id=str(reply.id),
                    reporter_id=str(principal.user_id),
                )
                raise ConflictError("You have already reported this reply")

            logfire.info(
                "BackPage reply reported",
                report_id=str(saved.id),
                reply_id=str(reply.id),
                post_id=str(post.id),
                reason=saved.reason.value,
            )
            return saved

    async def list_reports(
        self, status: str | None = None, limit: int = 50, offset: int = 0
    ) -> list[BackpageReport]:
        """Reports in the moderation queue, newest first.

        Raises:
            ValidationError: If status isn't a known report status
        """
        parsed = self._parse_status(status) if status else None
        return await self.report_repository.find_by_status(
            parsed, limit=limit, offset=offset
        )

    async def count_pending(self) -> int:
        """Number of reports waiting for a moderator."""
        return await self.report_repository.count_by_status(ReportStatus.PENDING)

    async def resolve_report(
        self,
        moderator: Principal,
        report_id: BackpageReportId,
        status: str,
        now: datetime | None = None,
    ) -> BackpageReport:
        """Record a moderator decision on a report.

        Args:
            moderator: Acting admin
            report_id: Report ID
            status: RESOLVED or DISMISSED
            now: Decision instant (defaults to current time)

        Returns:
            Updated report

        Raises:
            ValidationError: If status isn't RESOLVED or DISMISSED
            NotFoundError: If the report doesn't exist
        """
        now = as_utc(now)
        decision = self._parse_status(status)
        if decision == ReportStatus.PENDING:
            raise ValidationError("Status must be RESOLVED or DISMISSED")

        with logfire.span(
            "backpage_report_service.resolve_report",
            report_id=str(report_id),
            moderator_id=str(moderator.user_id),
            status=decision.value,
        ):
            updated = await self.report_repository.update_status(
                report_id,
                decision,
                resolved_by=moderator.user_id,
                resolved_at=now,
            )
            if updated is None:
                raise NotFoundError("BackPage report", str(report_id))

            logfire.info(
                "BackPage report resolved",
                report_id=str(report_id),
                status=decision.value,
            )
            return updated

    def _parse_reason(self, reason: str) -> ReportReason:
        try:
            return ReportReason(reason)
        except ValueError:
            allowed = ", ".join(r.value for r in ReportReason)
            raise ValidationError(f"Reason must be one of: {allowed}")

    def _clean_details(self, details: str | None) -> str | None:
        details = details.strip() if details else None
        max_details = self.backpage_service.limits.report_details_max
        if details and len(details) > max_details:
            raise ValidationError(f"Details must be at most {max_details} characters")
        return details or None

    def _parse_status(self, status: str) -> ReportStatus:
        try:
            return ReportStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in ReportStatus)
            raise ValidationError(f"Status must be one of: {allowed}")
