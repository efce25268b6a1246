"""Admin removal of a BackPage reply use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from undead.domain.model.common import as_utc
from undead.domain.service import BackpageReplyService, BackpageReportService
from undead.domain.value import BackpageReplyId, BackpageReportId, Principal

from ..base import BaseUseCase
from .common import require_admin


class RemoveReplyRequest(BaseModel):
    """Remove reply request."""

    principal: Principal
    reply_id: str  # UUID string
    reason: str | None = None
    report_id: str | None = None  # Report being acted on, closed as RESOLVED
    now: datetime | None = None


class RemoveReplyResponse(BaseModel):
    """Remove reply response."""

    reply_id: str
    post_id: str
    removal_reason: str | None
    deleted_at: datetime
    report_id: str | None = None
    report_status: str | None = None


class RemoveReplyUseCase(BaseUseCase):
    """Use case for an admin removing a reply, optionally closing its report."""

    def __init__(
        self,
        reply_service: BackpageReplyService,
        report_service: BackpageReportService,
    ) -> None:
        """Initialize remove reply use case.

        Args:
            reply_service: BackPage reply domain service
            report_service: BackPage report domain service
        """
        self.reply_service = reply_service
        self.report_service = report_service

    async def execute(self, request: RemoveReplyRequest) -> RemoveReplyResponse:
        """Execute remove reply flow.

        Steps:
        1. Require an admin
        2. Soft delete the reply with the moderator's reason
        3. Resolve the report that prompted the removal, if one was given

        Raises:
            NotAuthorizedError: If the caller isn't an admin
            NotFoundError: If the reply or the given report doesn't exist
            ValidationError: If the reply is already removed
        """
        require_admin(request.principal, "BackPage reply", request.reply_id)
        now = as_utc(request.now)

        with logfire.span("remove_reply.execute", reply_id=request.reply_id):
            reply = await self.reply_service.remove_reply(
                request.principal,
                BackpageReplyId(UUID(request.reply_id)),
                reason=request.reason,
                now=now,
            )

            report_status = None
            if request.report_id:
                report = await self.report_service.resolve_report(
                    request.principal,
                    BackpageReportId(UUID(request.report_id)),
                    "RESOLVED",
                    now=now,
                )
                report_status = report.status.value

            return RemoveReplyResponse(
                reply_id=str(reply.id),
                post_id=str(reply.post_id),
                removal_reason=reply.removal_reason,
                deleted_at=reply.deleted_at,
                report_id=request.report_id,
                report_status=report_status,
            )
