"""Delete BackPage reply use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from undead.domain.service import BackpageReplyService
from undead.domain.value import BackpageReplyId, Principal

from ..base import BaseUseCase


class DeleteReplyRequest(BaseModel):
    """Delete reply request."""

    principal: Principal
    slug: str
    reply_id: str  # UUID string
    now: datetime | None = None


class DeleteReplyResponse(BaseModel):
    """Delete reply response."""

    reply_id: str
    deleted_at: datetime


class DeleteReplyUseCase(BaseUseCase):
    """Use case for an author (or admin) removing a reply."""

    def __init__(self, reply_service: BackpageReplyService) -> None:
        """Initialize delete reply use case.

        Args:
            reply_service: BackPage reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: DeleteReplyRequest) -> DeleteReplyResponse:
        """Execute delete reply flow.

        Raises:
            NotFoundError: If the post or reply doesn't exist
            NotAuthorizedError: If the caller isn't the author or an admin
        """
        reply = await self.reply_service.delete_reply(
            request.principal,
            request.slug,
            BackpageReplyId(UUID(request.reply_id)),
            now=request.now,
        )
        return DeleteReplyResponse(reply_id=str(reply.id), deleted_at=reply.deleted_at)
