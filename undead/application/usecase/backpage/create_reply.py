"""Create BackPage reply use case."""

from datetime import datetime

from pydantic import BaseModel

from undead.domain.service import BackpageReplyService
from undead.domain.value import Principal

from ..base import BaseUseCase
from .common import BackpageReplyItem


class CreateReplyRequest(BaseModel):
    """Create reply request."""

    principal: Principal
    slug: str
    body: str
    now: datetime | None = None


class CreateReplyResponse(BaseModel):
    """Create reply response."""

    reply: BackpageReplyItem


class CreateReplyUseCase(BaseUseCase):
    """Use case for replying to a live post."""

    def __init__(self, reply_service: BackpageReplyService) -> None:
        """Initialize create reply use case.

        Args:
            reply_service: BackPage reply domain service
        """
        self.reply_service = reply_service

    async def execute(self, request: CreateReplyRequest) -> CreateReplyResponse:
        """Execute create reply flow.

        Raises:
            NotFoundError: If the post doesn't exist or was deleted
            ExpiredError: If the post has expired
            ValidationError: If the reply length is out of range
        """
        reply = await self.reply_service.create_reply(
            request.principal, request.slug, request.body, now=request.now
        )
        return CreateReplyResponse(reply=BackpageReplyItem.from_reply(reply))
