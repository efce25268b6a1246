"""Get BackPage post use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel

from undead.domain.model.common import as_utc
from undead.domain.service import (
    BackpageReplyService,
    BackpageService,
    BackpageVoteService,
)
from undead.domain.value import Principal

from ..base import BaseUseCase
from .common import BackpagePostItem, BackpageReplyItem


class GetPostRequest(BaseModel):
    """Get post request."""

    slug: str
    principal: Optional[Principal] = None  # Set when authenticated
    now: datetime | None = None


class GetPostResponse(BaseModel):
    """Post with its live replies and the caller's vote."""

    post: BackpagePostItem
    replies: list[BackpageReplyItem]
    user_vote: int  # 1, -1, or 0 when none


class GetPostUseCase(BaseUseCase):
    """Use case for reading a single live post."""

    def __init__(
        self,
        backpage_service: BackpageService,
        reply_service: BackpageReplyService,
        vote_service: BackpageVoteService,
    ) -> None:
        """Initialize get post use case.

        Args:
            backpage_service: BackPage domain service
            reply_service: BackPage reply domain service
            vote_service: BackPage vote domain service
        """
        self.backpage_service = backpage_service
        self.reply_service = reply_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist or was deleted
            ExpiredError: If the post has expired
        """
        now = as_utc(request.now)
        with logfire.span("get_post.execute", slug=request.slug):
            post = await self.backpage_service.get_live_post(request.slug, now)
            replies = await self.reply_service.list_replies(post.id)
            user_vote = await self.vote_service.get_user_vote(
                request.principal.user_id if request.principal else None, post.id
            )

            return GetPostResponse(
                post=BackpagePostItem.from_post(post),
                replies=[BackpageReplyItem.from_reply(r) for r in replies],
                user_vote=user_vote,
            )
