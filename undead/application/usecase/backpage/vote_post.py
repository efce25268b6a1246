"""Vote on BackPage post use case."""

from datetime import datetime

from pydantic import BaseModel

from undead.domain.service import BackpageVoteService
from undead.domain.value import Principal, VoteAction

from ..base import BaseUseCase


class VotePostRequest(BaseModel):
    """Vote request."""

    principal: Principal
    slug: str
    value: int  # 1 or -1
    now: datetime | None = None


class VotePostResponse(BaseModel):
    """Vote response with the post's new counters."""

    action: VoteAction
    upvotes: int
    downvotes: int
    tally: int
    user_vote: int


class VotePostUseCase(BaseUseCase):
    """Use case for voting on a post (toggle semantics)."""

    def __init__(self, vote_service: BackpageVoteService) -> None:
        """Initialize vote use case.

        Args:
            vote_service: BackPage vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: VotePostRequest) -> VotePostResponse:
        """Execute vote flow.

        Raises:
            ValidationError: If value isn't 1 or -1
            NotFoundError: If the post doesn't exist or was deleted
            ExpiredError: If the post has expired
            ConflictError: If a concurrent request created the same vote
        """
        result = await self.vote_service.vote(
            request.principal, request.slug, request.value, now=request.now
        )
        return VotePostResponse(**result.model_dump())
