"""Admin removal of a BackPage post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from undead.domain.service import BackpageService
from undead.domain.value import BackpagePostId, Principal

from ..base import BaseUseCase
from .common import require_admin


class RemovePostRequest(BaseModel):
    """Remove post request."""

    principal: Principal
    post_id: str  # UUID string
    reason: str | None = None
    now: datetime | None = None


class RemovePostResponse(BaseModel):
    """Remove post response."""

    post_id: str
    removal_reason: str | None
    deleted_at: datetime


class RemovePostUseCase(BaseUseCase):
    """Use case for an admin removing a post from the board."""

    def __init__(self, backpage_service: BackpageService) -> None:
        """Initialize remove post use case.

        Args:
            backpage_service: BackPage domain service
        """
        self.backpage_service = backpage_service

    async def execute(self, request: RemovePostRequest) -> RemovePostResponse:
        """Execute remove post flow.

        Raises:
            NotAuthorizedError: If the caller isn't an admin
            NotFoundError: If the post doesn't exist
            ValidationError: If the post is already removed
        """
        require_admin(request.principal, "BackPage post", request.post_id)

        post = await self.backpage_service.remove_post(
            request.principal,
            BackpagePostId(UUID(request.post_id)),
            reason=request.reason,
            now=request.now,
        )
        return RemovePostResponse(
            post_id=str(post.id),
            removal_reason=post.removal_reason,
            deleted_at=post.deleted_at,
        )
