"""Delete BackPage post use case."""

from datetime import datetime

from pydantic import BaseModel

from undead.domain.service import BackpageService
from undead.domain.value import Principal

from ..base import BaseUseCase


class DeletePostRequest(BaseModel):
    """Delete post request."""

    principal: Principal
    slug: str
    now: datetime | None = None


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted_at: datetime


class DeletePostUseCase(BaseUseCase):
    """Use case for an author (or admin) taking down a post."""

    def __init__(self, backpage_service: BackpageService) -> None:
        """Initialize delete post use case.

        Args:
            backpage_service: BackPage domain service
        """
        self.backpage_service = backpage_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post doesn't exist or is already deleted
            NotAuthorizedError: If the caller isn't the author or an admin
        """
        post = await self.backpage_service.delete_post(
            request.principal, request.slug, now=request.now
        )
        return DeletePostResponse(post_id=str(post.id), deleted_at=post.deleted_at)
