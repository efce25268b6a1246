"""Create BackPage post use case."""

from datetime import datetime

from pydantic import BaseModel

from undead.domain.service import BackpageService
from undead.domain.value import Principal

from ..base import BaseUseCase
from .common import BackpagePostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    principal: Principal
    category: str
    title: str
    body: str
    now: datetime | None = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    post: BackpagePostItem


class CreatePostUseCase(BaseUseCase):
    """Use case for publishing a post on the weekly board."""

    def __init__(self, backpage_service: BackpageService) -> None:
        """Initialize create post use case.

        Args:
            backpage_service: BackPage domain service
        """
        self.backpage_service = backpage_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Raises:
            ValidationError: If category or content is invalid
            RateLimitedError: If the author posted within the rate window
            ConflictError: If no unique slug could be generated
        """
        post = await self.backpage_service.create_post(
            request.principal,
            category=request.category,
            title=request.title,
            body=request.body,
            now=request.now,
        )
        return CreatePostResponse(post=BackpagePostItem.from_post(post))
