"""List BackPage posts use case."""

import math
from datetime import datetime

from pydantic import BaseModel, Field

from undead.domain.service import BackpageService
from undead.domain.value import BackpageCategory

from ..base import BaseUseCase
from .common import BackpagePostItem


class ListPostsRequest(BaseModel):
    """List posts request."""

    category: str | None = None  # Filter by category name
    page: int = Field(default=1, ge=1)
    now: datetime | None = None


class ListPostsResponse(BaseModel):
    """One page of live posts, newest first."""

    posts: list[BackpagePostItem]
    total: int
    page: int
    per_page: int
    total_pages: int


class ListPostsUseCase(BaseUseCase):
    """Use case for browsing the current week's board."""

    def __init__(self, backpage_service: BackpageService) -> None:
        """Initialize list posts use case.

        Args:
            backpage_service: BackPage domain service
        """
        self.backpage_service = backpage_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Raises:
            ValidationError: If the category filter isn't a known category
        """
        category: BackpageCategory | None = None
        if request.category:
            category = self.backpage_service.validate_category(request.category)

        posts, total = await self.backpage_service.list_active(
            category=category, page=request.page, now=request.now
        )
        per_page = self.backpage_service.limits.posts_per_page

        return ListPostsResponse(
            posts=[BackpagePostItem.from_post(p) for p in posts],
            total=total,
            page=request.page,
            per_page=per_page,
            total_pages=math.ceil(total / per_page),
        )
