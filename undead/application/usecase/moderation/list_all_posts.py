"""Admin listing of BackPage posts in every state."""

import math
from datetime import datetime

from pydantic import BaseModel, Field

from undead.application.usecase.backpage.common import BackpagePostItem
from undead.domain.model import BackpagePost
from undead.domain.model.common import as_utc
from undead.domain.service import BackpageReportService, BackpageService
from undead.domain.value import BackpageCategory, PostState, Principal

from ..base import BaseUseCase
from .common import require_admin


class ModerationPostItem(BackpagePostItem):
    """A post with its lifecycle and removal details."""

    state: str
    deleted_at: datetime | None
    deleted_by: str | None
    removal_reason: str | None

    @classmethod
    def from_post_at(cls, post: BackpagePost, now: datetime) -> "ModerationPostItem":
        return cls(
            **BackpagePostItem.from_post(post).model_dump(),
            state=post.state(now).value,
            deleted_at=post.deleted_at,
            deleted_by=str(post.deleted_by) if post.deleted_by else None,
            removal_reason=post.removal_reason,
        )


class ListAllPostsRequest(BaseModel):
    """Admin post listing request. "all" (or None) disables a filter."""

    principal: Principal
    state: str | None = None  # ACTIVE, EXPIRED, DELETED
    category: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=100)
    now: datetime | None = None


class ListAllPostsResponse(BaseModel):
    """One page of posts plus board-wide moderation counters."""

    posts: list[ModerationPostItem]
    total: int
    page: int
    per_page: int
    total_pages: int
    active_count: int
    pending_reports_count: int


class ListAllPostsUseCase(BaseUseCase):
    """Use case for admins browsing every post, removed and expired included."""

    def __init__(
        self,
        backpage_service: BackpageService,
        report_service: BackpageReportService,
    ) -> None:
        """Initialize admin post listing use case.

        Args:
            backpage_service: BackPage domain service
            report_service: BackPage report domain service
        """
        self.backpage_service = backpage_service
        self.report_service = report_service

    async def execute(self, request: ListAllPostsRequest) -> ListAllPostsResponse:
        """Execute admin post listing flow.

        Raises:
            NotAuthorizedError: If the caller isn't an admin
            ValidationError: If the state or category filter is unknown
        """
        require_admin(request.principal, "BackPage posts", "*")
        now = as_utc(request.now)

        state: PostState | None = None
        if request.state and request.state != "all":
            state = self.backpage_service.validate_state(request.state)
        category: BackpageCategory | None = None
        if request.category and request.category != "all":
            category = self.backpage_service.validate_category(request.category)

        posts, total, active = await self.backpage_service.list_for_moderation(
            state=state,
            category=category,
            page=request.page,
            per_page=request.limit,
            now=now,
        )
        pending = await self.report_service.count_pending()

        return ListAllPostsResponse(
            posts=[ModerationPostItem.from_post_at(p, now) for p in posts],
            total=total,
            page=request.page,
            per_page=request.limit,
            total_pages=math.ceil(total / request.limit),
            active_count=active,
            pending_reports_count=pending,
        )
