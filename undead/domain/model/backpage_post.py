"""BackPage post aggregate root.

BackPage is the weekly community board. Every post expires at the start of
the Monday after it was created and is purged by the cleanup job after that.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from undead.domain.model.common import DomainModel, utc_now
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    PostState,
    Slug,
    UserId,
)


class BackpagePost(DomainModel):
    """BackPage post aggregate root.

    State at an instant:
    - DELETED once deleted_at is set (author or moderator action)
    - EXPIRED once now >= expires_at
    - ACTIVE otherwise
    """

    id: BackpagePostId
    slug: Slug
    author_id: UserId
    category: BackpageCategory
    title: str = Field(min_length=1, max_length=300)
    body: str = Field(min_length=1)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
    removal_reason: Optional[str] = None

    @model_validator(mode="after")
    def validate_expiry(self) -> "BackpagePost":
        """Expiry must come after creation."""
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")
        return self

    @property
    def tally(self) -> int:
        """Signed sum of live votes."""
        return self.upvotes - self.downvotes

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def state(self, now: datetime) -> PostState:
        """Lifecycle state at ``now``."""
        if self.deleted_at is not None:
            return PostState.DELETED
        if self.is_expired(now):
            return PostState.EXPIRED
        return PostState.ACTIVE
