"""BackPage reply entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from undead.domain.model.common import DomainModel, utc_now
from undead.domain.value import BackpagePostId, BackpageReplyId, UserId


class BackpageReply(DomainModel):
    """Reply to a BackPage post.

    Replies are flat (shown oldest first). Soft-deleted by the author or a
    moderator; hard-deleted with the parent post.
    """

    id: BackpageReplyId
    post_id: BackpagePostId
    author_id: UserId
    body: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
    removal_reason: Optional[str] = None
