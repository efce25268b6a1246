"""BackPage vote entity."""

from datetime import datetime

from pydantic import Field

from undead.domain.model.common import DomainModel, utc_now
from undead.domain.value import BackpagePostId, BackpageVoteId, UserId, VoteDirection


class BackpageVote(DomainModel):
    """One user's directional vote on a BackPage post.

    Business rules:
    - One vote per user per post (enforced by database unique constraint)
    - Re-voting updates the stored value instead of adding a row
    """

    id: BackpageVoteId
    post_id: BackpagePostId
    user_id: UserId
    value: VoteDirection
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
