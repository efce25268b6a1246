"""In-memory BackPage reply repository for testing."""

from datetime import datetime
from typing import List, Optional

from undead.domain.model.backpage_reply import BackpageReply
from undead.domain.repository.backpage_reply import BackpageReplyRepository
from undead.domain.value import BackpagePostId, BackpageReplyId, UserId


class InMemoryBackpageReplyRepository(BackpageReplyRepository):
    """In-memory implementation of BackpageReplyRepository for testing."""

    def __init__(self) -> None:
        self._replies: dict[BackpageReplyId, BackpageReply] = {}

    async def find_by_id(self, reply_id: BackpageReplyId) -> Optional[BackpageReply]:
        """Find a reply by ID."""
        return self._replies.get(reply_id)

    async def find_by_post(
        self, post_id: BackpagePostId, include_deleted: bool = False
    ) -> List[BackpageReply]:
        """Find replies to a post, oldest first."""
        replies = [
            r
            for r in self._replies.values()
            if r.post_id == post_id and (include_deleted or r.deleted_at is None)
        ]
        return sorted(replies, key=lambda r: r.created_at)

    async def save(self, reply: BackpageReply) -> BackpageReply:
        """Insert a reply."""
        self._replies[reply.id] = reply
        return reply

    async def soft_delete(
        self,
        reply_id: BackpageReplyId,
        deleted_by: UserId,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> Optional[BackpageReply]:
        """Mark a reply deleted unless it already is."""
        reply = self._replies.get(reply_id)
        if reply is None or reply.deleted_at is not None:
            return None
        updated = reply.model_copy(
            update={
                "deleted_at": deleted_at,
                "deleted_by": deleted_by,
                "removal_reason": reason,
            }
        )
        self._replies[reply_id] = updated
        return updated
