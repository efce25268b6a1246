"""BackPage reply repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from undead.domain.model.backpage_reply import BackpageReply
from undead.domain.value import BackpagePostId, BackpageReplyId, UserId


class BackpageReplyRepository(ABC):
    """Repository for BackpageReply entity."""

    @abstractmethod
    async def find_by_id(self, reply_id: BackpageReplyId) -> Optional[BackpageReply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self, post_id: BackpagePostId, include_deleted: bool = False
    ) -> List[BackpageReply]:
        """Find replies to a post, oldest first.

        Args:
            post_id: The post ID
            include_deleted: Whether to include soft-deleted replies

        Returns:
            List of replies
        """
        pass

    @abstractmethod
    async def save(self, reply: BackpageReply) -> BackpageReply:
        """Insert a reply.

        Args:
            reply: The reply to save

        Returns:
            The saved reply
        """
        pass

    @abstractmethod
    async def soft_delete(
        self,
        reply_id: BackpageReplyId,
        deleted_by: UserId,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> Optional[BackpageReply]:
        """Mark a reply deleted.

        Args:
            reply_id: The reply ID
            deleted_by: Who deleted it
            deleted_at: Deletion timestamp
            reason: Moderator's removal reason, if any

        Returns:
            Updated reply, or None if missing or already deleted
        """
        pass
