"""BackPage post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from undead.domain.model.backpage_post import BackpagePost
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    PostState,
    Slug,
    UserId,
)


class BackpagePostRepository(ABC):
    """Repository for BackpagePost aggregate."""

    @abstractmethod
    async def find_by_id(self, post_id: BackpagePostId) -> Optional[BackpagePost]:
        """Find a post by ID, including deleted and expired posts.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[BackpagePost]:
        """Find a post by slug, including deleted and expired posts.

        Args:
            slug: The post's slug

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(
        self,
        now: datetime,
        category: Optional[BackpageCategory] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[BackpagePost]:
        """Find live posts (not deleted, not expired at ``now``), newest first.

        Args:
            now: Reference instant for expiry
            category: Filter by category (None for all)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of live posts
        """
        pass

    @abstractmethod
    async def count_active(
        self, now: datetime, category: Optional[BackpageCategory] = None
    ) -> int:
        """Count live posts at ``now``.

        Args:
            now: Reference instant for expiry
            category: Filter by category (None for all)

        Returns:
            Number of live posts
        """
        pass

    @abstractmethod
    async def find_for_moderation(
        self,
        now: datetime,
        state: Optional[PostState] = None,
        category: Optional[BackpageCategory] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackpagePost]:
        """Find posts in any state, newest first, for the admin listing.

        Args:
            now: Reference instant for expiry
            state: Filter by state at ``now`` (None for all)
            category: Filter by category (None for all)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def count_for_moderation(
        self,
        now: datetime,
        state: Optional[PostState] = None,
        category: Optional[BackpageCategory] = None,
    ) -> int:
        """Count posts matching the admin listing filters.

        Args:
            now: Reference instant for expiry
            state: Filter by state at ``now`` (None for all)
            category: Filter by category (None for all)

        Returns:
            Number of matching posts
        """
        pass

    @abstractmethod
    async def count_by_author_since(self, author_id: UserId, since: datetime) -> int:
        """Count posts an author created after ``since`` (deleted ones included).

        Args:
            author_id: The author's user ID
            since: Start of the rolling window

        Returns:
            Number of posts in the window
        """
        pass

    @abstractmethod
    async def create(self, post: BackpagePost) -> BackpagePost:
        """Insert a new post.

        Args:
            post: The post to insert

        Returns:
            The inserted post

        Raises:
            ConflictError: If the slug is already taken
        """
        pass

    @abstractmethod
    async def soft_delete(
        self,
        post_id: BackpagePostId,
        deleted_by: UserId,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> Optional[BackpagePost]:
        """Mark a post deleted.

        Args:
            post_id: The post ID
            deleted_by: Who deleted it (author or moderator)
            deleted_at: Deletion timestamp
            reason: Moderator's removal reason, if any

        Returns:
            Updated post, or None if the post doesn't exist or is already deleted
        """
        pass

    @abstractmethod
    async def adjust_votes(
        self, post_id: BackpagePostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[BackpagePost]:
        """Atomically shift the vote counters by the given deltas.

        Args:
            post_id: The post ID
            upvotes_delta: Change to upvotes
            downvotes_delta: Change to downvotes

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def adjust_reply_count(self, post_id: BackpagePostId, delta: int) -> None:
        """Atomically shift the reply counter (never below 0).

        Args:
            post_id: The post ID
            delta: Change to reply_count
        """
        pass

    @abstractmethod
    async def find_expired_ids(self, now: datetime) -> List[BackpagePostId]:
        """IDs of every post whose expiry is at or before ``now``.

        Args:
            now: Reference instant

        Returns:
            List of expired post IDs
        """
        pass

    @abstractmethod
    async def delete(self, post_id: BackpagePostId) -> bool:
        """Hard delete a post. Replies, votes and reports go with it.

        Args:
            post_id: The post ID

        Returns:
            True if a row was deleted, False if it was already gone
        """
        pass
