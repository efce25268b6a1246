"""In-memory BackPage post repository for testing."""

from datetime import datetime
from typing import List, Optional

from undead.domain.error import ConflictError
from undead.domain.model.backpage_post import BackpagePost
from undead.domain.repository.backpage_post import BackpagePostRepository
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    PostState,
    Slug,
    UserId,
)


class InMemoryBackpagePostRepository(BackpagePostRepository):
    """In-memory implementation of BackpagePostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[BackpagePostId, BackpagePost] = {}

    def _active(
        self, now: datetime, category: Optional[BackpageCategory]
    ) -> List[BackpagePost]:
        posts = [
            p
            for p in self._posts.values()
            if p.deleted_at is None
            and p.expires_at > now
            and (category is None or p.category == category)
        ]
        return sorted(posts, key=lambda p: p.created_at, reverse=True)

    async def find_by_id(self, post_id: BackpagePostId) -> Optional[BackpagePost]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_slug(self, slug: Slug) -> Optional[BackpagePost]:
        """Find a post by slug."""
        for post in self._posts.values():
            if post.slug == slug:
                return post
        return None

    async def find_active(
        self,
        now: datetime,
        category: Optional[BackpageCategory] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[BackpagePost]:
        """Find live posts, newest first."""
        return self._active(now, category)[offset : offset + limit]

    async def count_active(
        self, now: datetime, category: Optional[BackpageCategory] = None
    ) -> int:
        """Count live posts."""
        return len(self._active(now, category))

    def _moderation(
        self,
        now: datetime,
        state: Optional[PostState],
        category: Optional[BackpageCategory],
    ) -> List[BackpagePost]:
        posts = [
            p
            for p in self._posts.values()
            if (state is None or p.state(now) == state)
            and (category is None or p.category == category)
        ]
        return sorted(posts, key=lambda p: p.created_at, reverse=True)

    async def find_for_moderation(
        self,
        now: datetime,
        state: Optional[PostState] = None,
        category: Optional[BackpageCategory] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackpagePost]:
        """Find posts in any state, newest first."""
        return self._moderation(now, state, category)[offset : offset + limit]

    async def count_for_moderation(
        self,
        now: datetime,
        state: Optional[PostState] = None,
        category: Optional[BackpageCategory] = None,
    ) -> int:
        """Count posts matching the admin listing filters."""
        return len(self._moderation(now, state, category))

    async def count_by_author_since(self, author_id: UserId, since: datetime) -> int:
        """Count an author's posts created after ``since``."""
        return sum(
            1
            for p in self._posts.values()
            if p.author_id == author_id and p.created_at > since
        )

    async def create(self, post: BackpagePost) -> BackpagePost:
        """Insert a post.

        Raises:
            ConflictError: If the id or slug is taken
        """
        if post.id in self._posts or await self.find_by_slug(post.slug):
            raise ConflictError(f"Slug already taken: {post.slug}")
        self._posts[post.id] = post
        return post

    async def soft_delete(
        self,
        post_id: BackpagePostId,
        deleted_by: UserId,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> Optional[BackpagePost]:
        """Mark a post deleted unless it already is."""
        post = self._posts.get(post_id)
        if post is None or post.deleted_at is not None:
            return None
        updated = post.model_copy(
            update={
                "deleted_at": deleted_at,
                "deleted_by": deleted_by,
                "removal_reason": reason,
            }
        )
        self._posts[post_id] = updated
        return updated

    async def adjust_votes(
        self, post_id: BackpagePostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[BackpagePost]:
        """Apply vote counter deltas, clamped at zero."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(
            update={
                "upvotes": max(0, post.upvotes + upvotes_delta),
                "downvotes": max(0, post.downvotes + downvotes_delta),
            }
        )
        self._posts[post_id] = updated
        return updated

    async def adjust_reply_count(self, post_id: BackpagePostId, delta: int) -> None:
        """Apply a reply counter delta, clamped at zero."""
        post = self._posts.get(post_id)
        if post is not None:
            self._posts[post_id] = post.model_copy(
                update={"reply_count": max(0, post.reply_count + delta)}
            )

    async def find_expired_ids(self, now: datetime) -> List[BackpagePostId]:
        """IDs of posts with expires_at <= now."""
        return [p.id for p in self._posts.values() if p.expires_at <= now]

    async def delete(self, post_id: BackpagePostId) -> bool:
        """Hard delete a post."""
        return self._posts.pop(post_id, None) is not None
