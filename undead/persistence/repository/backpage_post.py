"""PostgreSQL implementation of BackPage post repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import and_, delete, func, insert, select, true, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from undead.domain.error import ConflictError
from undead.domain.model import BackpagePost
from undead.domain.repository import BackpagePostRepository
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    PostState,
    Slug,
    UserId,
)
from undead.persistence.mappers import backpage_post_to_dict, row_to_backpage_post
from undead.persistence.tables import backpage_posts_table

posts = backpage_posts_table


class PostgresBackpagePostRepository(BackpagePostRepository):
    """PostgreSQL implementation of BackpagePostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _active_filter(self, now: datetime, category: Optional[BackpageCategory]):
        conditions = [posts.c.deleted_at.is_(None), posts.c.expires_at > now]
        if category is not None:
            conditions.append(posts.c.category == category.value)
        return and_(*conditions)

    async def find_by_id(self, post_id: BackpagePostId) -> Optional[BackpagePost]:
        """Find a post by ID."""
        stmt = select(posts).where(posts.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_backpage_post(row._asdict()) if row else None

    async def find_by_slug(self, slug: Slug) -> Optional[BackpagePost]:
        """Find a post by slug."""
        stmt = select(posts).where(posts.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_backpage_post(row._asdict()) if row else None

    async def find_active(
        self,
        now: datetime,
        category: Optional[BackpageCategory] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[BackpagePost]:
        """Find live posts, newest first."""
        stmt = (
            select(posts)
            .where(self._active_filter(now, category))
            .order_by(posts.c.created_at.desc(), posts.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_backpage_post(row._asdict()) for row in result.fetchall()]

    async def count_active(
        self, now: datetime, category: Optional[BackpageCategory] = None
    ) -> int:
        """Count live posts."""
        stmt = (
            select(func.count())
            .select_from(posts)
            .where(self._active_filter(now, category))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    def _moderation_filter(
        self,
        now: datetime,
        state: Optional[PostState],
        category: Optional[BackpageCategory],
    ):
        conditions = []
        if state == PostState.ACTIVE:
            conditions += [posts.c.deleted_at.is_(None), posts.c.expires_at > now]
        elif state == PostState.EXPIRED:
            conditions += [posts.c.deleted_at.is_(None), posts.c.expires_at <= now]
        elif state == PostState.DELETED:
            conditions.append(posts.c.deleted_at.is_not(None))
        if category is not None:
            conditions.append(posts.c.category == category.value)
        return and_(true(), *conditions)

    async def find_for_moderation(
        self,
        now: datetime,
        state: Optional[PostState] = None,
        category: Optional[BackpageCategory] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BackpagePost]:
        """Find posts in any state, newest first."""
        stmt = (
            select(posts)
            .where(self._moderation_filter(now, state, category))
            .order_by(posts.c.created_at.desc(), posts.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_backpage_post(row._asdict()) for row in result.fetchall()]

    async def count_for_moderation(
        self,
        now: datetime,
        state: Optional[PostState] = None,
        category: Optional[BackpageCategory] = None,
    ) -> int:
        """Count posts matching the admin listing filters."""
        stmt = (
            select(func.count())
            .select_from(posts)
            .where(self._moderation_filter(now, state, category))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_by_author_since(self, author_id: UserId, since: datetime) -> int:
        """Count an author's posts created after ``since``, deleted ones included."""
        stmt = (
            select(func.count())
            .select_from(posts)
            .where(posts.c.author_id == author_id)
            .where(posts.c.created_at > since)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create(self, post: BackpagePost) -> BackpagePost:
        """Insert a post inside a savepoint.

        A unique violation (slug or id) rolls back only the savepoint so the
        caller can retry in the same transaction.
        """
        stmt = insert(posts).values(**backpage_post_to_dict(post))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            logfire.debug("BackPage post insert conflict", slug=str(post.slug))
            raise ConflictError(f"Slug already taken: {post.slug}") from e
        return post

    async def soft_delete(
        self,
        post_id: BackpagePostId,
        deleted_by: UserId,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> Optional[BackpagePost]:
        """Mark a post deleted unless it already is."""
        stmt = (
            update(posts)
            .where(posts.c.id == post_id)
            .where(posts.c.deleted_at.is_(None))
            .values(
                deleted_at=deleted_at,
                deleted_by=deleted_by,
                removal_reason=reason,
            )
            .returning(posts)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_backpage_post(row._asdict()) if row else None

    async def adjust_votes(
        self, post_id: BackpagePostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[BackpagePost]:
        """Atomically apply vote counter deltas, clamped at zero."""
        stmt = (
            update(posts)
            .where(posts.c.id == post_id)
            .values(
                upvotes=func.greatest(posts.c.upvotes + upvotes_delta, 0),
                downvotes=func.greatest(posts.c.downvotes + downvotes_delta, 0),
            )
            .returning(posts)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_backpage_post(row._asdict()) if row else None

    async def adjust_reply_count(self, post_id: BackpagePostId, delta: int) -> None:
        """Atomically apply a reply counter delta, clamped at zero."""
        stmt = (
            update(posts)
            .where(posts.c.id == post_id)
            .values(reply_count=func.greatest(posts.c.reply_count + delta, 0))
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_expired_ids(self, now: datetime) -> List[BackpagePostId]:
        """IDs of posts with expires_at <= now, soft-deleted ones included."""
        stmt = select(posts.c.id).where(posts.c.expires_at <= now)
        result = await self.session.execute(stmt)
        return [BackpagePostId(row.id) for row in result.fetchall()]

    async def delete(self, post_id: BackpagePostId) -> bool:
        """Hard delete a post in its own savepoint; children cascade."""
        stmt = delete(posts).where(posts.c.id == post_id)
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]
