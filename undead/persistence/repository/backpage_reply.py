"""PostgreSQL implementation of BackPage reply repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from undead.domain.model import BackpageReply
from undead.domain.repository import BackpageReplyRepository
from undead.domain.value import BackpagePostId, BackpageReplyId, UserId
from undead.persistence.mappers import backpage_reply_to_dict, row_to_backpage_reply
from undead.persistence.tables import backpage_replies_table

replies = backpage_replies_table


class PostgresBackpageReplyRepository(BackpageReplyRepository):
    """PostgreSQL implementation of BackpageReplyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, reply_id: BackpageReplyId) -> Optional[BackpageReply]:
        """Find a reply by ID."""
        stmt = select(replies).where(replies.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_backpage_reply(row._asdict()) if row else None

    async def find_by_post(
        self, post_id: BackpagePostId, include_deleted: bool = False
    ) -> List[BackpageReply]:
        """Find replies to a post, oldest first."""
        stmt = select(replies).where(replies.c.post_id == post_id)
        if not include_deleted:
            stmt = stmt.where(replies.c.deleted_at.is_(None))
        stmt = stmt.order_by(replies.c.created_at.asc(), replies.c.id)
        result = await self.session.execute(stmt)
        return [row_to_backpage_reply(row._asdict()) for row in result.fetchall()]

    async def save(self, reply: BackpageReply) -> BackpageReply:
        """Insert a reply."""
        stmt = insert(replies).values(**backpage_reply_to_dict(reply))
        await self.session.execute(stmt)
        await self.session.flush()
        return reply

    async def soft_delete(
        self,
        reply_id: BackpageReplyId,
        deleted_by: UserId,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> Optional[BackpageReply]:
        """Mark a reply deleted unless it already is."""
        stmt = (
            update(replies)
            .where(replies.c.id == reply_id)
            .where(replies.c.deleted_at.is_(None))
            .values(
                deleted_at=deleted_at,
                deleted_by=deleted_by,
                removal_reason=reason,
            )
            .returning(replies)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_backpage_reply(row._asdict()) if row else None
