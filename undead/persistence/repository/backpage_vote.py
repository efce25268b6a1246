"""PostgreSQL implementation of BackPage vote repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from undead.domain.error import ConflictError
from undead.domain.model import BackpageVote
from undead.domain.repository import BackpageVoteRepository
from undead.domain.value import BackpagePostId, BackpageVoteId, UserId, VoteDirection
from undead.persistence.mappers import backpage_vote_to_dict, row_to_backpage_vote
from undead.persistence.tables import backpage_votes_table

votes = backpage_votes_table


class PostgresBackpageVoteRepository(BackpageVoteRepository):
    """PostgreSQL implementation of BackpageVoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: BackpagePostId
    ) -> Optional[BackpageVote]:
        """Find a user's vote on a post."""
        stmt = select(votes).where(
            and_(votes.c.user_id == user_id, votes.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_backpage_vote(row._asdict()) if row else None

    async def create(self, vote: BackpageVote) -> BackpageVote:
        """Insert a vote; the (post_id, user_id) constraint rejects duplicates."""
        stmt = insert(votes).values(**backpage_vote_to_dict(vote))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError("Vote already exists for this post") from e
        return vote

    async def update_value(
        self,
        vote_id: BackpageVoteId,
        expected: VoteDirection,
        value: VoteDirection,
        updated_at: datetime,
    ) -> Optional[BackpageVote]:
        """Change a vote's direction, guarded on the value the caller read.

        Under READ COMMITTED a concurrent writer's change is re-checked
        against the WHERE clause once it commits, so a stale switch matches
        no row.
        """
        stmt = (
            update(votes)
            .where(votes.c.id == vote_id)
            .where(votes.c.value == expected.value)
            .values(value=value.value, updated_at=updated_at)
            .returning(votes)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_backpage_vote(row._asdict()) if row else None

    async def delete(self, vote_id: BackpageVoteId, expected: VoteDirection) -> bool:
        """Delete a vote, guarded on the value the caller read."""
        stmt = (
            delete(votes)
            .where(votes.c.id == vote_id)
            .where(votes.c.value == expected.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
