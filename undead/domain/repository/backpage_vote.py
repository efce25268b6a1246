"""BackPage vote repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from undead.domain.model.backpage_vote import BackpageVote
from undead.domain.value import BackpagePostId, BackpageVoteId, UserId, VoteDirection


class BackpageVoteRepository(ABC):
    """Repository for BackpageVote entity."""

    @abstractmethod
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: BackpagePostId
    ) -> Optional[BackpageVote]:
        """Find a user's vote on a post.

        Args:
            user_id: The voter's ID
            post_id: The post ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, vote: BackpageVote) -> BackpageVote:
        """Insert a vote.

        Args:
            vote: The vote to insert

        Returns:
            The inserted vote

        Raises:
            ConflictError: If the user already has a vote on this post
        """
        pass

    @abstractmethod
    async def update_value(
        self,
        vote_id: BackpageVoteId,
        expected: VoteDirection,
        value: VoteDirection,
        updated_at: datetime,
    ) -> Optional[BackpageVote]:
        """Change a vote's direction if it still holds ``expected``.

        Args:
            vote_id: The vote ID
            expected: Direction the caller read before deciding to switch
            value: New direction
            updated_at: Update timestamp

        Returns:
            Updated vote, or None if it no longer exists or was changed
            by someone else in the meantime
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: BackpageVoteId, expected: VoteDirection) -> bool:
        """Delete a vote if it still holds ``expected``.

        Args:
            vote_id: The vote ID
            expected: Direction the caller read before deciding to withdraw

        Returns:
            True if a vote was deleted, False if it was already gone or changed
        """
        pass
