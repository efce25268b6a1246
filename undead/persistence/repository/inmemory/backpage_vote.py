"""In-memory BackPage vote repository for testing."""

from datetime import datetime
from typing import Optional

from undead.domain.error import ConflictError
from undead.domain.model.backpage_vote import BackpageVote
from undead.domain.repository.backpage_vote import BackpageVoteRepository
from undead.domain.value import BackpagePostId, BackpageVoteId, UserId, VoteDirection


class InMemoryBackpageVoteRepository(BackpageVoteRepository):
    """In-memory implementation of BackpageVoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[BackpageVoteId, BackpageVote] = {}

    def _find(
        self, user_id: UserId, post_id: BackpagePostId
    ) -> Optional[BackpageVote]:
        for vote in self._votes.values():
            if vote.user_id == user_id and vote.post_id == post_id:
                return vote
        return None

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: BackpagePostId
    ) -> Optional[BackpageVote]:
        """Find a user's vote on a post."""
        return self._find(user_id, post_id)

    async def create(self, vote: BackpageVote) -> BackpageVote:
        """Insert a vote.

        Raises:
            ConflictError: If the user already voted on the post
        """
        if self._find(vote.user_id, vote.post_id):
            raise ConflictError("Vote already exists for this post")
        self._votes[vote.id] = vote
        return vote

    async def update_value(
        self,
        vote_id: BackpageVoteId,
        expected: VoteDirection,
        value: VoteDirection,
        updated_at: datetime,
    ) -> Optional[BackpageVote]:
        """Change a vote's direction if it still holds ``expected``."""
        vote = self._votes.get(vote_id)
        if vote is None or vote.value != expected:
            return None
        updated = vote.model_copy(update={"value": value, "updated_at": updated_at})
        self._votes[vote_id] = updated
        return updated

    async def delete(self, vote_id: BackpageVoteId, expected: VoteDirection) -> bool:
        """Delete a vote if it still holds ``expected``."""
        vote = self._votes.get(vote_id)
        if vote is None or vote.value != expected:
            return False
        del self._votes[vote_id]
        return True

    async def sum_by_post(self, post_id: BackpagePostId) -> int:
        """Signed sum of stored votes on a post."""
        return sum(v.value.value for v in self._votes.values() if v.post_id == post_id)

    async def count_by_post(self, post_id: BackpagePostId) -> int:
        """Number of stored votes on a post."""
        return sum(1 for v in self._votes.values() if v.post_id == post_id)
