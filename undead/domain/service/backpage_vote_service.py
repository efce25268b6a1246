"""BackPage vote domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from undead.domain.error import ConflictError, NotFoundError, ValidationError
from undead.domain.model.backpage_post import BackpagePost
from undead.domain.model.backpage_vote import BackpageVote
from undead.domain.model.common import as_utc
from undead.domain.repository import BackpagePostRepository, BackpageVoteRepository
from undead.domain.value import (
    BackpagePostId,
    BackpageVoteId,
    Principal,
    UserId,
    VoteAction,
    VoteDirection,
    VoteResult,
)

from .backpage_service import BackpageService
from .base import Service

# Read-then-write rounds before a vote toggle gives up
_VOTE_ATTEMPTS = 3


def _column_deltas(direction: VoteDirection, step: int) -> tuple[int, int]:
    """(upvotes, downvotes) deltas for adding ``step`` votes of ``direction``."""
    if direction == VoteDirection.UP:
        return step, 0
    return 0, step


class BackpageVoteService(Service):
    """Domain service for voting on BackPage posts.

    Voting toggles: repeating your current vote removes it, voting the other
    way switches it. Counters on the post are adjusted by delta so concurrent
    voters never overwrite each other.
    """

    def __init__(
        self,
        vote_repository: BackpageVoteRepository,
        post_repository: BackpagePostRepository,
        backpage_service: BackpageService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: BackPage vote repository
            post_repository: BackPage post repository (vote counters)
            backpage_service: BackPage post service
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.backpage_service = backpage_service

    def parse_direction(self, value: int) -> VoteDirection:
        """Parse a raw vote value, raising ValidationError unless it's 1 or -1."""
        if isinstance(value, bool):
            raise ValidationError("Invalid vote value. Must be 1 or -1.")
        try:
            return VoteDirection(value)
        except ValueError:
            raise ValidationError("Invalid vote value. Must be 1 or -1.")

    async def vote(
        self,
        principal: Principal,
        slug: str,
        value: int,
        now: datetime | None = None,
    ) -> VoteResult:
        """Cast, switch or withdraw a vote on a live post.

        Args:
            principal: Authenticated voter
            slug: Post slug
            value: 1 for up, -1 for down
            now: Vote instant (defaults to current time)

        Returns:
            What happened and the post's new counters

        Raises:
            ValidationError: If value isn't 1 or -1
            NotFoundError: If the post doesn't exist or was deleted
            ExpiredError: If the post has expired
            ConflictError: If the vote kept changing under concurrent requests
        """
        now = as_utc(now)
        direction = self.parse_direction(value)

        with logfire.span(
            "backpage_vote_service.vote",
            slug=slug,
            user_id=str(principal.user_id),
            value=direction.value,
        ):
            post = await self.backpage_service.get_live_post(slug, now)

            for attempt in range(1, _VOTE_ATTEMPTS + 1):
                applied = await self._apply(principal, post.id, direction, now)
                if applied is not None:
                    break
                logfire.debug(
                    "Vote changed concurrently, re-reading",
                    post_id=str(post.id),
                    user_id=str(principal.user_id),
                    attempt=attempt,
                )
            else:
                raise ConflictError("Vote changed concurrently, please retry")

            action, up, down, user_vote = applied
            updated = await self.post_repository.adjust_votes(post.id, up, down)
            if updated is None:
                raise NotFoundError("BackPage post", slug)

            logfire.info(
                "BackPage vote recorded",
                post_id=str(post.id),
                action=action.value,
                tally=updated.tally,
            )
            return self._result(updated, action, user_vote)

    async def _apply(
        self,
        principal: Principal,
        post_id: BackpagePostId,
        direction: VoteDirection,
        now: datetime,
    ) -> Optional[tuple[VoteAction, int, int, int]]:
        """Read the caller's vote and write the toggle against what was read.

        Returns (action, upvotes delta, downvotes delta, user_vote), or None
        when a concurrent request changed the vote between the read and the
        write. Counter deltas are only derived from a write that took effect.
        """
        existing = await self.vote_repository.find_by_user_and_post(
            principal.user_id, post_id
        )

        if existing is None:
            try:
                await self.vote_repository.create(
                    BackpageVote(
                        id=BackpageVoteId(uuid4()),
                        post_id=post_id,
                        user_id=principal.user_id,
                        value=direction,
                        created_at=now,
                        updated_at=now,
                    )
                )
            except ConflictError:
                return None
            up, down = _column_deltas(direction, 1)
            return VoteAction.CREATED, up, down, direction.value

        if existing.value == direction:
            if not await self.vote_repository.delete(existing.id, existing.value):
                return None
            up, down = _column_deltas(direction, -1)
            return VoteAction.REMOVED, up, down, 0

        switched = await self.vote_repository.update_value(
            existing.id, existing.value, direction, now
        )
        if switched is None:
            return None
        add_up, add_down = _column_deltas(direction, 1)
        drop_up, drop_down = _column_deltas(existing.value, -1)
        return (
            VoteAction.CHANGED,
            add_up + drop_up,
            add_down + drop_down,
            direction.value,
        )

    async def get_user_vote(
        self, user_id: UserId | None, post_id: BackpagePostId
    ) -> int:
        """The user's current vote on a post (0 when none or anonymous)."""
        if user_id is None:
            return 0
        vote = await self.vote_repository.find_by_user_and_post(user_id, post_id)
        return vote.value.value if vote else 0

    def _result(
        self, post: BackpagePost, action: VoteAction, user_vote: int
    ) -> VoteResult:
        return VoteResult(
            action=action,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            tally=post.tally,
            user_vote=user_vote,
        )
