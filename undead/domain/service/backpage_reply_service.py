"""BackPage reply domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from undead.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from undead.domain.model.backpage_reply import BackpageReply
from undead.domain.model.common import as_utc
from undead.domain.repository import BackpagePostRepository, BackpageReplyRepository
from undead.domain.value import BackpagePostId, BackpageReplyId, Principal

from .backpage_service import BackpageService
from .base import Service


class BackpageReplyService(Service):
    """Domain service for replies on BackPage posts."""

    def __init__(
        self,
        reply_repository: BackpageReplyRepository,
        post_repository: BackpagePostRepository,
        backpage_service: BackpageService,
    ) -> None:
        """Initialize reply service.

        Args:
            reply_repository: BackPage reply repository
            post_repository: BackPage post repository (reply counters)
            backpage_service: BackPage post service
        """
        self.reply_repository = reply_repository
        self.post_repository = post_repository
        self.backpage_service = backpage_service

    async def create_reply(
        self,
        principal: Principal,
        slug: str,
        body: str,
        now: datetime | None = None,
    ) -> BackpageReply:
        """Reply to a live post.

        Args:
            principal: Authenticated author
            slug: Parent post slug
            body: Reply text
            now: Reply instant (defaults to current time)

        Returns:
            Created reply

        Raises:
            NotFoundError: If the post doesn't exist or was deleted
            ExpiredError: If the post has expired
            ValidationError: If the body length is out of range
        """
        now = as_utc(now)
        limits = self.backpage_service.limits

        with logfire.span(
            "backpage_reply_service.create_reply",
            slug=slug,
            author_id=str(principal.user_id),
        ):
            post = await self.backpage_service.get_live_post(slug, now)
            body = self.backpage_service.validate_length(
                "Reply", body, limits.reply_min, limits.reply_max
            )

            reply = BackpageReply(
                id=BackpageReplyId(uuid4()),
                post_id=post.id,
                author_id=principal.user_id,
                body=body,
                created_at=now,
            )
            saved = await self.reply_repository.save(reply)
            await self.post_repository.adjust_reply_count(post.id, 1)

            logfire.info(
                "BackPage reply created",
                reply_id=str(saved.id),
                post_id=str(post.id),
            )
            return saved

    async def list_replies(self, post_id: BackpagePostId) -> list[BackpageReply]:
        """Live replies to a post, oldest first."""
        return await self.reply_repository.find_by_post(post_id)

    async def delete_reply(
        self,
        principal: Principal,
        slug: str,
        reply_id: BackpageReplyId,
        now: datetime | None = None,
    ) -> BackpageReply:
        """Soft delete a reply. Only its author or an admin may do this.

        Raises:
            NotFoundError: If the post or reply doesn't exist, or the reply
                belongs to another post or is already deleted
            NotAuthorizedError: If the principal isn't the author or an admin
        """
        now = as_utc(now)
        with logfire.span(
            "backpage_reply_service.delete_reply",
            slug=slug,
            reply_id=str(reply_id),
            user_id=str(principal.user_id),
        ):
            post = await self.backpage_service.get_post_by_slug(slug)
            if post is None:
                raise NotFoundError("BackPage post", slug)

            reply = await self.reply_repository.find_by_id(reply_id)
            if reply is None or reply.post_id != post.id or reply.deleted_at:
                raise NotFoundError("BackPage reply", str(reply_id))

            if not principal.can_moderate(reply.author_id):
                raise NotAuthorizedError(
                    "BackPage reply", str(reply_id), str(principal.user_id)
                )

            deleted = await self.reply_repository.soft_delete(
                reply_id, deleted_by=principal.user_id, deleted_at=now
            )
            if deleted is None:
                raise NotFoundError("BackPage reply", str(reply_id))

            await self.post_repository.adjust_reply_count(post.id, -1)
            logfire.info(
                "BackPage reply deleted", reply_id=str(reply_id), post_id=str(post.id)
            )
            return deleted

    async def remove_reply(
        self,
        moderator: Principal,
        reply_id: BackpageReplyId,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> BackpageReply:
        """Moderator removal of a reply, recording the reason.

        Raises:
            NotFoundError: If the reply doesn't exist
            ValidationError: If the reply is already removed
        """
        now = as_utc(now)
        with logfire.span(
            "backpage_reply_service.remove_reply",
            reply_id=str(reply_id),
            moderator_id=str(moderator.user_id),
        ):
            reply = await self.reply_repository.find_by_id(reply_id)
            if reply is None:
                raise NotFoundError("BackPage reply", str(reply_id))
            if reply.deleted_at is not None:
                raise ValidationError("Reply is already removed")

            removed = await self.reply_repository.soft_delete(
                reply_id,
                deleted_by=moderator.user_id,
                deleted_at=now,
                reason=reason or "Removed by admin",
            )
            if removed is None:
                raise ValidationError("Reply is already removed")

            await self.post_repository.adjust_reply_count(reply.post_id, -1)
            logfire.info(
                "BackPage reply removed by moderator",
                reply_id=str(reply_id),
                post_id=str(reply.post_id),
                author_id=str(reply.author_id),
                reason=removed.removal_reason,
            )
            return removed
