"""Response items shared by BackPage use cases."""

from datetime import datetime

from pydantic import BaseModel

from undead.domain.model import BackpagePost, BackpageReply


class BackpagePostItem(BaseModel):
    """A post as returned by the API."""

    post_id: str
    slug: str
    author_id: str
    category: str
    category_label: str
    title: str
    body: str
    upvotes: int
    downvotes: int
    tally: int
    reply_count: int
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_post(cls, post: BackpagePost) -> "BackpagePostItem":
        return cls(
            post_id=str(post.id),
            slug=str(post.slug),
            author_id=str(post.author_id),
            category=post.category.value,
            category_label=post.category.label,
            title=post.title,
            body=post.body,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            tally=post.tally,
            reply_count=post.reply_count,
            created_at=post.created_at,
            expires_at=post.expires_at,
        )


class BackpageReplyItem(BaseModel):
    """A reply as returned by the API."""

    reply_id: str
    post_id: str
    author_id: str
    body: str
    created_at: datetime

    @classmethod
    def from_reply(cls, reply: BackpageReply) -> "BackpageReplyItem":
        return cls(
            reply_id=str(reply.id),
            post_id=str(reply.post_id),
            author_id=str(reply.author_id),
            body=reply.body,
            created_at=reply.created_at,
        )
