"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from undead.domain.model.backpage_post import BackpagePost
from undead.domain.model.purchase import Purchase
from undead.domain.service.backpage_service import next_monday
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    DeliveryStatus,
    ListingId,
    Principal,
    PurchaseId,
    PurchaseStatus,
    Slug,
    UserId,
)

# Wednesday 2025-01-15 12:00 UTC; the board expires Monday 2025-01-20 00:00
WEDNESDAY = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_principal(is_admin: bool = False) -> Principal:
    """A fresh caller with a random user id."""
    return Principal(user_id=UserId(uuid4()), is_admin=is_admin)


def make_purchase(
    buyer_id: UserId | None = None,
    download_count: int = 0,
    max_downloads: int = 10,
    status: PurchaseStatus = PurchaseStatus.COMPLETED,
    delivery_status: DeliveryStatus = DeliveryStatus.DELIVERED,
) -> Purchase:
    """A paid, delivered purchase unless told otherwise."""
    return Purchase(
        id=PurchaseId(uuid4()),
        buyer_id=buyer_id or UserId(uuid4()),
        seller_id=UserId(uuid4()),
        listing_id=ListingId(uuid4()),
        amount=Decimal("29.00"),
        status=status,
        delivery_status=delivery_status,
        download_count=download_count,
        max_downloads=max_downloads,
    )


def make_post(
    author_id: UserId | None = None,
    slug: str | None = None,
    created_at: datetime = WEDNESDAY,
    category: BackpageCategory = BackpageCategory.GENERAL,
    title: str = "Looking for a co-founder",
) -> BackpagePost:
    """A post created at ``created_at`` expiring the following Monday."""
    post_id = BackpagePostId(uuid4())
    return BackpagePost(
        id=post_id,
        slug=Slug(slug or f"post-{post_id.hex[:8]}"),
        author_id=author_id or UserId(uuid4()),
        category=category,
        title=title,
        body="Building something weird, need help with the backend.",
        created_at=created_at,
        expires_at=next_monday(created_at),
    )


def after_expiry(post: BackpagePost) -> datetime:
    """An instant just past the post's expiry."""
    return post.expires_at + timedelta(seconds=1)
