"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from undead.domain.model import (
    BackpagePost,
    BackpageReply,
    BackpageReport,
    BackpageVote,
    Purchase,
)
from undead.domain.value import (
    BackpageCategory,
    BackpagePostId,
    BackpageReplyId,
    BackpageReportId,
    BackpageVoteId,
    DeliveryStatus,
    ListingId,
    PurchaseId,
    PurchaseStatus,
    ReportReason,
    ReportStatus,
    Slug,
    UserId,
    VoteDirection,
)


def _uuid(value: Any) -> UUID:
    """asyncpg returns its own UUID type; normalize to uuid.UUID."""
    return value if isinstance(value, UUID) else UUID(str(value))


def _optional_user(value: Any) -> Optional[UserId]:
    return UserId(_uuid(value)) if value is not None else None


def _enum_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace enum members with their raw values for the driver."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }


def row_to_purchase(row: Dict[str, Any]) -> Purchase:
    """Convert database row to Purchase domain model.

    Args:
        row: Database row as dict

    Returns:
        Purchase domain model
    """
    return Purchase(
        id=PurchaseId(_uuid(row["id"])),
        buyer_id=UserId(_uuid(row["buyer_id"])),
        seller_id=UserId(_uuid(row["seller_id"])),
        listing_id=ListingId(_uuid(row["listing_id"])),
        amount=row["amount"],
        status=PurchaseStatus(row["status"]),
        delivery_status=DeliveryStatus(row["delivery_status"]),
        download_count=row["download_count"],
        max_downloads=row["max_downloads"],
        created_at=row["created_at"],
    )


def purchase_to_dict(purchase: Purchase) -> Dict[str, Any]:
    """Convert Purchase domain model to database dict."""
    return _enum_values(purchase.model_dump())


def row_to_backpage_post(row: Dict[str, Any]) -> BackpagePost:
    """Convert database row to BackpagePost domain model.

    Args:
        row: Database row as dict

    Returns:
        BackpagePost domain model
    """
    return BackpagePost(
        id=BackpagePostId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        author_id=UserId(_uuid(row["author_id"])),
        category=BackpageCategory(row["category"]),
        title=row["title"],
        body=row["body"],
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        reply_count=row["reply_count"],
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        deleted_at=row.get("deleted_at"),
        deleted_by=_optional_user(row.get("deleted_by")),
        removal_reason=row.get("removal_reason"),
    )


def backpage_post_to_dict(post: BackpagePost) -> Dict[str, Any]:
    """Convert BackpagePost domain model to database dict.

    Slug is a root model, so ``model_dump()`` already yields the string.
    """
    return _enum_values(post.model_dump())


def row_to_backpage_reply(row: Dict[str, Any]) -> BackpageReply:
    """Convert database row to BackpageReply domain model."""
    return BackpageReply(
        id=BackpageReplyId(_uuid(row["id"])),
        post_id=BackpagePostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        body=row["body"],
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
        deleted_by=_optional_user(row.get("deleted_by")),
        removal_reason=row.get("removal_reason"),
    )


def backpage_reply_to_dict(reply: BackpageReply) -> Dict[str, Any]:
    """Convert BackpageReply domain model to database dict."""
    return reply.model_dump()


def row_to_backpage_vote(row: Dict[str, Any]) -> BackpageVote:
    """Convert database row to BackpageVote domain model."""
    return BackpageVote(
        id=BackpageVoteId(_uuid(row["id"])),
        post_id=BackpagePostId(_uuid(row["post_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        value=VoteDirection(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def backpage_vote_to_dict(vote: BackpageVote) -> Dict[str, Any]:
    """Convert BackpageVote domain model to database dict."""
    return _enum_values(vote.model_dump())


def row_to_backpage_report(row: Dict[str, Any]) -> BackpageReport:
    """Convert database row to BackpageReport domain model."""
    return BackpageReport(
        id=BackpageReportId(_uuid(row["id"])),
        post_id=BackpagePostId(_uuid(row["post_id"])),
        reply_id=(
            BackpageReplyId(_uuid(row["reply_id"]))
            if row.get("reply_id") is not None
            else None
        ),
        reporter_id=UserId(_uuid(row["reporter_id"])),
        reason=ReportReason(row["reason"]),
        details=row.get("details"),
        status=ReportStatus(row["status"]),
        created_at=row["created_at"],
        resolved_at=row.get("resolved_at"),
        resolved_by=_optional_user(row.get("resolved_by")),
    )


def backpage_report_to_dict(report: BackpageReport) -> Dict[str, Any]:
    """Convert BackpageReport domain model to database dict."""
    return _enum_values(report.model_dump())
