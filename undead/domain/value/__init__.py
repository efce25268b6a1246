"""Domain value objects for UndeadList."""

from undead.domain.value.identifiers import (
    BackpagePostId,
    BackpageReplyId,
    BackpageReportId,
    BackpageVoteId,
    ListingId,
    PurchaseId,
    UserId,
)
from undead.domain.value.types import (
    BackpageCategory,
    DeliveryStatus,
    DownloadStatus,
    PostState,
    Principal,
    PurchaseStatus,
    ReportReason,
    ReportStatus,
    Slug,
    VoteAction,
    VoteDirection,
    VoteResult,
)

__all__ = [
    # Identifiers
    "UserId",
    "ListingId",
    "PurchaseId",
    "BackpagePostId",
    "BackpageReplyId",
    "BackpageVoteId",
    "BackpageReportId",
    # Types
    "BackpageCategory",
    "DeliveryStatus",
    "DownloadStatus",
    "PostState",
    "Principal",
    "PurchaseStatus",
    "ReportReason",
    "ReportStatus",
    "Slug",
    "VoteAction",
    "VoteDirection",
    "VoteResult",
]
