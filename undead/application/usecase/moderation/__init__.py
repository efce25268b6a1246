"""Moderation use cases (admin only)."""

from .list_all_posts import (
    ListAllPostsRequest,
    ListAllPostsResponse,
    ListAllPostsUseCase,
    ModerationPostItem,
)
from .list_reports import (
    ListReportsRequest,
    ListReportsResponse,
    ListReportsUseCase,
    ReportItem,
)
from .remove_post import RemovePostRequest, RemovePostResponse, RemovePostUseCase
from .remove_reply import RemoveReplyRequest, RemoveReplyResponse, RemoveReplyUseCase
from .resolve_report import (
    ResolveReportRequest,
    ResolveReportResponse,
    ResolveReportUseCase,
)

__all__ = [
    "ListAllPostsRequest",
    "ListAllPostsResponse",
    "ListAllPostsUseCase",
    "ListReportsRequest",
    "ListReportsResponse",
    "ListReportsUseCase",
    "ModerationPostItem",
    "RemovePostRequest",
    "RemovePostResponse",
    "RemovePostUseCase",
    "RemoveReplyRequest",
    "RemoveReplyResponse",
    "RemoveReplyUseCase",
    "ReportItem",
    "ResolveReportRequest",
    "ResolveReportResponse",
    "ResolveReportUseCase",
]
