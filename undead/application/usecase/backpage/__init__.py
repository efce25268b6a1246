"""BackPage use cases."""

from .cleanup_expired_posts import (
    CleanupExpiredPostsRequest,
    CleanupExpiredPostsResponse,
    CleanupExpiredPostsUseCase,
)
from .common import BackpagePostItem, BackpageReplyItem
from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase
from .create_reply import CreateReplyRequest, CreateReplyResponse, CreateReplyUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .delete_reply import DeleteReplyRequest, DeleteReplyResponse, DeleteReplyUseCase
from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .report_post import ReportPostRequest, ReportPostResponse, ReportPostUseCase
from .report_reply import ReportReplyRequest, ReportReplyResponse, ReportReplyUseCase
from .vote_post import VotePostRequest, VotePostResponse, VotePostUseCase

__all__ = [
    "BackpagePostItem",
    "BackpageReplyItem",
    "CleanupExpiredPostsRequest",
    "CleanupExpiredPostsResponse",
    "CleanupExpiredPostsUseCase",
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "CreateReplyRequest",
    "CreateReplyResponse",
    "CreateReplyUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "DeleteReplyRequest",
    "DeleteReplyResponse",
    "DeleteReplyUseCase",
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "ReportPostRequest",
    "ReportPostResponse",
    "ReportPostUseCase",
    "ReportReplyRequest",
    "ReportReplyResponse",
    "ReportReplyUseCase",
    "VotePostRequest",
    "VotePostResponse",
    "VotePostUseCase",
]
