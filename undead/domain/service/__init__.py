"""Domain services."""

from .backpage_reply_service import BackpageReplyService
from .backpage_report_service import BackpageReportService
from .backpage_service import BackpageService, next_monday, slugify
from .backpage_vote_service import BackpageVoteService
from .base import Service
from .download_service import DownloadService
from .jwt_service import JWTService

__all__ = [
    "BackpageReplyService",
    "BackpageReportService",
    "BackpageService",
    "BackpageVoteService",
    "DownloadService",
    "JWTService",
    "Service",
    "next_monday",
    "slugify",
]
