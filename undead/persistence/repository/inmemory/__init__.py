"""In-memory repository implementations for testing."""

from .backpage_post import InMemoryBackpagePostRepository
from .backpage_reply import InMemoryBackpageReplyRepository
from .backpage_report import InMemoryBackpageReportRepository
from .backpage_vote import InMemoryBackpageVoteRepository
from .purchase import InMemoryPurchaseRepository

__all__ = [
    "InMemoryBackpagePostRepository",
    "InMemoryBackpageReplyRepository",
    "InMemoryBackpageReportRepository",
    "InMemoryBackpageVoteRepository",
    "InMemoryPurchaseRepository",
]
