"""PostgreSQL repository implementations."""

from undead.persistence.repository.backpage_post import PostgresBackpagePostRepository
from undead.persistence.repository.backpage_reply import (
    PostgresBackpageReplyRepository,
)
from undead.persistence.repository.backpage_report import (
    PostgresBackpageReportRepository,
)
from undead.persistence.repository.backpage_vote import PostgresBackpageVoteRepository
from undead.persistence.repository.purchase import PostgresPurchaseRepository

__all__ = [
    "PostgresPurchaseRepository",
    "PostgresBackpagePostRepository",
    "PostgresBackpageReplyRepository",
    "PostgresBackpageVoteRepository",
    "PostgresBackpageReportRepository",
]
