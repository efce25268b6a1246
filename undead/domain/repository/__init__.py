"""Repository interfaces for UndeadList domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from undead.domain.repository.backpage_post import BackpagePostRepository
from undead.domain.repository.backpage_reply import BackpageReplyRepository
from undead.domain.repository.backpage_report import BackpageReportRepository
from undead.domain.repository.backpage_vote import BackpageVoteRepository
from undead.domain.repository.purchase import PurchaseRepository

__all__ = [
    "PurchaseRepository",
    "BackpagePostRepository",
    "BackpageReplyRepository",
    "BackpageVoteRepository",
    "BackpageReportRepository",
]
