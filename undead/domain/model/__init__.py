"""Domain model entities for UndeadList."""

from undead.domain.model.backpage_post import BackpagePost
from undead.domain.model.backpage_reply import BackpageReply
from undead.domain.model.backpage_report import BackpageReport
from undead.domain.model.backpage_vote import BackpageVote
from undead.domain.model.purchase import Purchase

__all__ = [
    "Purchase",
    "BackpagePost",
    "BackpageReply",
    "BackpageVote",
    "BackpageReport",
]
