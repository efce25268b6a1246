"""Strongly typed identifiers for UndeadList domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ListingId = NewType("ListingId", UUID)
PurchaseId = NewType("PurchaseId", UUID)
BackpagePostId = NewType("BackpagePostId", UUID)
BackpageReplyId = NewType("BackpageReplyId", UUID)
BackpageVoteId = NewType("BackpageVoteId", UUID)
BackpageReportId = NewType("BackpageReportId", UUID)
