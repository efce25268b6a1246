"""Domain value objects for UndeadList.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from undead.domain.value.common import RootValueObject, ValueObject
from undead.domain.value.identifiers import UserId


class PurchaseStatus(str, Enum):
    """Completion status of a purchase."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"
    DISPUTED = "DISPUTED"


class DeliveryStatus(str, Enum):
    """Delivery status of a purchase's files."""

    PENDING = "PENDING"
    DELIVERED = "DELIVERED"


class BackpageCategory(str, Enum):
    """BackPage post category."""

    GENERAL = "GENERAL"
    SHOW_TELL = "SHOW_TELL"
    LOOKING_FOR = "LOOKING_FOR"
    HELP = "HELP"

    @property
    def label(self) -> str:
        """Human-readable category label."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    BackpageCategory.GENERAL: "General",
    BackpageCategory.SHOW_TELL: "Show & Tell",
    BackpageCategory.LOOKING_FOR: "Looking For",
    BackpageCategory.HELP: "Help",
}


class PostState(str, Enum):
    """Lifecycle state of a BackPage post at a given instant.

    PURGED has no member: a purged post no longer has a row.
    """

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    DELETED = "DELETED"


class VoteDirection(int, Enum):
    """Direction of a BackPage vote."""

    UP = 1
    DOWN = -1


class VoteAction(str, Enum):
    """What a vote request did to the caller's stored vote."""

    CREATED = "created"
    CHANGED = "changed"
    REMOVED = "removed"


class ReportReason(str, Enum):
    """Reason a user reported a BackPage post."""

    SPAM = "SPAM"
    HARASSMENT = "HARASSMENT"
    SCAM = "SCAM"
    OFF_TOPIC = "OFF_TOPIC"
    OTHER = "OTHER"


class ReportStatus(str, Enum):
    """Moderation status of a report."""

    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


class Slug(RootValueObject[str]):
    """URL-safe slug for BackPage posts.

    Lowercase alphanumeric words joined by single hyphens, 1-100 characters.
    Examples: 'selling-my-saas-boilerplate-m1x9k2'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class Principal(ValueObject):
    """The authenticated caller.

    Passed explicitly into every operation that needs to know who is acting.
    """

    user_id: UserId
    is_admin: bool = False

    def can_moderate(self, owner_id: UserId) -> bool:
        """Whether this principal may delete content owned by ``owner_id``."""
        return self.is_admin or self.user_id == owner_id


class DownloadStatus(ValueObject):
    """Download entitlement snapshot for a purchase."""

    can_download: bool
    download_count: int
    max_downloads: int
    remaining: int


class VoteResult(ValueObject):
    """Outcome of a vote request: what changed and the post's new counters.

    ``user_vote`` is the caller's stored direction afterwards (0 for none).
    """

    action: VoteAction
    upvotes: int
    downvotes: int
    tally: int
    user_vote: int
