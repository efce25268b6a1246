"""Purchase entity.

A purchase is one buyer's paid acquisition of one listing's files. It is
created by the payment flow and only its download counter and status fields
change afterwards.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, model_validator

from undead.domain.model.common import DomainModel, utc_now
from undead.domain.value import (
    DeliveryStatus,
    DownloadStatus,
    ListingId,
    Principal,
    PurchaseId,
    PurchaseStatus,
    UserId,
)


class Purchase(DomainModel):
    """Purchase entity.

    Business rules:
    - download_count never exceeds max_downloads
    - download_count only grows, one per granted download
    - max_downloads is fixed when the purchase is created
    """

    id: PurchaseId
    buyer_id: UserId
    seller_id: UserId
    listing_id: ListingId
    amount: Decimal = Field(ge=0)
    status: PurchaseStatus = PurchaseStatus.PENDING
    delivery_status: DeliveryStatus = DeliveryStatus.PENDING
    download_count: int = Field(default=0, ge=0)
    max_downloads: int = Field(default=10, gt=0)
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_download_count(self) -> "Purchase":
        """Enforce the download cap."""
        if self.download_count > self.max_downloads:
            raise ValueError("download_count cannot exceed max_downloads")
        return self

    def download_status(self) -> DownloadStatus:
        """Entitlement snapshot computed from this row."""
        return DownloadStatus(
            can_download=self.download_count < self.max_downloads,
            download_count=self.download_count,
            max_downloads=self.max_downloads,
            remaining=max(0, self.max_downloads - self.download_count),
        )

    def is_accessible_by(self, principal: Principal) -> bool:
        """Buyers and admins may fetch this purchase's files."""
        return principal.is_admin or principal.user_id == self.buyer_id

    @property
    def is_completed(self) -> bool:
        return self.status == PurchaseStatus.COMPLETED

    @property
    def is_delivered(self) -> bool:
        return self.delivery_status == DeliveryStatus.DELIVERED
