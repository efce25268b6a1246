"""Download entitlement domain service."""

import logfire

from undead.domain.error import NotFoundError
from undead.domain.repository import PurchaseRepository
from undead.domain.value import DownloadStatus, PurchaseId

from .base import Service


class DownloadService(Service):
    """Decides whether a purchase may be downloaded again and records usage.

    Limits cover all files in the purchase combined. Every call re-reads the
    purchase; nothing is cached across calls.
    """

    def __init__(self, purchase_repository: PurchaseRepository) -> None:
        """Initialize download service.

        Args:
            purchase_repository: Purchase repository
        """
        self.purchase_repository = purchase_repository

    async def get_status(self, purchase_id: PurchaseId) -> DownloadStatus | None:
        """Get the download entitlement for a purchase.

        Args:
            purchase_id: Purchase ID

        Returns:
            Download status, or None if the purchase doesn't exist
        """
        with logfire.span("download_service.get_status", purchase_id=str(purchase_id)):
            purchase = await self.purchase_repository.find_by_id(purchase_id)
            if purchase is None:
                logfire.warn("Purchase not found", purchase_id=str(purchase_id))
                return None

            return purchase.download_status()

    async def can_download(self, purchase_id: PurchaseId) -> bool:
        """Whether another download is allowed. Unknown purchases fail closed."""
        status = await self.get_status(purchase_id)
        return status.can_download if status else False

    async def increment_download_count(self, purchase_id: PurchaseId) -> bool:
        """Record one download if the purchase is below its cap.

        Uses a single conditional update so concurrent requests near the
        limit cannot push the count past max_downloads.

        Args:
            purchase_id: Purchase ID

        Returns:
            True if the download was granted, False if the cap was reached

        Raises:
            NotFoundError: If the purchase doesn't exist
        """
        with logfire.span(
            "download_service.increment_download_count", purchase_id=str(purchase_id)
        ):
            updated = await self.purchase_repository.increment_download_count(
                purchase_id
            )
            if updated is not None:
                logfire.info(
                    "Download recorded",
                    purchase_id=str(purchase_id),
                    download_count=updated.download_count,
                    max_downloads=updated.max_downloads,
                )
                return True

            # No row matched: either missing or already at the cap
            purchase = await self.purchase_repository.find_by_id(purchase_id)
            if purchase is None:
                raise NotFoundError("Purchase", str(purchase_id))

            logfire.warn(
                "Download limit reached",
                purchase_id=str(purchase_id),
                max_downloads=purchase.max_downloads,
            )
            return False
