"""Purchase repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from undead.domain.model.purchase import Purchase
from undead.domain.value import PurchaseId


class PurchaseRepository(ABC):
    """Repository for Purchase entity.

    Implementations must never cache download counts between calls; every
    read goes to the store.
    """

    @abstractmethod
    async def find_by_id(self, purchase_id: PurchaseId) -> Optional[Purchase]:
        """Find a purchase by ID.

        Args:
            purchase_id: The purchase's unique identifier

        Returns:
            The purchase if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, purchase: Purchase) -> Purchase:
        """Save a purchase (create or update).

        Args:
            purchase: The purchase to save

        Returns:
            The saved purchase
        """
        pass

    @abstractmethod
    async def increment_download_count(
        self, purchase_id: PurchaseId
    ) -> Optional[Purchase]:
        """Atomically increment the download count if below the cap.

        Single conditional update: ``download_count + 1`` only where
        ``download_count < max_downloads``.

        Args:
            purchase_id: The purchase ID

        Returns:
            The updated purchase if a download was granted, None if the
            purchase does not exist or its cap was already reached
        """
        pass
