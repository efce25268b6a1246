"""In-memory purchase repository for testing."""

from typing import Optional

from undead.domain.model.purchase import Purchase
from undead.domain.repository.purchase import PurchaseRepository
from undead.domain.value import PurchaseId


class InMemoryPurchaseRepository(PurchaseRepository):
    """In-memory implementation of PurchaseRepository for testing."""

    def __init__(self) -> None:
        self._purchases: dict[PurchaseId, Purchase] = {}

    async def find_by_id(self, purchase_id: PurchaseId) -> Optional[Purchase]:
        """Find a purchase by ID."""
        return self._purchases.get(purchase_id)

    async def save(self, purchase: Purchase) -> Purchase:
        """Save a purchase (create or update)."""
        self._purchases[purchase.id] = purchase
        return purchase

    async def increment_download_count(
        self, purchase_id: PurchaseId
    ) -> Optional[Purchase]:
        """Check and increment without yielding to the event loop."""
        purchase = self._purchases.get(purchase_id)
        if purchase is None or purchase.download_count >= purchase.max_downloads:
            return None

        updated = purchase.model_copy(
            update={"download_count": purchase.download_count + 1}
        )
        self._purchases[purchase_id] = updated
        return updated
