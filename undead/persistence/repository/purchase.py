"""PostgreSQL implementation of Purchase repository."""

from typing import Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from undead.domain.model import Purchase
from undead.domain.repository import PurchaseRepository
from undead.domain.value import PurchaseId
from undead.persistence.mappers import purchase_to_dict, row_to_purchase
from undead.persistence.tables import purchases_table


class PostgresPurchaseRepository(PurchaseRepository):
    """PostgreSQL implementation of PurchaseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, purchase_id: PurchaseId) -> Optional[Purchase]:
        """Find a purchase by ID."""
        stmt = select(purchases_table).where(purchases_table.c.id == purchase_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_purchase(row._asdict()) if row else None

    async def save(self, purchase: Purchase) -> Purchase:
        """Insert a purchase or update its mutable status fields."""
        values = purchase_to_dict(purchase)
        stmt = insert(purchases_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[purchases_table.c.id],
            set_={
                "status": stmt.excluded.status,
                "delivery_status": stmt.excluded.delivery_status,
            },
        ).returning(purchases_table)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_purchase(result.one()._asdict())

    async def increment_download_count(
        self, purchase_id: PurchaseId
    ) -> Optional[Purchase]:
        """Conditional UPDATE ... WHERE download_count < max_downloads."""
        with logfire.span(
            "purchase_repository.increment_download_count",
            purchase_id=str(purchase_id),
        ):
            stmt = (
                update(purchases_table)
                .where(purchases_table.c.id == purchase_id)
                .where(
                    purchases_table.c.download_count
                    < purchases_table.c.max_downloads
                )
                .values(download_count=purchases_table.c.download_count + 1)
                .returning(purchases_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
            return row_to_purchase(row._asdict()) if row else None
