"""Record download use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from undead.domain.error import (
    DownloadLimitExceededError,
    NotAuthorizedError,
    NotFoundError,
)
from undead.domain.repository import PurchaseRepository
from undead.domain.service import DownloadService
from undead.domain.value import Principal, PurchaseId

from ..base import BaseUseCase
from .get_download_status import DownloadStatusResponse


class RecordDownloadRequest(BaseModel):
    """Record download request."""

    principal: Principal
    purchase_id: str  # UUID string


class RecordDownloadUseCase(BaseUseCase):
    """Use case for consuming one download of a purchase.

    Runs right before a file is handed to the buyer. The purchase must be
    paid and delivered, and the atomic increment decides whether a download
    is still available.
    """

    def __init__(
        self,
        purchase_repository: PurchaseRepository,
        download_service: DownloadService,
    ) -> None:
        """Initialize record download use case.

        Args:
            purchase_repository: Purchase repository (ownership lookup)
            download_service: Download domain service
        """
        self.purchase_repository = purchase_repository
        self.download_service = download_service

    async def execute(self, request: RecordDownloadRequest) -> DownloadStatusResponse:
        """Execute record download flow.

        Steps:
        1. Load purchase and check the caller may access it
        2. Require a completed, delivered purchase
        3. Atomically increment the download count

        Args:
            request: Record download request

        Returns:
            Download status after the increment

        Raises:
            NotFoundError: If the purchase doesn't exist
            NotAuthorizedError: If the caller isn't the buyer or an admin, or
                the purchase isn't completed and delivered
            DownloadLimitExceededError: If no downloads remain
        """
        purchase_id = PurchaseId(UUID(request.purchase_id))
        user_id = str(request.principal.user_id)

        with logfire.span(
            "record_download.execute", purchase_id=request.purchase_id, user_id=user_id
        ):
            purchase = await self.purchase_repository.find_by_id(purchase_id)
            if purchase is None:
                raise NotFoundError("Purchase", request.purchase_id)
            if not purchase.is_accessible_by(request.principal):
                raise NotAuthorizedError("Purchase", request.purchase_id, user_id)
            if not purchase.is_completed or not purchase.is_delivered:
                logfire.warn(
                    "Download attempted before completion",
                    purchase_id=request.purchase_id,
                    status=purchase.status.value,
                    delivery_status=purchase.delivery_status.value,
                )
                raise NotAuthorizedError("Purchase", request.purchase_id, user_id)

            granted = await self.download_service.increment_download_count(
                purchase_id
            )
            if not granted:
                raise DownloadLimitExceededError(
                    request.purchase_id, purchase.max_downloads
                )

            status = await self.download_service.get_status(purchase_id)
            if status is None:
                raise NotFoundError("Purchase", request.purchase_id)

            return DownloadStatusResponse(
                purchase_id=request.purchase_id, **status.model_dump()
            )
