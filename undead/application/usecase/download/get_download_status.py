"""Get download status use case."""

from uuid import UUID

from pydantic import BaseModel

from undead.domain.error import NotAuthorizedError, NotFoundError
from undead.domain.repository import PurchaseRepository
from undead.domain.service import DownloadService
from undead.domain.value import Principal, PurchaseId

from ..base import BaseUseCase


class GetDownloadStatusRequest(BaseModel):
    """Get download status request."""

    principal: Principal
    purchase_id: str  # UUID string


class DownloadStatusResponse(BaseModel):
    """Download entitlement for a purchase."""

    purchase_id: str
    can_download: bool
    download_count: int
    max_downloads: int
    remaining: int


class GetDownloadStatusUseCase(BaseUseCase):
    """Use case for checking how many downloads a purchase has left."""

    def __init__(
        self,
        purchase_repository: PurchaseRepository,
        download_service: DownloadService,
    ) -> None:
        """Initialize get download status use case.

        Args:
            purchase_repository: Purchase repository (ownership lookup)
            download_service: Download domain service
        """
        self.purchase_repository = purchase_repository
        self.download_service = download_service

    async def execute(
        self, request: GetDownloadStatusRequest
    ) -> DownloadStatusResponse:
        """Execute get download status flow.

        Raises:
            NotFoundError: If the purchase doesn't exist
            NotAuthorizedError: If the caller isn't the buyer or an admin
        """
        purchase_id = PurchaseId(UUID(request.purchase_id))
        purchase = await self.purchase_repository.find_by_id(purchase_id)
        if purchase is None:
            raise NotFoundError("Purchase", request.purchase_id)
        if not purchase.is_accessible_by(request.principal):
            raise NotAuthorizedError(
                "Purchase", request.purchase_id, str(request.principal.user_id)
            )

        status = await self.download_service.get_status(purchase_id)
        if status is None:
            raise NotFoundError("Purchase", request.purchase_id)

        return DownloadStatusResponse(
            purchase_id=request.purchase_id, **status.model_dump()
        )
