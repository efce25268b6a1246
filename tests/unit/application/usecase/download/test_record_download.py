"""Unit tests for the download use cases."""

from uuid import uuid4

import pytest

from undead.application.usecase.download import (
    GetDownloadStatusRequest,
    GetDownloadStatusUseCase,
    RecordDownloadRequest,
    RecordDownloadUseCase,
)
from undead.domain.error import (
    DownloadLimitExceededError,
    NotAuthorizedError,
    NotFoundError,
)
from undead.domain.repository import PurchaseRepository
from undead.domain.value import DeliveryStatus, PurchaseStatus
from tests.conftest import make_principal, make_purchase
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRecordDownloadUseCase:
    """Tests for RecordDownloadUseCase."""

    @pytest.mark.asyncio
    async def test_buyer_download_consumes_one(self, unit_env):
        use_case = await unit_env.get(RecordDownloadUseCase)
        repo = await unit_env.get(PurchaseRepository)
        buyer = make_principal()
        purchase = await repo.save(make_purchase(buyer_id=buyer.user_id))

        response = await use_case.execute(
            RecordDownloadRequest(principal=buyer, purchase_id=str(purchase.id))
        )

        assert response.purchase_id == str(purchase.id)
        assert response.download_count == 1
        assert response.remaining == 9
        assert response.can_download is True

    @pytest.mark.asyncio
    async def test_last_download_then_limit(self, unit_env):
        """The final download succeeds; the next one is refused."""
        use_case = await unit_env.get(RecordDownloadUseCase)
        repo = await unit_env.get(PurchaseRepository)
        buyer = make_principal()
        purchase = await repo.save(
            make_purchase(buyer_id=buyer.user_id, download_count=9)
        )
        request = RecordDownloadRequest(principal=buyer, purchase_id=str(purchase.id))

        response = await use_case.execute(request)
        assert response.remaining == 0
        assert response.can_download is False

        with pytest.raises(DownloadLimitExceededError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_admin_may_download(self, unit_env):
        use_case = await unit_env.get(RecordDownloadUseCase)
        repo = await unit_env.get(PurchaseRepository)
        purchase = await repo.save(make_purchase())

        response = await use_case.execute(
            RecordDownloadRequest(
                principal=make_principal(is_admin=True), purchase_id=str(purchase.id)
            )
        )

        assert response.download_count == 1

    @pytest.mark.asyncio
    async def test_stranger_is_refused_without_consuming(self, unit_env):
        use_case = await unit_env.get(RecordDownloadUseCase)
        repo = await unit_env.get(PurchaseRepository)
        purchase = await repo.save(make_purchase())

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                RecordDownloadRequest(
                    principal=make_principal(), purchase_id=str(purchase.id)
                )
            )

        unchanged = await repo.find_by_id(purchase.id)
        assert unchanged.download_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, delivery_status",
        [
            (PurchaseStatus.PENDING, DeliveryStatus.DELIVERED),
            (PurchaseStatus.REFUNDED, DeliveryStatus.DELIVERED),
            (PurchaseStatus.COMPLETED, DeliveryStatus.PENDING),
        ],
    )
    async def test_incomplete_purchase_is_refused(
        self, unit_env, status, delivery_status
    ):
        use_case = await unit_env.get(RecordDownloadUseCase)
        repo = await unit_env.get(PurchaseRepository)
        buyer = make_principal()
        purchase = await repo.save(
            make_purchase(
                buyer_id=buyer.user_id, status=status, delivery_status=delivery_status
            )
        )

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                RecordDownloadRequest(principal=buyer, purchase_id=str(purchase.id))
            )

    @pytest.mark.asyncio
    async def test_unknown_purchase(self, unit_env):
        use_case = await unit_env.get(RecordDownloadUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RecordDownloadRequest(
                    principal=make_principal(), purchase_id=str(uuid4())
                )
            )


class TestGetDownloadStatusUseCase:
    """Tests for GetDownloadStatusUseCase."""

    @pytest.mark.asyncio
    async def test_buyer_sees_status(self, unit_env):
        use_case = await unit_env.get(GetDownloadStatusUseCase)
        repo = await unit_env.get(PurchaseRepository)
        buyer = make_principal()
        purchase = await repo.save(
            make_purchase(buyer_id=buyer.user_id, download_count=2, max_downloads=5)
        )

        response = await use_case.execute(
            GetDownloadStatusRequest(principal=buyer, purchase_id=str(purchase.id))
        )

        assert response.download_count == 2
        assert response.max_downloads == 5
        assert response.remaining == 3

    @pytest.mark.asyncio
    async def test_stranger_cannot_see_status(self, unit_env):
        use_case = await unit_env.get(GetDownloadStatusUseCase)
        repo = await unit_env.get(PurchaseRepository)
        purchase = await repo.save(make_purchase())

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                GetDownloadStatusRequest(
                    principal=make_principal(), purchase_id=str(purchase.id)
                )
            )
