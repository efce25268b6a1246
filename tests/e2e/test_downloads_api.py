"""End-to-end tests for the download entitlement endpoints."""

import asyncio
from uuid import uuid4

from undead.domain.repository import PurchaseRepository
from tests.conftest import make_principal, make_purchase
from tests.e2e.session import login


class TestDownloadsAPI:
    """Download status and recording over HTTP."""

    def test_requires_authentication(self, client):
        response = client.get(f"/downloads/{uuid4()}/status")

        assert response.status_code == 401

    def test_buyer_downloads_until_limit(self, client, resolve):
        repo = resolve(PurchaseRepository)
        buyer = make_principal()
        purchase = asyncio.run(
            repo.save(make_purchase(buyer_id=buyer.user_id, max_downloads=2))
        )
        login(client, buyer)

        status = client.get(f"/downloads/{purchase.id}/status")
        assert status.status_code == 200
        assert status.json()["remaining"] == 2

        first = client.post(f"/downloads/{purchase.id}")
        second = client.post(f"/downloads/{purchase.id}")
        third = client.post(f"/downloads/{purchase.id}")

        assert first.status_code == 200
        assert first.json()["remaining"] == 1
        assert second.status_code == 200
        assert second.json()["can_download"] is False
        assert third.status_code == 403

        final = client.get(f"/downloads/{purchase.id}/status").json()
        assert final["download_count"] == 2
        assert final["remaining"] == 0

    def test_other_user_is_forbidden(self, client, resolve):
        repo = resolve(PurchaseRepository)
        purchase = asyncio.run(repo.save(make_purchase()))
        login(client, make_principal())

        response = client.post(f"/downloads/{purchase.id}")

        assert response.status_code == 403

    def test_unknown_purchase_is_not_found(self, client):
        login(client, make_principal())

        response = client.get(f"/downloads/{uuid4()}/status")

        assert response.status_code == 404

    def test_malformed_purchase_id_is_rejected(self, client):
        login(client, make_principal())

        response = client.get("/downloads/not-a-uuid/status")

        assert response.status_code == 422
