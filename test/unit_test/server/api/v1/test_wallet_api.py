"""
Endpoint tests for the Kana wallet, DashiFan tiers, subscriptions and the admin panel.
"""

from decimal import Decimal

from httpx import AsyncClient

from dashitoon.core.database.entities import Series, User


class TestKanaEndpoints:
    async def test_check_in_twice(self, client: AsyncClient, reader: User, as_user):
        first = await client.post("/api/v1/kana/checkin", headers=as_user(reader.id))
        second = await client.post("/api/v1/kana/checkin", headers=as_user(reader.id))

        assert first.status_code == 201
        assert first.json()["type"] == "checkin"
        assert second.status_code == 400
        assert second.json()["error_type"] == "AlreadyCheckedInError"

    async def test_top_up_spend_and_balance(self, client: AsyncClient, reader: User, as_user):
        headers = as_user(reader.id)
        await client.post("/api/v1/kana/top-up", json={"amount": 120}, headers=headers)
        spent = await client.post(
            "/api/v1/kana/spend", json={"currency": "gold", "amount": 20, "reason": "Unlock"}, headers=headers
        )
        assert spent.json()["amount"] == -20

        balance = await client.get("/api/v1/kana", headers=headers)
        assert balance.json()["kana_gold"] == 100

        history = await client.get("/api/v1/kana/transactions?currency=gold", headers=headers)
        assert len(history.json()) == 2

    async def test_overspend(self, client: AsyncClient, reader: User, as_user):
        response = await client.post(
            "/api/v1/kana/spend", json={"currency": "coin", "amount": 5, "reason": "Tip"}, headers=as_user(reader.id)
        )
        assert response.status_code == 400

    async def test_ledger_totals(self, client: AsyncClient, reader: User, as_user):
        headers = as_user(reader.id)
        await client.post("/api/v1/kana/checkin", headers=headers)
        await client.post("/api/v1/kana/top-up", json={"amount": 40}, headers=headers)

        response = await client.get("/api/v1/kana/ledger", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["ledger_gold"] == body["kana_gold"] == 40
        assert body["ledger_coin"] == body["kana_coin"]
        assert body["consistent"] is True


class TestSubscriptionEndpoints:
    async def test_subscribe_pay_cancel(self, client: AsyncClient, series: Series, author: User, reader: User, as_user):
        tier = await client.post(
            f"/api/v1/series/{series.id}/tiers",
            json={"name": "Supporter", "price_amount": "29000", "perks": 1},
            headers=as_user(author.id),
        )
        assert tier.status_code == 201

        subscribed = await client.post(
            "/api/v1/subscriptions", json={"dashi_fan_id": tier.json()["id"]}, headers=as_user(reader.id)
        )
        assert subscribed.status_code == 201
        subscription = subscribed.json()
        assert subscription["status"] == "pending"

        billing_id = subscription["billing_details"][0]["id"]
        paid = await client.post(
            f"/api/v1/subscriptions/{subscription['id']}/payments",
            json={"billing_id": billing_id},
            headers=as_user(reader.id),
        )
        assert paid.json()["status"] == "active"

        duplicate = await client.post(
            "/api/v1/subscriptions", json={"dashi_fan_id": tier.json()["id"]}, headers=as_user(reader.id)
        )
        assert duplicate.status_code == 400

        cancelled = await client.post(f"/api/v1/subscriptions/{subscription['id']}/cancel", headers=as_user(reader.id))
        assert cancelled.json()["status"] == "cancelled"

    async def test_failed_payment_expires(
        self, client: AsyncClient, series: Series, author: User, reader: User, as_user
    ):
        tier = await client.post(
            f"/api/v1/series/{series.id}/tiers",
            json={"name": "Supporter", "price_amount": "29000"},
            headers=as_user(author.id),
        )
        subscription = (
            await client.post(
                "/api/v1/subscriptions", json={"dashi_fan_id": tier.json()["id"]}, headers=as_user(reader.id)
            )
        ).json()
        billing_id = subscription["billing_details"][0]["id"]

        failed = await client.post(
            f"/api/v1/subscriptions/{subscription['id']}/payments/failed",
            json={"billing_id": billing_id},
            headers=as_user(reader.id),
        )

        assert failed.status_code == 200
        assert failed.json()["status"] == "expired"
        assert failed.json()["billing_details"][0]["payment_status"] == "failed"

        retried = await client.post(
            f"/api/v1/subscriptions/{subscription['id']}/payments",
            json={"billing_id": billing_id},
            headers=as_user(reader.id),
        )
        assert retried.status_code == 400

    async def test_tiers_owner_only(self, client: AsyncClient, series: Series, reader: User, as_user):
        response = await client.post(
            f"/api/v1/series/{series.id}/tiers", json={"name": "Fake", "price_amount": "1"}, headers=as_user(reader.id)
        )
        assert response.status_code == 403


class TestAdminEndpoints:
    async def test_commission_rate(self, client: AsyncClient, admin: User, as_user):
        headers = as_user(admin.id)

        default = await client.get("/api/v1/admin/rates/commission", headers=headers)
        assert Decimal(str(default.json()["rate"])) == Decimal("70")

        updated = await client.put("/api/v1/admin/rates/commission", json={"rate": "72.5"}, headers=headers)
        assert updated.status_code == 200

        current = await client.get("/api/v1/admin/rates/commission", headers=headers)
        assert Decimal(str(current.json()["rate"])) == Decimal("72.5")

    async def test_commission_rate_out_of_range(self, client: AsyncClient, admin: User, as_user):
        response = await client.put("/api/v1/admin/rates/commission", json={"rate": "150"}, headers=as_user(admin.id))
        assert response.status_code == 400

    async def test_exchange_rate(self, client: AsyncClient, admin: User, as_user):
        headers = as_user(admin.id)
        await client.put("/api/v1/admin/rates/kana-exchange", json={"rate": "230"}, headers=headers)

        current = await client.get("/api/v1/admin/rates/kana-exchange", headers=headers)
        assert current.json()["currency"] == "VND"
        assert Decimal(str(current.json()["rate"])) == Decimal("230")

    async def test_non_admin_forbidden(self, client: AsyncClient, author: User, as_user):
        for response in (
            await client.get("/api/v1/admin/rates/commission", headers=as_user(author.id)),
            await client.post("/api/v1/admin/subscriptions/renew", headers=as_user(author.id)),
        ):
            assert response.status_code == 403

    async def test_renew_run(self, client: AsyncClient, admin: User, as_user):
        response = await client.post("/api/v1/admin/subscriptions/renew", headers=as_user(admin.id))
        assert response.json() == {"renewed": 0}
