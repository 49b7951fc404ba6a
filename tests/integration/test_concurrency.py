"""Concurrent writes against one item must never double-deduct or go negative."""

import asyncio

from httpx import AsyncClient


async def _setup(client: AsyncClient, quantity: int) -> tuple[dict[str, str], int]:
    response = await client.post(
        "/api/company", json={"name": "Acme Foods", "domain": "acme.test"}
    )
    headers = {"X-Company-ID": str(response.json()["id"])}
    response = await client.post(
        "/api/inventory/adjustments",
        headers=headers,
        json={
            "action": "add_new",
            "name": "Oats",
            "quantity": quantity,
            "category": "raw",
            "unit": "kg",
            "reorder_level": 5,
            "price": "1.00",
        },
    )
    assert response.status_code == 201
    return headers, response.json()["item"]["id"]


async def _history(client: AsyncClient, headers: dict, item_id: int) -> dict:
    response = await client.get(f"/api/inventory/{item_id}/history", headers=headers)
    return response.json()


class TestConcurrentWrites:
    async def test_racing_samples_cannot_overdraw(self, client: AsyncClient):
        headers, item_id = await _setup(client, 100)

        async def sample():
            return await client.post(
                "/api/inventory/adjustments",
                headers=headers,
                json={"action": "sample", "item_id": item_id, "quantity": 60},
            )

        responses = await asyncio.gather(sample(), sample())

        assert sorted(r.status_code for r in responses) == [201, 400]
        history = await _history(client, headers, item_id)
        assert history["item"]["quantity"] == 40
        assert history["is_consistent"] is True

    async def test_racing_orders_on_one_item(self, client: AsyncClient):
        headers, item_id = await _setup(client, 10)

        async def order(name: str):
            return await client.post(
                "/api/orders",
                headers=headers,
                json={
                    "customer_name": name,
                    "customer_email": "buyer@example.com",
                    "items": [{"inventory_item_id": item_id, "quantity": 7}],
                },
            )

        responses = await asyncio.gather(order("Jane Buyer"), order("Sam Buyer"))

        assert sorted(r.status_code for r in responses) == [201, 400]
        history = await _history(client, headers, item_id)
        assert history["item"]["quantity"] == 3
        assert history["is_consistent"] is True
        response = await client.get("/api/orders", headers=headers)
        assert response.json()["total"] == 1

    async def test_racing_in_transit_deducts_once(self, client: AsyncClient):
        headers, item_id = await _setup(client, 100)
        response = await client.post(
            "/api/shipments",
            headers=headers,
            json={
                "recipient_name": "Trade Show",
                "shipment_type": "sample",
                "items": [{"inventory_item_id": item_id, "quantity": 10}],
            },
        )
        shipment_id = response.json()["id"]

        async def ship():
            return await client.patch(
                f"/api/shipments/{shipment_id}/status",
                headers=headers,
                json={"status": "in_transit"},
            )

        responses = await asyncio.gather(ship(), ship())

        # The loser either read the shipment after the winner committed
        # (no-op) or had its stale write refused
        codes = sorted(r.status_code for r in responses)
        assert codes in ([200, 200], [200, 400])
        history = await _history(client, headers, item_id)
        assert history["item"]["quantity"] == 90
        assert [e["transaction_type"] for e in history["entries"]].count("shipment") == 1

    async def test_racing_cancel_and_ship_leave_one_outcome(self, client: AsyncClient):
        headers, item_id = await _setup(client, 100)
        response = await client.post(
            "/api/shipments",
            headers=headers,
            json={
                "recipient_name": "Trade Show",
                "items": [{"inventory_item_id": item_id, "quantity": 10}],
            },
        )
        shipment_id = response.json()["id"]

        async def move(status: str):
            return await client.patch(
                f"/api/shipments/{shipment_id}/status",
                headers=headers,
                json={"status": status},
            )

        await asyncio.gather(move("in_transit"), move("cancelled"))

        response = await client.get(f"/api/shipments/{shipment_id}", headers=headers)
        final = response.json()["status"]
        history = await _history(client, headers, item_id)
        shipped = [e for e in history["entries"] if e["transaction_type"] == "shipment"]
        assert len(shipped) <= 1
        assert history["item"]["quantity"] == 100 - 10 * len(shipped)
        assert history["is_consistent"] is True
        # A cancel that won before shipping leaves the stock untouched
        if not shipped:
            assert final == "cancelled"
