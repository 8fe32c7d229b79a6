"""Integration tests for the order analytics endpoints via TestClient."""

from datetime import timedelta

import pytest


@pytest.fixture()
def orders(make_item, place_order, now):
    mug = make_item("Mug", description="Stoneware", original_price=10.0)
    placed = [
        place_order("user-a", mug, total_price=10.0, created_at=now - timedelta(days=index)) for index in range(3)
    ]
    place_order("user-b", mug, total_price=50.0, created_at=now)
    return placed


class TestOrderHistoryAPI:
    def test_history(self, client, orders):
        response = client.get("/orders/history", params={"limit": "2"}, headers={"X-User-Id": "user-a"})

        assert response.status_code == 200
        body = response.json()
        assert [order["id"] for order in body["orders"]] == [str(order.id) for order in orders[:2]]
        assert body["pagination"] == {"currentPage": 1, "totalPages": 2, "totalOrders": 3, "ordersPerPage": 2}

    def test_invalid_page_is_400(self, client, orders):
        response = client.get("/orders/history", params={"page": "abc"}, headers={"X-User-Id": "user-a"})

        assert response.status_code == 400
        assert response.json() == {
            "error": {"kind": "ValidationFailed", "message": "page: page must be a positive integer"}
        }

    def test_reversed_date_range_is_400(self, client, orders, now):
        response = client.get(
            "/orders/history",
            params={"start_date": now.isoformat(), "end_date": (now - timedelta(days=5)).isoformat()},
            headers={"X-User-Id": "user-a"},
        )
        assert response.status_code == 400

    def test_requires_caller(self, client):
        assert client.get("/orders/history").status_code == 422


class TestOrderDetailsAPI:
    def test_details(self, client, orders):
        order = orders[0]

        response = client.get(f"/orders/{order.id}", headers={"X-User-Id": "user-a"})

        assert response.status_code == 200
        cart = response.json()["order"]["cart"]
        assert cart[0]["product"]["description"] == "Stoneware"

    def test_other_users_order_is_404(self, client, orders):
        response = client.get(f"/orders/{orders[0].id}", headers={"X-User-Id": "user-b"})

        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NotFound"


class TestOrderStatsAPI:
    def test_stats(self, client, orders):
        response = client.get("/orders/stats", headers={"X-User-Id": "user-a"})

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["totalOrders"] == 3
        assert stats["ordersByStatus"] == {"Processing": 3}
        assert stats["totalSpent"] == pytest.approx(30.0)

    def test_stats_without_orders(self, client):
        response = client.get("/orders/stats", headers={"X-User-Id": "user-z"})
        assert response.json()["stats"] == {"totalOrders": 0, "ordersByStatus": {}, "totalSpent": 0, "recentOrders": 0}
