"""Integration tests for admin order management endpoints."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


def _place_order(client: TestClient, headers: dict, payload: dict, total: str = None) -> str:
    if total is not None:
        payload = {
            **payload,
            "total": total,
            "items": [{**payload["items"][0], "quantity": 1, "price": total}],
        }
    response = client.post("/api/orders", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["order"]["id"]


def _customer(index: int) -> dict:
    return {"X-User-Id": f"user-{index}", "X-User-Name": f"Customer {index}", "X-User-Email": f"c{index}@example.com"}


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/admin/orders"),
        ("get", "/api/admin/orders/stats"),
        ("get", "/api/admin/orders/some-id"),
        ("delete", "/api/admin/orders/some-id"),
    ],
)
def test_admin_endpoints_require_admin_role(test_client: TestClient, customer_headers, method, path):
    response = getattr(test_client, method)(path, headers=customer_headers)

    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "Forbidden"}


def test_admin_endpoints_require_identity(test_client: TestClient):
    response = test_client.get("/api/admin/orders")

    assert response.status_code == 401


def test_get_order_not_found(test_client: TestClient, admin_headers):
    response = test_client.get("/api/admin/orders/does-not-exist", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Order not found"}


def test_list_sorted_and_paginated(test_client: TestClient, admin_headers, order_payload):
    for index in range(1, 5):
        _place_order(test_client, _customer(index), order_payload, total=f"{index * 5}.00")

    response = test_client.get(
        "/api/admin/orders",
        params={"sortBy": "total", "sortOrder": "desc", "page": 2, "limit": 3},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert [Decimal(order["total"]) for order in data["orders"]] == [Decimal("5.00")]
    assert data["pagination"]["total"] == 4
    assert data["pagination"]["pages"] == 2
    assert data["pagination"]["hasPrev"] is True
    assert data["pagination"]["hasNext"] is False


def test_list_search_and_status_filter(test_client: TestClient, admin_headers, order_payload):
    first = _place_order(test_client, _customer(1), order_payload)
    second = _place_order(test_client, _customer(2), order_payload)
    test_client.post(f"/api/admin/orders/{second}/cancel", headers=admin_headers)

    by_email = test_client.get("/api/admin/orders", params={"search": "C1@EXAMPLE"}, headers=admin_headers)
    assert [order["id"] for order in by_email.json()["orders"]] == [first]

    cancelled = test_client.get("/api/admin/orders", params={"status": "CANCELLED"}, headers=admin_headers)
    assert [order["id"] for order in cancelled.json()["orders"]] == [second]


def test_list_rejects_unknown_sort_field(test_client: TestClient, admin_headers):
    response = test_client.get("/api/admin/orders", params={"sortBy": "customerEmail"}, headers=admin_headers)

    assert response.status_code == 400


def test_admin_create_order(test_client: TestClient, admin_headers, order_payload):
    payload = {
        "customerId": "user-7",
        "customerName": "Walk-in",
        "customerEmail": "walkin@example.com",
        "items": order_payload["items"],
        "shippingAddress": {"street": "5 Pier Rd", "city": "Portsmouth"},
    }

    response = test_client.post("/api/admin/orders", json=payload, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["customer"] == {"id": "user-7", "name": "Walk-in", "email": "walkin@example.com"}
    assert Decimal(data["total"]) == Decimal("20.00")
    assert data["status"] == "PENDING"


def test_update_status_flow(test_client: TestClient, admin_headers, customer_headers, order_payload):
    order_id = _place_order(test_client, customer_headers, order_payload)

    shipped = test_client.put(f"/api/admin/orders/{order_id}", json={"status": "SHIPPED"}, headers=admin_headers)
    assert shipped.status_code == 200
    assert shipped.json()["data"]["status"] == "SHIPPED"

    backwards = test_client.put(f"/api/admin/orders/{order_id}", json={"status": "PENDING"}, headers=admin_headers)
    assert backwards.status_code == 400
    assert backwards.json()["error"] == "Cannot change order status from SHIPPED to PENDING"


def test_update_status_rejects_unknown_value(test_client: TestClient, admin_headers, customer_headers, order_payload):
    order_id = _place_order(test_client, customer_headers, order_payload)

    response = test_client.put(f"/api/admin/orders/{order_id}", json={"status": "LOST"}, headers=admin_headers)

    assert response.status_code == 400


def test_update_status_missing_order(test_client: TestClient, admin_headers):
    response = test_client.put("/api/admin/orders/missing", json={"status": "SHIPPED"}, headers=admin_headers)

    assert response.status_code == 404


def test_cancel_keeps_order_details(test_client: TestClient, admin_headers, customer_headers, order_payload):
    order_id = _place_order(test_client, customer_headers, order_payload)

    response = test_client.post(f"/api/admin/orders/{order_id}/cancel", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "CANCELLED"
    assert len(data["items"]) == 1
    assert data["shippingAddress"]["city"] == "Springfield"


def test_delete_order(test_client: TestClient, admin_headers, customer_headers, order_payload):
    order_id = _place_order(test_client, customer_headers, order_payload)

    response = test_client.delete(f"/api/admin/orders/{order_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Order deleted successfully"}
    assert test_client.get(f"/api/admin/orders/{order_id}", headers=admin_headers).status_code == 404
    assert test_client.delete(f"/api/admin/orders/{order_id}", headers=admin_headers).status_code == 404


def test_stats_and_recent(test_client: TestClient, admin_headers, order_payload):
    first = _place_order(test_client, _customer(1), order_payload, total="10.00")
    second = _place_order(test_client, _customer(2), order_payload, total="15.00")
    test_client.post(f"/api/admin/orders/{second}/cancel", headers=admin_headers)

    stats = test_client.get("/api/admin/orders/stats", headers=admin_headers)

    assert stats.status_code == 200
    data = stats.json()["data"]
    assert data["total"] == 2
    assert data["pending"] == 1
    assert data["cancelled"] == 1
    assert Decimal(data["revenue"]) == Decimal("10.00")

    recent = test_client.get("/api/admin/orders/recent", params={"limit": 1}, headers=admin_headers)
    assert recent.status_code == 200
    assert len(recent.json()["data"]) == 1
    assert recent.json()["data"][0]["id"] in {first, second}
