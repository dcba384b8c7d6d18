"""Integration tests for customer Orders API endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient


def test_create_order_success(test_client: TestClient, customer_headers, order_payload, admin_headers):
    """Test POST /api/orders - successful checkout."""
    response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 201, f"Expected 201, got {response.status_code}: {response.text}"

    response_data = response.json()
    assert response_data["success"] is True
    order = response_data["order"]
    assert order["id"]
    assert order["status"] == "PENDING"
    assert Decimal(order["total"]) == Decimal("20.00")
    assert order["createdAt"]

    # Verify data persistence by retrieving the order
    get_response = test_client.get(f"/api/admin/orders/{order['id']}", headers=admin_headers)
    assert get_response.status_code == 200
    stored = get_response.json()["data"]
    assert stored["customerId"] == "user-1"
    assert stored["customerName"] == "Jane Doe"
    assert stored["shippingAddress"]["street"] == "1 Main St"
    assert stored["shippingAddress"]["country"] == "United States"
    assert stored["shippingAddressId"] == stored["shippingAddress"]["id"]
    assert len(stored["items"]) == 1
    assert stored["items"][0]["quantity"] == 2
    assert Decimal(stored["items"][0]["price"]) == Decimal("10.00")


def test_create_order_requires_identity(test_client: TestClient, order_payload):
    response = test_client.post("/api/orders", json=order_payload)

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized"}


def test_create_order_without_items(test_client: TestClient, customer_headers, order_payload):
    order_payload["items"] = []

    response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Order items are required"}


def test_create_order_without_total(test_client: TestClient, customer_headers, order_payload):
    del order_payload["total"]

    response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Valid order total is required"


def test_create_order_without_address(test_client: TestClient, customer_headers, order_payload):
    del order_payload["shippingAddress"]

    response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Complete shipping address is required"


def test_create_order_with_invalid_item(test_client: TestClient, customer_headers, order_payload):
    order_payload["items"][0]["quantity"] = 0

    response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "quantity" in body["error"]


def test_rate_limit_blocks_fourth_order(test_client: TestClient, customer_headers, order_payload):
    """Three orders per minute are accepted; the fourth gets 429."""
    for _ in range(3):
        response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)
        assert response.status_code == 201

    response = test_client.post("/api/orders", json=order_payload, headers=customer_headers)

    assert response.status_code == 429
    assert response.json()["success"] is False
    assert response.headers["X-RateLimit-Remaining"] == "0"
    assert int(response.headers["X-RateLimit-Reset"]) > 0


def test_rate_limit_is_per_client_ip(test_client: TestClient, customer_headers, order_payload):
    for _ in range(3):
        test_client.post(
            "/api/orders",
            json=order_payload,
            headers={**customer_headers, "X-Forwarded-For": "10.0.0.1, 172.16.0.1"},
        )

    response = test_client.post(
        "/api/orders",
        json=order_payload,
        headers={**customer_headers, "X-Forwarded-For": "10.0.0.2"},
    )

    assert response.status_code == 201


def test_list_own_orders(test_client: TestClient, customer_headers, order_payload):
    created = test_client.post("/api/orders", json=order_payload, headers=customer_headers).json()
    test_client.post(
        "/api/orders",
        json=order_payload,
        headers={**customer_headers, "X-User-Id": "someone-else"},
    )

    response = test_client.get("/api/orders", headers=customer_headers)

    assert response.status_code == 200
    data = response.json()
    assert [order["id"] for order in data["orders"]] == [created["order"]["id"]]
    assert data["orders"][0]["items"][0]["productTitle"] == "Mug"
    assert data["pagination"] == {
        "total": 1,
        "pages": 1,
        "currentPage": 1,
        "limit": 10,
        "hasNext": False,
        "hasPrev": False,
    }


def test_list_own_orders_requires_identity(test_client: TestClient):
    response = test_client.get("/api/orders")

    assert response.status_code == 401


def test_list_own_orders_rejects_bad_status(test_client: TestClient, customer_headers):
    response = test_client.get("/api/orders", params={"status": "LOST"}, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("status")


def test_health_check(test_client: TestClient):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
