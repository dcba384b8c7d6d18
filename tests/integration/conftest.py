"""Pytest configuration and fixtures for integration tests."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import get_order_rate_limiter, get_order_service, get_session_factory
from apps.api.main import app
from storefront.application.services import OrderApplicationService
from storefront.infrastructure.rate_limit import InMemoryRateLimitStore, RateLimiter
from storefront.settings.sections import OrderSettings


@pytest.fixture
def rate_limiter() -> RateLimiter:
    """Fresh order limiter per test: 3 requests per 60 seconds."""
    return RateLimiter(store=InMemoryRateLimitStore(), window_seconds=60, max_requests=3)


@pytest.fixture
def test_client(rate_limiter) -> Generator[TestClient, None, None]:
    """Create FastAPI test client backed by a fresh in-memory database.

    Entering the client runs the startup hook, which creates the tables on
    the in-memory engine; leaving it disposes the engine again.
    """

    def override_get_order_service():
        return OrderApplicationService(
            session_factory=get_session_factory(),
            settings=OrderSettings(trust_client_total=True, enforce_status_transitions=True),
        )

    # Override dependencies
    app.dependency_overrides[get_order_service] = override_get_order_service
    app.dependency_overrides[get_order_rate_limiter] = lambda: rate_limiter

    with TestClient(app) as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()


@pytest.fixture
def customer_headers() -> dict:
    return {
        "X-User-Id": "user-1",
        "X-User-Name": "Jane Doe",
        "X-User-Email": "jane@example.com",
        "X-User-Role": "USER",
    }


@pytest.fixture
def admin_headers() -> dict:
    return {
        "X-User-Id": "admin-1",
        "X-User-Name": "Store Admin",
        "X-User-Email": "admin@example.com",
        "X-User-Role": "ADMIN",
    }


@pytest.fixture
def order_payload() -> dict:
    return {
        "items": [
            {
                "productId": "p1",
                "productTitle": "Mug",
                "quantity": 2,
                "price": 10.00,
                "image": "https://cdn.example.com/mug.png",
            }
        ],
        "total": 20.00,
        "shippingAddress": {
            "address": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
        },
    }
