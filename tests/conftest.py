"""Shared pytest configuration and fixtures."""

import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Point every settings section at throwaway backends before anything imports them
os.environ["DB_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "true"
os.environ["RATE_LIMIT_BACKEND"] = "memory"

from storefront.application.dtos import (  # noqa: E402
    CheckoutRequest,
    CustomerIdentity,
)
from storefront.application.services import OrderApplicationService  # noqa: E402
from storefront.data.models import Base  # noqa: E402
from storefront.settings.sections import OrderSettings  # noqa: E402


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    yield session_factory


@pytest.fixture
def order_settings() -> OrderSettings:
    return OrderSettings(
        trust_client_total=True,
        enforce_status_transitions=True,
        default_country="United States",
    )


@pytest_asyncio.fixture
async def order_service(test_session_factory, order_settings) -> OrderApplicationService:
    return OrderApplicationService(test_session_factory, settings=order_settings)


@pytest.fixture
def customer() -> CustomerIdentity:
    return CustomerIdentity(
        user_id="user-1",
        name="Jane Doe",
        email="jane@example.com",
        role="USER",
    )


def _make_checkout(
    total: str = "20.00",
    quantity: int = 2,
    price: str = "10.00",
    product_id: str = "p1",
    **overrides,
) -> CheckoutRequest:
    """Build a valid checkout body; keyword overrides replace top-level keys."""
    body = {
        "items": [
            {
                "productId": product_id,
                "productTitle": "Mug",
                "quantity": quantity,
                "price": price,
                "image": "https://cdn.example.com/mug.png",
            }
        ],
        "total": total,
        "shippingAddress": {
            "address": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
        },
    }
    body.update(overrides)
    return CheckoutRequest.model_validate(body)


@pytest.fixture
def make_checkout():
    """Factory for valid checkout requests."""
    return _make_checkout
