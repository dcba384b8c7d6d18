"""FastAPI dependencies for dependency injection."""

import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.application.dtos import CustomerIdentity
from storefront.application.services import OrderApplicationService
from storefront.infrastructure.database import get_session_factory as _get_session_factory
from storefront.infrastructure.rate_limit import (
    RateLimiter,
    create_order_rate_limiter,
    rate_limit_headers,
)
from storefront.settings import get_app_settings

# Load .env before any settings section is instantiated
load_dotenv()

logger = logging.getLogger(__name__)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    return _get_session_factory()


def get_order_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> OrderApplicationService:
    """Get OrderApplicationService instance.

    Returns:
        OrderApplicationService instance
    """
    return OrderApplicationService(session_factory, settings=get_app_settings().orders)


# =============================================================================
# IDENTITY
# =============================================================================

def get_current_identity(
    x_user_id: Optional[str] = Header(default=None),
    x_user_name: Optional[str] = Header(default=None),
    x_user_email: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CustomerIdentity:
    """Identity forwarded by the authenticating gateway.

    Raises:
        HTTPException: 401 if no user id was forwarded
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return CustomerIdentity(
        user_id=x_user_id.strip(),
        name=x_user_name or None,
        email=x_user_email or None,
        role=(x_user_role or "USER").upper(),
    )


def require_admin(identity: CustomerIdentity = Depends(get_current_identity)) -> CustomerIdentity:
    """Admin-only guard.

    Raises:
        HTTPException: 403 for any role other than ADMIN
    """
    if not identity.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return identity


# =============================================================================
# RATE LIMITING (singleton instance)
# =============================================================================

_order_rate_limiter: Optional[RateLimiter] = None


def get_order_rate_limiter() -> RateLimiter:
    """Get the process-wide order creation limiter.

    Returns:
        RateLimiter instance
    """
    global _order_rate_limiter

    if _order_rate_limiter is None:
        _order_rate_limiter = create_order_rate_limiter(get_app_settings().rate_limit)

    return _order_rate_limiter


async def close_order_rate_limiter() -> None:
    global _order_rate_limiter

    if _order_rate_limiter is not None:
        await _order_rate_limiter.store.close()
        _order_rate_limiter = None


def client_ip(request: Request) -> str:
    """Best-effort client address behind proxies."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


async def enforce_order_rate_limit(
    request: Request,
    identity: CustomerIdentity = Depends(get_current_identity),
    limiter: RateLimiter = Depends(get_order_rate_limiter),
) -> CustomerIdentity:
    """Count one order creation attempt for this caller.

    Raises:
        HTTPException: 429 with rate limit headers once the window is used up
    """
    key = f"{identity.user_id}-{client_ip(request)}"
    result = await limiter.hit(key)

    if not result.allowed:
        logger.warning(f"Rate limit exceeded for {key}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please try again later.",
            headers=rate_limit_headers(result),
        )

    return identity
