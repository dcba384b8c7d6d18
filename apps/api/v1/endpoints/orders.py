"""Customer order endpoints for REST API."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.application.dtos import (
    CheckoutRequest,
    CheckoutResponse,
    CustomerIdentity,
    OrderListDTO,
    OrderSummaryDTO,
)
from storefront.application.services import OrderApplicationService
from storefront.domain.enums import OrderStatus

from apps.api.deps import enforce_order_rate_limit, get_current_identity, get_order_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: CheckoutRequest,
    identity: CustomerIdentity = Depends(enforce_order_rate_limit),
    service: OrderApplicationService = Depends(get_order_service),
) -> CheckoutResponse:
    """Place an order for the authenticated customer.

    Args:
        request: CheckoutRequest DTO
        identity: Caller, already counted against the order rate limit
        service: OrderApplicationService instance

    Returns:
        CheckoutResponse with the order summary
    """
    order = await service.checkout(identity, request)
    return CheckoutResponse(
        order=OrderSummaryDTO(
            id=order.id,
            total=order.total,
            status=order.status,
            created_at=order.created_at,
        )
    )


@router.get("", response_model=OrderListDTO)
async def list_my_orders(
    status_filter: Optional[OrderStatus] = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    identity: CustomerIdentity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """List the caller's own orders, newest first."""
    return await service.list_customer_orders(
        identity.user_id,
        status=status_filter,
        page=page,
        limit=limit,
    )
