"""Admin order management endpoints."""

import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.application.dtos import (
    AdminCreateOrderRequest,
    MessageResponse,
    OrderEnvelope,
    OrderListDTO,
    OrderStatsEnvelope,
    RecentOrdersEnvelope,
    UpdateOrderStatusRequest,
)
from storefront.application.services import OrderApplicationService
from storefront.domain.enums import OrderStatus
from storefront.domain.repositories import OrderQuery

from apps.api.deps import get_order_service, require_admin

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/admin/orders",
    tags=["admin-orders"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=OrderListDTO)
async def list_orders(
    search: Optional[str] = Query(default=None, description="Matches id, customer name or email"),
    status_filter: Optional[OrderStatus] = Query(default=None, alias="status"),
    sort_by: Literal["createdAt", "total", "status"] = Query(default="createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query(default="desc", alias="sortOrder"),
    date_from: Optional[datetime] = Query(default=None, alias="dateFrom"),
    date_to: Optional[datetime] = Query(default=None, alias="dateTo"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """List all orders with search, filters, sorting and pagination."""
    query = OrderQuery(
        status=status_filter,
        search=(search or "").strip() or None,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return await service.list_orders(query)


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: AdminCreateOrderRequest,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderEnvelope:
    """Create an order on behalf of a customer."""
    return OrderEnvelope(data=await service.create_order(request))


@router.get("/stats", response_model=OrderStatsEnvelope)
async def get_order_stats(
    date_from: Optional[datetime] = Query(default=None, alias="dateFrom"),
    date_to: Optional[datetime] = Query(default=None, alias="dateTo"),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderStatsEnvelope:
    """Order counts per status and revenue."""
    stats = await service.get_stats(date_from=date_from, date_to=date_to)
    return OrderStatsEnvelope(data=stats)


@router.get("/recent", response_model=RecentOrdersEnvelope)
async def get_recent_orders(
    limit: int = Query(default=5, ge=1, le=50),
    service: OrderApplicationService = Depends(get_order_service),
) -> RecentOrdersEnvelope:
    return RecentOrdersEnvelope(data=await service.get_recent(limit=limit))


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderEnvelope:
    """Get order by ID.

    Args:
        order_id: Order ID string
        service: OrderApplicationService instance

    Returns:
        OrderEnvelope with the full order
    """
    return OrderEnvelope(data=await service.get_order(order_id))


@router.put("/{order_id}", response_model=OrderEnvelope)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderEnvelope:
    """Change the status of an order."""
    return OrderEnvelope(data=await service.update_status(order_id, request.status))


@router.post("/{order_id}/cancel", response_model=OrderEnvelope)
async def cancel_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderEnvelope:
    """Cancel an order; items and shipping address are kept."""
    return OrderEnvelope(data=await service.cancel_order(order_id))


@router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
) -> MessageResponse:
    """Permanently delete an order with its items and shipping address."""
    await service.delete_order(order_id)
    logger.info(f"Admin deleted order {order_id}")
    return MessageResponse(message="Order deleted successfully")
