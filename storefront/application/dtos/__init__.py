from .identity import ADMIN_ROLE, CustomerIdentity
from .order_dto import (
    AdminCreateOrderRequest,
    CheckoutRequest,
    CheckoutResponse,
    CustomerDTO,
    CustomerInfo,
    ErrorResponse,
    MessageResponse,
    OrderDTO,
    OrderEnvelope,
    OrderItemDTO,
    OrderItemInput,
    OrderListDTO,
    OrderStatsDTO,
    OrderStatsEnvelope,
    OrderSummaryDTO,
    PaginationDTO,
    RecentOrdersEnvelope,
    ShippingAddressDTO,
    ShippingAddressInput,
    UpdateOrderStatusRequest,
)

__all__ = [
    "ADMIN_ROLE",
    "AdminCreateOrderRequest",
    "CheckoutRequest",
    "CheckoutResponse",
    "CustomerDTO",
    "CustomerIdentity",
    "CustomerInfo",
    "ErrorResponse",
    "MessageResponse",
    "OrderDTO",
    "OrderEnvelope",
    "OrderItemDTO",
    "OrderItemInput",
    "OrderListDTO",
    "OrderStatsDTO",
    "OrderStatsEnvelope",
    "OrderSummaryDTO",
    "PaginationDTO",
    "RecentOrdersEnvelope",
    "ShippingAddressDTO",
    "ShippingAddressInput",
    "UpdateOrderStatusRequest",
]
