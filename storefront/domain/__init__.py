"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderItem, ShippingAddress
from .enums import OrderStatus
from .repositories import OrderQuery, OrderRepository
from .value_objects import ExecutionID

__all__ = [
    "ExecutionID",
    "Order",
    "OrderItem",
    "OrderQuery",
    "OrderRepository",
    "OrderStatus",
    "ShippingAddress",
]
