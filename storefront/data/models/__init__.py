"""Database models."""

from .base import Base
from .order_model import OrderItemModel, OrderModel, ShippingAddressModel

__all__ = ["Base", "OrderModel", "OrderItemModel", "ShippingAddressModel"]
