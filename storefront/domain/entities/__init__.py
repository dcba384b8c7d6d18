"""Domain entities."""

from .order import DEFAULT_COUNTRY, Order, OrderItem, ShippingAddress

__all__ = ["DEFAULT_COUNTRY", "Order", "OrderItem", "ShippingAddress"]
