"""Repository interfaces."""

from .order_repository import (
    SORTABLE_FIELDS,
    OrderPage,
    OrderQuery,
    OrderRepository,
    OrderStats,
)

__all__ = [
    "SORTABLE_FIELDS",
    "OrderPage",
    "OrderQuery",
    "OrderRepository",
    "OrderStats",
]
