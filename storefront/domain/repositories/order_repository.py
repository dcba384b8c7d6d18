"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from ..entities.order import Order
from ..enums import OrderStatus


SORTABLE_FIELDS = ("createdAt", "total", "status")


@dataclass(frozen=True)
class OrderQuery:
    """Filter, sort and page selection for order listings."""

    customer_id: Optional[str] = None
    status: Optional[OrderStatus] = None
    search: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field: {self.sort_by}")
        if self.sort_order not in ("asc", "desc"):
            raise ValueError(f"Unsupported sort order: {self.sort_order}")
        if self.page < 1 or self.limit < 1:
            raise ValueError("page and limit must be positive")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class OrderPage:
    """One page of orders plus the unpaged match count."""

    orders: List[Order]
    total: int


@dataclass
class OrderStats:
    """Order counts per status and revenue of non-cancelled orders."""

    total: int = 0
    by_status: Dict[OrderStatus, int] = field(default_factory=dict)
    revenue: Decimal = Decimal("0.00")


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Persist a new order with its shipping address and items.

        Args:
            order: Order aggregate without an id

        Returns:
            The order with database-assigned identifiers
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_page(self, query: OrderQuery) -> OrderPage:
        """List orders matching ``query``.

        Returns:
            Requested page and total match count
        """
        pass

    @abstractmethod
    async def update_status(self, order: Order) -> None:
        """Persist the status currently held by ``order``."""
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> bool:
        """Hard delete an order with its items and shipping address.

        Returns:
            True if a row was deleted, False if the order did not exist
        """
        pass

    @abstractmethod
    async def stats(
        self,
        customer_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> OrderStats:
        """Aggregate counts and revenue."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int = 5) -> List[Order]:
        """Newest orders first."""
        pass
