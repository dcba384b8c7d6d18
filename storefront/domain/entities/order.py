"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from ..enums import OrderStatus
from ..exceptions import InvalidStatusTransitionError, OrderValidationError
from ..value_objects import to_money


DEFAULT_COUNTRY = "United States"


@dataclass(frozen=True)
class ShippingAddress:
    """Delivery address owned by exactly one order."""

    street: str
    city: str
    state: str = ""
    zip_code: str = ""
    country: str = DEFAULT_COUNTRY
    id: Optional[str] = None
    order_id: Optional[str] = None

    def __post_init__(self):
        if not self.street or not self.street.strip():
            raise OrderValidationError("Complete shipping address is required")
        if not self.city or not self.city.strip():
            raise OrderValidationError("Complete shipping address is required")


@dataclass(frozen=True)
class OrderItem:
    """
    Line item captured at purchase time.

    ``product_title``, ``price`` and ``image`` are snapshots; they are never
    refreshed from the catalog, so past orders keep their historical values.
    """

    product_id: str
    product_title: str
    quantity: int
    price: Decimal
    image: str
    id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise OrderValidationError(
                f"Quantity must be a positive integer, got: {self.quantity}"
            )
        object.__setattr__(self, "price", to_money(self.price))
        if self.price <= 0:
            raise OrderValidationError(f"Price must be positive, got: {self.price}")

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price * self.quantity)


@dataclass
class Order:
    """
    Order aggregate root.

    Groups the customer snapshot, the computed total, the status, one
    shipping address and one or more item snapshots.
    """

    customer_id: str
    customer_name: str
    customer_email: str
    total: Decimal
    shipping_address: ShippingAddress
    items: List[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING

    # Assigned by persistence
    id: Optional[str] = None
    shipping_address_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.total = to_money(self.total)
        if not isinstance(self.status, OrderStatus):
            self.status = OrderStatus(self.status)

    @classmethod
    def place(
        cls,
        customer_id: str,
        customer_name: str,
        customer_email: str,
        items: Sequence[OrderItem],
        shipping_address: ShippingAddress,
        total: Optional[Decimal] = None,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> "Order":
        """
        Factory for a new, not yet persisted order.

        Args:
            customer_id: Identity of the purchasing customer
            customer_name: Customer name snapshot
            customer_email: Customer email snapshot
            items: Item snapshots (at least one)
            shipping_address: Delivery address
            total: Caller supplied total; computed from the items when None
            status: Initial status

        Raises:
            OrderValidationError: If there are no items or the total is not positive
        """
        if not items:
            raise OrderValidationError("Order items are required")

        order = cls(
            customer_id=customer_id,
            customer_name=customer_name,
            customer_email=customer_email,
            total=Decimal("0"),
            shipping_address=shipping_address,
            items=list(items),
            status=status,
        )
        order.total = to_money(total) if total is not None else order.calculate_items_total()

        if order.total <= 0:
            raise OrderValidationError("Valid order total is required")

        return order

    def calculate_items_total(self) -> Decimal:
        """Sum of ``quantity * price`` over all items."""
        return to_money(sum((item.line_total for item in self.items), Decimal("0")))

    def has_total_mismatch(self) -> bool:
        return self.total != self.calculate_items_total()

    def change_status(self, new_status: OrderStatus, enforce: bool = True) -> OrderStatus:
        """
        Move the order to ``new_status``.

        Args:
            new_status: Target status
            enforce: When False the status is overwritten without checking
                the lifecycle

        Returns:
            The previous status

        Raises:
            InvalidStatusTransitionError: If enforcing and the step is illegal
        """
        new_status = OrderStatus(new_status)
        previous = self.status

        if enforce and not previous.can_transition_to(new_status):
            raise InvalidStatusTransitionError(previous.value, new_status.value)

        self.status = new_status
        return previous

    def cancel(self, enforce: bool = True) -> OrderStatus:
        """Soft-terminate the order; items and address are kept."""
        return self.change_status(OrderStatus.CANCELLED, enforce=enforce)
