"""Order status lifecycle."""
from enum import Enum
from typing import Dict, FrozenSet


class OrderStatus(str, Enum):
    """Permitted order statuses."""

    PENDING = "PENDING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """
        Check whether moving to ``new_status`` is a legal step.

        Re-applying the current status is always allowed (no-op).
        """
        if new_status == self:
            return True
        return new_status in _TRANSITIONS[self]

    def allowed_transitions(self) -> FrozenSet["OrderStatus"]:
        return _TRANSITIONS[self]


# PENDING -> SHIPPED -> DELIVERED, CANCELLED from any non-terminal state
_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}
