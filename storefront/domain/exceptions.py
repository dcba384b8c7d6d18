"""
Domain exceptions.

Raised by the domain and application layers; the HTTP layer maps each
one to a status code and a ``{success: false, error}`` envelope.
"""
from typing import Optional


class OrderError(Exception):
    """Base class for order related failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(OrderError):
    """Request data rejected before anything is persisted."""


class OrderNotFoundError(OrderError):
    """Referenced order does not exist."""

    def __init__(self, order_id: str):
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


class InvalidStatusTransitionError(OrderError):
    """Requested status is not a legal successor of the current one."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change order status from {current} to {requested}"
        )
        self.current = current
        self.requested = requested


class OrderPersistenceError(OrderError):
    """
    Database failure inside an order transaction.

    The transaction has been rolled back; ``message`` is safe to show to
    callers, ``cause`` carries the original exception for logging.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
