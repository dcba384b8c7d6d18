"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union
from uuid import UUID, uuid4


CENTS = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Normalize a monetary amount to a two-place Decimal.

    CRITICAL: floats go through ``str`` first so 10.1 stays 10.10.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for tracing one unit of work through the logs."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)
