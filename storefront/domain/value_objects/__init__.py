"""Domain value objects."""

from .value_objects import CENTS, ExecutionID, to_money

__all__ = [
    "CENTS",
    "ExecutionID",
    "to_money",
]
