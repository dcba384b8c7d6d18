"""Tests for the order status lifecycle."""

import pytest

from storefront.domain.enums import OrderStatus


@pytest.mark.parametrize(
    "current,new",
    [
        (OrderStatus.PENDING, OrderStatus.SHIPPED),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    ],
)
def test_legal_transitions(current, new):
    assert current.can_transition_to(new)


@pytest.mark.parametrize(
    "current,new",
    [
        (OrderStatus.PENDING, OrderStatus.DELIVERED),
        (OrderStatus.SHIPPED, OrderStatus.PENDING),
        (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
    ],
)
def test_illegal_transitions(current, new):
    assert not current.can_transition_to(new)


@pytest.mark.parametrize("status", list(OrderStatus))
def test_reapplying_same_status_is_allowed(status):
    assert status.can_transition_to(status)


def test_terminal_statuses():
    assert OrderStatus.DELIVERED.is_terminal
    assert OrderStatus.CANCELLED.is_terminal
    assert not OrderStatus.PENDING.is_terminal
    assert OrderStatus.DELIVERED.allowed_transitions() == frozenset()


def test_status_is_a_string():
    assert OrderStatus("PENDING") == "PENDING"
