from storefront.api.v1.orders.state_machine import OrderStateMachine
from storefront.models.order import OrderStatus


machine = OrderStateMachine()


def test_pending_can_complete_or_cancel():
    assert machine.can_transition(OrderStatus.PENDING, OrderStatus.COMPLETED)
    assert machine.can_transition(OrderStatus.PENDING, OrderStatus.CANCELLED)


def test_completed_and_cancelled_are_terminal():
    for status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED):
        for target in OrderStatus:
            assert not machine.can_transition(status, target)


def test_completion_cannot_be_set_manually():
    assert not machine.can_set_manually(OrderStatus.PENDING, OrderStatus.COMPLETED)
    assert machine.can_set_manually(OrderStatus.PENDING, OrderStatus.CANCELLED)
    assert not machine.can_set_manually(OrderStatus.COMPLETED, OrderStatus.CANCELLED)


def test_only_pending_can_be_cancelled_manually():
    assert machine.can_set_manually(OrderStatus.PENDING, OrderStatus.CANCELLED)
    assert not machine.can_set_manually(OrderStatus.COMPLETED, OrderStatus.CANCELLED)
    assert not machine.can_set_manually(OrderStatus.CANCELLED, OrderStatus.CANCELLED)
