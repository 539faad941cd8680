"""订单状态机测试"""
import uuid

import pytest

from core.domain import InvalidStatusTransitionException, OrderNotFoundException, ValidationException
from orders.domain import OrderStatus, OrderStatusChangedEvent, OrderStatusMachine
from orders.infrastructure.models.order_models import Order as OrderModel


@pytest.mark.django_db
class TestPermissiveStatusMachine:

    @pytest.fixture
    def machine(self, order_repository):
        return OrderStatusMachine(order_repository)

    @pytest.mark.parametrize("target", [
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    ])
    def test_any_enumerated_status_is_accepted(self, machine, placed_order, target):
        order = machine.transition(placed_order.id, target)

        assert order.status == target
        assert OrderModel.objects.get(id=placed_order.id).status == target

    def test_terminal_status_can_be_overwritten(self, machine, placed_order):
        machine.transition(placed_order.id, OrderStatus.DELIVERED)
        machine.transition(placed_order.id, OrderStatus.PENDING)

        assert OrderModel.objects.get(id=placed_order.id).status == OrderStatus.PENDING

    def test_same_status_twice_is_idempotent(
        self, machine, placed_order, captured_events, django_capture_on_commit_callbacks
    ):
        events, listen = captured_events
        listen(OrderStatusChangedEvent)

        with django_capture_on_commit_callbacks(execute=True):
            machine.transition(placed_order.id, OrderStatus.SHIPPED)
        first = OrderModel.objects.get(id=placed_order.id)
        with django_capture_on_commit_callbacks(execute=True):
            machine.transition(placed_order.id, OrderStatus.SHIPPED)
        second = OrderModel.objects.get(id=placed_order.id)

        assert second.status == first.status == OrderStatus.SHIPPED
        assert second.version == first.version
        assert len(events) == 1

    def test_items_and_total_are_untouched(self, machine, placed_order, order_repository):
        machine.transition(placed_order.id, OrderStatus.CANCELLED)

        order = order_repository.get_by_id(placed_order.id)
        assert order.total == placed_order.total
        assert [(i.size, i.quantity) for i in order.items] == [("M", 3)]

    def test_unknown_order_is_not_found(self, machine):
        with pytest.raises(OrderNotFoundException):
            machine.transition(uuid.uuid4(), OrderStatus.SHIPPED)

    def test_unknown_status_is_rejected(self, machine, placed_order):
        with pytest.raises(ValidationException):
            machine.transition(placed_order.id, "lost")


@pytest.mark.django_db
class TestStrictStatusMachine:

    @pytest.fixture
    def machine(self, order_repository):
        return OrderStatusMachine(order_repository, strict=True)

    def test_forward_transitions_are_allowed(self, machine, placed_order):
        for target in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            machine.transition(placed_order.id, target)

        assert OrderModel.objects.get(id=placed_order.id).status == OrderStatus.DELIVERED

    def test_skipping_a_step_is_rejected(self, machine, placed_order):
        with pytest.raises(InvalidStatusTransitionException):
            machine.transition(placed_order.id, OrderStatus.SHIPPED)

        assert OrderModel.objects.get(id=placed_order.id).status == OrderStatus.PENDING

    def test_terminal_status_is_final(self, machine, placed_order):
        machine.transition(placed_order.id, OrderStatus.CANCELLED)

        with pytest.raises(InvalidStatusTransitionException):
            machine.transition(placed_order.id, OrderStatus.PROCESSING)

    def test_same_status_is_allowed(self, machine, placed_order):
        order = machine.transition(placed_order.id, OrderStatus.PENDING)

        assert order.status == OrderStatus.PENDING
