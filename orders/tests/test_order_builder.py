"""下单流程测试"""
from decimal import Decimal

import pytest
from django.db import transaction

from core.domain import (
    EmptyOrderException,
    InsufficientStockException,
    Money,
    ProductNotFoundException,
    ValidationException,
)
from orders.domain import OrderBuilder, OrderCreatedEvent, OrderLine, OrderStatus, StockRaceDetectedEvent
from orders.infrastructure.models.order_models import Order as OrderModel
from orders.tests.support import CONTACT_INFO, SHIPPING_ADDRESS, SnapshotProductRepository
from products.domain.entities import Product, StockEntry
from products.infrastructure.models.product_models import Product as ProductModel, ProductStock


def place(builder, owner, *lines):
    return builder.place_order(
        owner_id=owner.id,
        lines=[OrderLine(*line) for line in lines],
        shipping_address=SHIPPING_ADDRESS,
        contact_info=CONTACT_INFO,
    )


@pytest.mark.django_db
class TestPlaceOrder:

    def test_total_is_sum_of_snapshot_prices(self, order_builder, customer, tshirt, stock_of):
        result = place(order_builder, customer, (tshirt.id, "M", 3))

        order = result.order
        assert result.fully_applied
        assert order.total == Money("60.00", "CNY")
        assert order.status == OrderStatus.PENDING
        assert stock_of(tshirt, "M") == 2
        assert stock_of(tshirt, "S") == 4
        assert all(item.stock_applied for item in order.items)

    def test_total_across_multiple_products(self, order_builder, customer, tshirt, make_product):
        jeans = make_product(name="牛仔裤", price="199.50", stock={"L": 2})

        result = place(order_builder, customer, (tshirt.id, "S", 2), (jeans.id, "L", 1))

        assert result.order.total.amount == Decimal("239.50")
        assert [item.position for item in result.order.items] == [0, 1]
        assert set(result.products) == {str(tshirt.id), str(jeans.id)}

    def test_second_order_exceeding_remaining_stock_fails(self, order_builder, customer, tshirt, stock_of):
        place(order_builder, customer, (tshirt.id, "M", 3))

        with pytest.raises(InsufficientStockException) as exc_info:
            place(order_builder, customer, (tshirt.id, "M", 3))

        assert exc_info.value.available == 2
        assert OrderModel.objects.count() == 1
        assert stock_of(tshirt, "M") == 2

    def test_missing_size_entry_is_insufficient_stock(self, order_builder, customer, tshirt):
        with pytest.raises(InsufficientStockException) as exc_info:
            place(order_builder, customer, (tshirt.id, "L", 1))

        message = str(exc_info.value)
        assert str(tshirt.id) in message
        assert "L" in message
        assert exc_info.value.available == 0

    def test_one_invalid_line_rejects_whole_order(self, order_builder, customer, tshirt, make_product, stock_of):
        jeans = make_product(name="牛仔裤", price="199.50", stock={"L": 2})

        with pytest.raises(InsufficientStockException):
            place(order_builder, customer, (jeans.id, "L", 1), (tshirt.id, "M", 6))

        assert OrderModel.objects.count() == 0
        assert stock_of(jeans, "L") == 2
        assert stock_of(tshirt, "M") == 5

    def test_unknown_product_rejects_order(self, order_builder, customer, tshirt, stock_of):
        missing_id = "00000000-0000-0000-0000-000000000000"

        with pytest.raises(ProductNotFoundException):
            place(order_builder, customer, (tshirt.id, "M", 1), (missing_id, "M", 1))

        assert OrderModel.objects.count() == 0
        assert stock_of(tshirt, "M") == 5

    def test_empty_order_is_rejected(self, order_builder, customer):
        with pytest.raises(EmptyOrderException):
            order_builder.place_order(customer.id, [], SHIPPING_ADDRESS, CONTACT_INFO)

    def test_shipping_address_must_be_object(self, order_builder, customer, tshirt):
        with pytest.raises(ValidationException):
            order_builder.place_order(customer.id, [OrderLine(tshirt.id, "M", 1)], "上海", CONTACT_INFO)

    def test_duplicate_lines_are_checked_cumulatively(self, order_builder, customer, tshirt, stock_of):
        with pytest.raises(InsufficientStockException) as exc_info:
            place(order_builder, customer, (tshirt.id, "M", 3), (tshirt.id, "M", 3))

        assert exc_info.value.available == 2
        assert OrderModel.objects.count() == 0
        assert stock_of(tshirt, "M") == 5

    def test_duplicate_lines_within_stock_succeed(self, order_builder, customer, tshirt, stock_of):
        result = place(order_builder, customer, (tshirt.id, "M", 2), (tshirt.id, "M", 3))

        assert result.fully_applied
        assert len(result.order.items) == 2
        assert stock_of(tshirt, "M") == 0

    def test_price_change_does_not_affect_existing_order(self, placed_order, order_repository, tshirt):
        ProductModel.objects.filter(id=tshirt.id).update(price_amount=Decimal("99.00"))

        order = order_repository.get_by_id(placed_order.id)

        assert order.total == Money("60.00", "CNY")
        assert order.items[0].unit_price == Money("20.00", "CNY")


class TestOrderLine:

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_quantity_must_be_positive_integer(self, quantity):
        with pytest.raises(ValidationException):
            OrderLine("any", "M", quantity)

    def test_size_must_be_known(self):
        with pytest.raises(ValidationException):
            OrderLine("any", "XXXL", 1)


@pytest.mark.django_db
class TestStockRace:

    @pytest.fixture
    def stale_builder(self, factory, tshirt):
        # 快照中M码仍有5件，数据库实际只剩1件
        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=1)
        snapshot = Product(
            id=tshirt.id,
            name=tshirt.name,
            price=Money("20.00", "CNY"),
            stock=[StockEntry("M", 5), StockEntry("S", 4)],
        )
        return OrderBuilder(
            product_repository=SnapshotProductRepository([snapshot]),
            stock_adjuster=factory.product_factory.create_stock_adjuster(),
            order_repository=factory.create_order_repository(),
            transaction_manager=factory.create_transaction_manager(),
        )

    def test_race_keeps_order_and_reports_line(
        self, stale_builder, customer, tshirt, order_repository, stock_of, captured_events
    ):
        events, listen = captured_events
        listen(StockRaceDetectedEvent)

        result = place(stale_builder, customer, (tshirt.id, "S", 1), (tshirt.id, "M", 3))

        assert not result.fully_applied
        assert len(result.stock_races) == 1
        assert result.stock_races[0].size == "M"
        assert result.stock_races[0].quantity == 3

        saved = order_repository.get_by_id(result.order.id)
        assert saved is not None
        assert [item.stock_applied for item in saved.items] == [True, False]
        assert stock_of(tshirt, "S") == 3
        assert stock_of(tshirt, "M") == 1

        assert len(events) == 1
        assert events[0].order_id == result.order.id

    def test_reapply_stock_after_restock(self, stale_builder, order_builder, customer, tshirt, order_repository, stock_of):
        result = place(stale_builder, customer, (tshirt.id, "M", 3))
        assert [o.id for o in order_repository.find_unreconciled()] == [result.order.id]

        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=4)
        remaining = order_builder.reapply_stock(order_repository.get_by_id(result.order.id))

        assert remaining == []
        assert stock_of(tshirt, "M") == 1
        assert order_repository.find_unreconciled() == []
        assert order_repository.get_by_id(result.order.id).items[0].stock_applied

    def test_reapply_stock_still_short(self, stale_builder, order_builder, customer, tshirt, order_repository, stock_of):
        result = place(stale_builder, customer, (tshirt.id, "M", 3))

        remaining = order_builder.reapply_stock(order_repository.get_by_id(result.order.id))

        assert len(remaining) == 1
        assert stock_of(tshirt, "M") == 1

    def test_reapply_on_fully_applied_order_is_noop(self, placed_order, order_builder, tshirt, stock_of):
        assert order_builder.reapply_stock(placed_order) == []
        assert stock_of(tshirt, "M") == 2

    def test_reapply_skips_cancelled_order(self, stale_builder, order_builder, customer, tshirt, order_repository, stock_of):
        result = place(stale_builder, customer, (tshirt.id, "M", 3))
        order = order_repository.get_by_id(result.order.id)
        order.change_status(OrderStatus.CANCELLED)
        order_repository.update_status(order)

        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=5)
        remaining = order_builder.reapply_stock(order_repository.get_by_id(result.order.id))

        assert remaining == []
        assert stock_of(tshirt, "M") == 5
        assert order_repository.find_unreconciled() == []
        assert not order_repository.get_by_id(result.order.id).items[0].stock_applied

    def test_overlapping_reapply_decrements_once(self, stale_builder, order_builder, customer, tshirt, order_repository, stock_of):
        result = place(stale_builder, customer, (tshirt.id, "M", 3))
        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=10)

        first = order_repository.get_by_id(result.order.id)
        second = order_repository.get_by_id(result.order.id)

        assert order_builder.reapply_stock(first) == []
        assert order_builder.reapply_stock(second) == []
        assert stock_of(tshirt, "M") == 7
        assert second.items[0].stock_applied


@pytest.mark.django_db
class TestOrderCreatedEvent:

    def test_published_after_commit(self, order_builder, customer, tshirt, captured_events, django_capture_on_commit_callbacks):
        events, listen = captured_events
        listen(OrderCreatedEvent)

        with django_capture_on_commit_callbacks(execute=True):
            result = place(order_builder, customer, (tshirt.id, "M", 1))
            assert events == []

        assert len(events) == 1
        assert events[0].order_id == result.order.id

    def test_not_published_when_rolled_back(self, order_builder, customer, tshirt, captured_events, django_capture_on_commit_callbacks):
        events, listen = captured_events
        listen(OrderCreatedEvent)

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(RuntimeError):
                with transaction.atomic():
                    place(order_builder, customer, (tshirt.id, "M", 1))
                    raise RuntimeError("回滚")

        assert events == []
        assert not OrderModel.objects.exists()
