"""订单应用服务测试"""
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from core.domain import AuthorizationException, OrderNotFoundException
from core.infrastructure.cache import MemoryCacheService
from orders.application import (
    GetOrderQuery,
    ListAllOrdersQuery,
    ListUnreconciledOrdersQuery,
    ListUserOrdersQuery,
    OrderApplicationService,
    PlaceOrderCommand,
    ReconcileStockCommand,
    UpdateOrderStatusCommand,
)
from orders.domain import OrderStatus
from orders.infrastructure.models.order_models import OrderItem as OrderItemModel
from orders.tests.support import CONTACT_INFO, SHIPPING_ADDRESS
from products.infrastructure.models.product_models import ProductStock


@pytest.fixture
def cache():
    return MemoryCacheService()


@pytest.fixture
def service(factory, cache):
    return OrderApplicationService(
        order_builder=factory.create_order_builder(),
        status_machine=factory.create_status_machine(),
        order_repository=factory.create_order_repository(),
        product_repository=factory.product_factory.create_product_repository(),
        cache_service=cache,
        cache_timeout=300,
    )


@pytest.fixture
def unapplied_order(placed_order):
    """库存未扣减的订单"""
    OrderItemModel.objects.filter(order_id=placed_order.id).update(stock_applied=False)
    return placed_order


@pytest.mark.django_db
class TestOrderApplicationService:

    def test_place_order_returns_enriched_dto(self, service, customer, tshirt):
        result = service.place_order(PlaceOrderCommand(
            user_id=customer.id,
            items=[{"product_id": str(tshirt.id), "size": "M", "quantity": 3}],
            shipping_address=SHIPPING_ADDRESS,
            contact_info=CONTACT_INFO,
        ))

        assert result.stock_warnings == []
        assert result.order.total == {"amount": "60.00", "currency": "CNY"}
        assert result.order.items[0].product.name == "基础T恤"
        assert result.order.fully_applied

    def test_get_order_is_cached_and_invalidated_on_status_change(self, service, cache, customer, placed_order):
        query = GetOrderQuery(order_id=placed_order.id, user_id=customer.id)
        service.get_order(query)
        assert cache.get(f"order:{placed_order.id}") is not None

        service.update_order_status(UpdateOrderStatusCommand(order_id=placed_order.id, status=OrderStatus.SHIPPED))

        assert cache.get(f"order:{placed_order.id}") is None
        assert service.get_order(query).status == OrderStatus.SHIPPED

    def test_other_user_cannot_read_order(self, service, other_customer, customer, placed_order):
        with pytest.raises(AuthorizationException):
            service.get_order(GetOrderQuery(order_id=placed_order.id, user_id=other_customer.id))

        # 缓存命中时同样校验
        service.get_order(GetOrderQuery(order_id=placed_order.id, user_id=customer.id))
        with pytest.raises(AuthorizationException):
            service.get_order(GetOrderQuery(order_id=placed_order.id, user_id=other_customer.id))

    def test_admin_can_read_any_order(self, service, staff_user, placed_order):
        order = service.get_order(GetOrderQuery(order_id=placed_order.id, user_id=staff_user.id, is_admin=True))

        assert order.id == str(placed_order.id)

    def test_get_unknown_order(self, service, customer):
        with pytest.raises(OrderNotFoundException):
            service.get_order(GetOrderQuery(order_id="not-a-uuid", user_id=customer.id))

    def test_list_user_orders_only_returns_own(self, service, customer, other_customer, placed_order):
        assert [o.id for o in service.list_user_orders(ListUserOrdersQuery(user_id=customer.id))] == [str(placed_order.id)]
        assert service.list_user_orders(ListUserOrdersQuery(user_id=other_customer.id)) == []
        assert len(service.list_all_orders(ListAllOrdersQuery())) == 1

    def test_list_unreconciled_orders(self, service, unapplied_order):
        orders = service.list_unreconciled_orders(ListUnreconciledOrdersQuery())

        assert [o.id for o in orders] == [str(unapplied_order.id)]
        assert orders[0].fully_applied is False

    def test_reconcile_stock_applies_pending_lines(self, service, cache, customer, unapplied_order, tshirt, stock_of):
        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=5)
        service.get_order(GetOrderQuery(order_id=unapplied_order.id, user_id=customer.id))

        results = service.reconcile_stock(ReconcileStockCommand())

        assert len(results) == 1
        assert results[0].resolved
        assert results[0].pending_before == 1
        assert stock_of(tshirt, "M") == 2
        assert cache.get(f"order:{unapplied_order.id}") is None

    def test_reconcile_dry_run_changes_nothing(self, service, unapplied_order, tshirt, stock_of):
        results = service.reconcile_stock(ReconcileStockCommand(dry_run=True))

        assert results[0].pending_before == 1
        assert results[0].remaining_races[0]["size"] == "M"
        assert stock_of(tshirt, "M") == 2

    def test_reconcile_skips_cancelled_order(self, service, unapplied_order, tshirt, stock_of):
        service.update_order_status(UpdateOrderStatusCommand(order_id=unapplied_order.id, status=OrderStatus.CANCELLED))
        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=5)

        assert service.reconcile_stock(ReconcileStockCommand()) == []
        assert stock_of(tshirt, "M") == 5

        results = service.reconcile_stock(ReconcileStockCommand(order_id=unapplied_order.id))

        assert results[0].skipped
        assert results[0].pending_before == 1
        assert stock_of(tshirt, "M") == 5

    def test_reconcile_unknown_order(self, service):
        with pytest.raises(OrderNotFoundException):
            service.reconcile_stock(ReconcileStockCommand(order_id="00000000-0000-0000-0000-000000000000"))


@pytest.mark.django_db
class TestReconcileStockCommand:

    def test_nothing_to_reconcile(self, placed_order):
        out = StringIO()
        call_command('reconcile_stock', stdout=out)

        assert "没有需要对账的订单" in out.getvalue()

    def test_reports_lines_still_short(self, unapplied_order):
        out = StringIO()
        call_command('reconcile_stock', stdout=out)

        assert "仍有 1 行库存不足" in out.getvalue()

    def test_reconciles_single_order(self, unapplied_order, tshirt, stock_of):
        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=3)
        out = StringIO()
        call_command('reconcile_stock', '--order', str(unapplied_order.id), stdout=out)

        assert "已扣减 1 行" in out.getvalue()
        assert stock_of(tshirt, "M") == 0

    def test_unknown_order_is_an_error(self, db):
        with pytest.raises(CommandError):
            call_command('reconcile_stock', '--order', '00000000-0000-0000-0000-000000000000')

    def test_cancelled_order_is_skipped(self, service, unapplied_order, tshirt, stock_of):
        service.update_order_status(UpdateOrderStatusCommand(order_id=unapplied_order.id, status=OrderStatus.CANCELLED))
        ProductStock.objects.filter(product=tshirt, size="M").update(quantity=5)

        out = StringIO()
        call_command('reconcile_stock', stdout=out)
        assert "没有需要对账的订单" in out.getvalue()

        out = StringIO()
        call_command('reconcile_stock', '--order', str(unapplied_order.id), stdout=out)
        assert "已取消，跳过" in out.getvalue()
        assert stock_of(tshirt, "M") == 5
