"""订单测试夹具"""
import pytest

from core.domain import DomainEvents
from orders.domain import OrderLine
from orders.infrastructure.factory import OrderInfrastructureFactory
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
from orders.tests.support import CONTACT_INFO, SHIPPING_ADDRESS


@pytest.fixture
def factory():
    return OrderInfrastructureFactory()


@pytest.fixture
def order_builder(factory):
    return factory.create_order_builder()


@pytest.fixture
def order_repository():
    return DjangoOrderRepository()


@pytest.fixture
def tshirt(make_product):
    """价格20.00，M码库存5件，S码库存4件"""
    return make_product(name="基础T恤", price="20.00", stock={"M": 5, "S": 4})


@pytest.fixture
def placed_order(order_builder, customer, tshirt):
    """顾客已下单 M码 x3"""
    result = order_builder.place_order(
        owner_id=customer.id,
        lines=[OrderLine(tshirt.id, "M", 3)],
        shipping_address=SHIPPING_ADDRESS,
        contact_info=CONTACT_INFO,
    )
    return result.order


@pytest.fixture
def captured_events():
    """记录发布的领域事件"""
    events = []

    def _capture(event):
        events.append(event)

    registered = []

    def _listen(event_type):
        DomainEvents.register(event_type, _capture)
        registered.append(event_type)

    yield events, _listen
    for event_type in registered:
        DomainEvents.unregister(event_type, _capture)
