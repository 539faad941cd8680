"""
订单领域模型包。
"""
from orders.domain.entities import (
    OrderStatus,
    ORDER_STATUSES,
    TERMINAL_STATUSES,
    ALLOWED_TRANSITIONS,
    OrderLine,
    OrderItem,
)
from orders.domain.aggregates import Order
from orders.domain.events import OrderCreatedEvent, OrderStatusChangedEvent, StockRaceDetectedEvent
from orders.domain.repositories import OrderRepository
from orders.domain.services import OrderBuilder, OrderPlacementResult, OrderStatusMachine, StockRaceReport

__all__ = [
    'OrderStatus',
    'ORDER_STATUSES',
    'TERMINAL_STATUSES',
    'ALLOWED_TRANSITIONS',
    'OrderLine',
    'OrderItem',
    'Order',
    'OrderCreatedEvent',
    'OrderStatusChangedEvent',
    'StockRaceDetectedEvent',
    'OrderRepository',
    'OrderBuilder',
    'OrderPlacementResult',
    'OrderStatusMachine',
    'StockRaceReport',
]
