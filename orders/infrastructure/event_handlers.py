"""
订单领域事件处理器。
"""
from loguru import logger

from core.domain import DomainEvents
from orders.domain.events import OrderCreatedEvent, OrderStatusChangedEvent, StockRaceDetectedEvent


def log_order_created(event: OrderCreatedEvent) -> None:
    logger.info(f"[事件] 订单创建: ID={event.order_id}, 用户={event.user_id}, 金额={event.total_amount}")


def log_order_status_changed(event: OrderStatusChangedEvent) -> None:
    logger.info(f"[事件] 订单状态变更: ID={event.order_id}, {event.old_status} -> {event.new_status}")


def alert_stock_race(event: StockRaceDetectedEvent) -> None:
    """订单已创建但库存未扣减，提示运营人员执行 reconcile_stock 对账"""
    logger.error(
        f"[事件] 订单库存未扣减: 订单={event.order_id}, 商品={event.product_id}, "
        f"尺码={event.size}, 数量={event.quantity}，请执行 reconcile_stock 对账"
    )


def register_event_handlers() -> None:
    DomainEvents.register(OrderCreatedEvent, log_order_created)
    DomainEvents.register(OrderStatusChangedEvent, log_order_status_changed)
    DomainEvents.register(StockRaceDetectedEvent, alert_stock_race)
