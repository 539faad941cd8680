"""
订单应用层。
"""
from orders.application.commands import PlaceOrderCommand, UpdateOrderStatusCommand, ReconcileStockCommand
from orders.application.queries import (
    GetOrderQuery,
    ListUserOrdersQuery,
    ListAllOrdersQuery,
    ListUnreconciledOrdersQuery,
)
from orders.application.dtos import OrderDTO, OrderItemDTO, OrderPlacementDTO, ReconciliationDTO
from orders.application.order_service import OrderApplicationService

__all__ = [
    'PlaceOrderCommand',
    'UpdateOrderStatusCommand',
    'ReconcileStockCommand',
    'GetOrderQuery',
    'ListUserOrdersQuery',
    'ListAllOrdersQuery',
    'ListUnreconciledOrdersQuery',
    'OrderDTO',
    'OrderItemDTO',
    'OrderPlacementDTO',
    'ReconciliationDTO',
    'OrderApplicationService',
]
