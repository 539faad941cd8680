"""
订单领域模型中的事件。
"""
from typing import Any

from core.domain.events import DomainEvent


class OrderCreatedEvent(DomainEvent):
    """订单创建事件"""
    
    def __init__(self, order_id: Any, user_id: Any, total_amount: Any):
        """
        初始化订单创建事件。
        
        Args:
            order_id: 订单ID
            user_id: 用户ID
            total_amount: 订单总金额
        """
        super().__init__()
        self.order_id = order_id
        self.user_id = user_id
        self.total_amount = total_amount


class OrderStatusChangedEvent(DomainEvent):
    """订单状态变更事件"""
    
    def __init__(self, order_id: Any, old_status: str, new_status: str):
        super().__init__()
        self.order_id = order_id
        self.old_status = old_status
        self.new_status = new_status


class StockRaceDetectedEvent(DomainEvent):
    """
    库存扣减竞争失败事件。
    订单已创建但某行库存未能扣减，需要运营人员处理。
    """
    
    def __init__(self, order_id: Any, product_id: Any, size: str, quantity: int):
        """
        初始化库存扣减竞争失败事件。
        
        Args:
            order_id: 订单ID
            product_id: 商品ID
            size: 尺码
            quantity: 未能扣减的数量
        """
        super().__init__()
        self.order_id = order_id
        self.product_id = product_id
        self.size = size
        self.quantity = quantity
