"""
订单领域模型中的聚合根。
"""
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from django.utils import timezone

from core.domain import AggregateRoot, Money, ValidationException
from orders.domain.entities import OrderItem, OrderStatus, ORDER_STATUSES
from orders.domain.events import OrderCreatedEvent, OrderStatusChangedEvent


class Order(AggregateRoot):
    """
    订单聚合根。
    商品行和总金额在创建后不可修改，之后只有状态可以变更。
    """
    
    def __init__(
        self,
        owner_id: Any,
        items: Iterable[OrderItem],
        total: Money,
        shipping_address: Dict[str, Any],
        contact_info: Dict[str, Any],
        status: str = OrderStatus.PENDING,
        id: Any = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        version: int = 0
    ):
        """
        初始化订单聚合根。通常通过 Order.create 创建新订单，
        直接调用构造函数用于从持久化数据重建。
        
        Args:
            owner_id: 下单用户ID
            items: 订单商品行
            total: 订单总金额
            shipping_address: 收货地址
            contact_info: 联系方式
            status: 订单状态
            id: 订单ID
            created_at: 创建时间
            updated_at: 更新时间
            version: 版本号
        """
        super().__init__(id, version)
        self._owner_id = owner_id
        self._items: Tuple[OrderItem, ...] = tuple(items)
        self._total = total
        self.shipping_address = shipping_address
        self.contact_info = contact_info
        self._status = status
        self._created_at = created_at or timezone.now()
        self.updated_at = updated_at or self._created_at
    
    @classmethod
    def create(
        cls,
        owner_id: Any,
        items: Iterable[OrderItem],
        shipping_address: Dict[str, Any],
        contact_info: Dict[str, Any]
    ) -> 'Order':
        """
        创建新订单，计算总金额并记录订单创建事件。
        
        Raises:
            ValidationException: 商品行为空或货币单位不一致
        """
        items = tuple(items)
        if not items:
            raise ValidationException("items", "订单至少需要包含一件商品")
        
        total = Money.zero(items[0].unit_price.currency)
        try:
            for item in items:
                total = total + item.line_total
        except ValueError as e:
            raise ValidationException("items", str(e))
        
        order = cls(
            owner_id=owner_id,
            items=items,
            total=total,
            shipping_address=shipping_address,
            contact_info=contact_info,
        )
        order.add_domain_event(
            OrderCreatedEvent(order_id=order.id, user_id=owner_id, total_amount=total)
        )
        return order
    
    @property
    def owner_id(self) -> Any:
        return self._owner_id
    
    @property
    def items(self) -> Tuple[OrderItem, ...]:
        return self._items
    
    @property
    def total(self) -> Money:
        return self._total
    
    @property
    def status(self) -> str:
        return self._status
    
    @property
    def created_at(self) -> datetime:
        return self._created_at
    
    @property
    def pending_stock_items(self) -> Tuple[OrderItem, ...]:
        """库存尚未扣减的商品行"""
        return tuple(item for item in self._items if not item.stock_applied)
    
    def change_status(self, new_status: str) -> bool:
        """
        变更订单状态。是否允许该变更由订单状态机决定。
        
        Args:
            new_status: 新状态
            
        Returns:
            状态是否实际发生了变化
        """
        if new_status not in ORDER_STATUSES:
            raise ValidationException("status", f"无效的订单状态: {new_status}")
        if new_status == self._status:
            return False
        
        old_status = self._status
        self._status = new_status
        self.updated_at = timezone.now()
        self.add_domain_event(
            OrderStatusChangedEvent(order_id=self.id, old_status=old_status, new_status=new_status)
        )
        self.increment_version()
        return True
    
    def mark_stock_applied(self, position: int) -> None:
        """标记指定位置商品行的库存已扣减"""
        for item in self._items:
            if item.position == position:
                item.stock_applied = True
                return
        raise ValueError(f"订单(ID={self.id})不存在位置为{position}的商品行")
