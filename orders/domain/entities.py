"""
订单领域模型中的实体和值对象。
"""
from typing import Any

from core.domain import Money, ValueObject, ValidationException
from products.domain.entities import SIZES


class OrderStatus:
    """订单状态枚举"""
    PENDING = "pending"        # 待处理，订单创建后的初始状态
    PROCESSING = "processing"  # 处理中
    SHIPPED = "shipped"        # 已发货
    DELIVERED = "delivered"    # 已送达，终态
    CANCELLED = "cancelled"    # 已取消，终态


ORDER_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# 严格模式下允许的状态变更
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class OrderLine(ValueObject):
    """
    下单请求中的一行。
    
    Raises:
        ValidationException: 尺码不在枚举内或数量小于1
    """
    
    def __init__(self, product_id: Any, size: str, quantity: int):
        if size not in SIZES:
            raise ValidationException("size", f"无效的尺码: {size}")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationException("quantity", f"数量必须是至少为1的整数: {quantity}")
        self.product_id = product_id
        self.size = size
        self.quantity = quantity


class OrderItem(ValueObject):
    """
    订单商品行快照。
    unit_price 是下单时的商品价格，之后不再根据商品目录重新计算。
    stock_applied 记录该行的库存扣减是否已经生效。
    """
    
    def __init__(
        self,
        product_id: Any,
        size: str,
        quantity: int,
        unit_price: Money,
        position: int = 0,
        stock_applied: bool = False
    ):
        """
        初始化订单商品行。
        
        Args:
            product_id: 商品ID
            size: 尺码
            quantity: 数量
            unit_price: 下单时的单价快照
            position: 在订单中的位置，与请求顺序一致
            stock_applied: 库存扣减是否已生效
        """
        self.product_id = product_id
        self.size = size
        self.quantity = quantity
        self.unit_price = unit_price
        self.position = position
        self.stock_applied = stock_applied
    
    @property
    def line_total(self) -> Money:
        """行小计 = 单价快照 × 数量"""
        return self.unit_price * self.quantity
