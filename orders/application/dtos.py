"""
订单应用服务层的数据传输对象(DTOs)。
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from orders.domain.aggregates import Order
from orders.domain.entities import OrderItem
from products.domain.entities import Product


class ProductSummaryDTO:
    """订单中引用的商品摘要，价格为当前目录价格"""
    
    def __init__(self, id: str, name: str, price: Dict[str, Any]):
        self.id = id
        self.name = name
        self.price = price
    
    @classmethod
    def from_entity(cls, product: Product) -> 'ProductSummaryDTO':
        return cls(
            id=str(product.id),
            name=product.name,
            price=product.price.to_dict(),
        )


class OrderItemDTO:
    """订单商品行DTO"""
    
    def __init__(
        self,
        product_id: str,
        product: Optional[ProductSummaryDTO],
        size: str,
        quantity: int,
        unit_price: Dict[str, Any],
        line_total: Dict[str, Any],
        stock_applied: bool
    ):
        """
        初始化订单商品行DTO。
        
        Args:
            product_id: 商品ID
            product: 商品摘要，商品已不存在时为None
            size: 尺码
            quantity: 数量
            unit_price: 下单时的单价
            line_total: 行小计
            stock_applied: 库存是否已扣减
        """
        self.product_id = product_id
        self.product = product
        self.size = size
        self.quantity = quantity
        self.unit_price = unit_price
        self.line_total = line_total
        self.stock_applied = stock_applied
    
    @classmethod
    def from_entity(cls, item: OrderItem, products: Dict[str, Product]) -> 'OrderItemDTO':
        product = products.get(str(item.product_id))
        return cls(
            product_id=str(item.product_id),
            product=ProductSummaryDTO.from_entity(product) if product else None,
            size=item.size,
            quantity=item.quantity,
            unit_price=item.unit_price.to_dict(),
            line_total=item.line_total.to_dict(),
            stock_applied=item.stock_applied,
        )


class OrderDTO:
    """订单DTO"""
    
    def __init__(
        self,
        id: str,
        user_id: Any,
        items: List[OrderItemDTO],
        total: Dict[str, Any],
        shipping_address: Dict[str, Any],
        contact_info: Dict[str, Any],
        status: str,
        created_at: datetime,
        updated_at: datetime
    ):
        self.id = id
        self.user_id = user_id
        self.items = items
        self.total = total
        self.shipping_address = shipping_address
        self.contact_info = contact_info
        self.status = status
        self.created_at = created_at
        self.updated_at = updated_at
    
    @property
    def fully_applied(self) -> bool:
        return all(item.stock_applied for item in self.items)
    
    @classmethod
    def from_aggregate(cls, order: Order, products: Dict[str, Product]) -> 'OrderDTO':
        """
        从订单聚合根创建DTO。
        
        Args:
            order: 订单聚合根
            products: 订单引用的商品，按商品ID字符串索引
            
        Returns:
            订单DTO
        """
        return cls(
            id=str(order.id),
            user_id=order.owner_id,
            items=[OrderItemDTO.from_entity(item, products) for item in order.items],
            total=order.total.to_dict(),
            shipping_address=order.shipping_address,
            contact_info=order.contact_info,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderPlacementDTO:
    """
    下单结果DTO。
    stock_warnings 列出订单已创建但库存未能扣减的商品行。
    """
    
    def __init__(self, order: OrderDTO, stock_warnings: List[Dict[str, Any]]):
        self.order = order
        self.stock_warnings = stock_warnings


class ReconciliationDTO:
    """单个订单的库存对账结果"""
    
    def __init__(
        self,
        order_id: str,
        pending_before: int,
        remaining_races: List[Dict[str, Any]],
        skipped: bool = False
    ):
        """
        初始化对账结果。
        
        Args:
            order_id: 订单ID
            pending_before: 对账前未扣减的商品行数
            remaining_races: 对账后仍未扣减的商品行
            skipped: 订单已取消，未做对账
        """
        self.order_id = order_id
        self.pending_before = pending_before
        self.remaining_races = remaining_races
        self.skipped = skipped
    
    @property
    def resolved(self) -> bool:
        return not self.remaining_races
