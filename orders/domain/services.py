"""
订单领域服务。
包含下单流程和订单状态机。
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from core.domain import (
    DomainEvents,
    EmptyOrderException,
    InsufficientStockException,
    InvalidStatusTransitionException,
    OrderNotFoundException,
    ProductNotFoundException,
    StockRaceException,
    ValidationException,
)
from core.infrastructure.transaction import TransactionManager
from orders.domain.aggregates import Order
from orders.domain.entities import ALLOWED_TRANSITIONS, ORDER_STATUSES, OrderItem, OrderLine, OrderStatus
from orders.domain.events import StockRaceDetectedEvent
from orders.domain.repositories import OrderRepository
from products.domain.entities import Product
from products.domain.repositories import ProductRepository, StockAdjuster


class StockRaceReport:
    """单个商品行库存扣减失败的记录"""
    
    def __init__(self, product_id: Any, size: str, quantity: int, message: str):
        self.product_id = product_id
        self.size = size
        self.quantity = quantity
        self.message = message
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": str(self.product_id),
            "size": self.size,
            "quantity": self.quantity,
            "message": self.message,
        }


class OrderPlacementResult:
    """
    下单结果。
    
    Attributes:
        order: 已创建的订单
        products: 下单时读取到的商品，按商品ID字符串索引
        stock_races: 库存扣减失败的商品行，为空表示全部扣减成功
    """
    
    def __init__(self, order: Order, products: Dict[str, Product], stock_races: List[StockRaceReport]):
        self.order = order
        self.products = products
        self.stock_races = stock_races
    
    @property
    def fully_applied(self) -> bool:
        return not self.stock_races


class OrderBuilder:
    """
    下单领域服务。
    校验请求中的每一行，按快照价格计算总金额，保存订单，然后逐行扣减库存。
    """
    
    def __init__(
        self,
        product_repository: ProductRepository,
        stock_adjuster: StockAdjuster,
        order_repository: OrderRepository,
        transaction_manager: TransactionManager
    ):
        """
        初始化下单服务。
        
        Args:
            product_repository: 商品仓储
            stock_adjuster: 库存扣减服务
            order_repository: 订单仓储
            transaction_manager: 事务管理器
        """
        self.product_repository = product_repository
        self.stock_adjuster = stock_adjuster
        self.order_repository = order_repository
        self.transaction_manager = transaction_manager
    
    def place_order(
        self,
        owner_id: Any,
        lines: Sequence[OrderLine],
        shipping_address: Dict[str, Any],
        contact_info: Dict[str, Any]
    ) -> OrderPlacementResult:
        """
        下单。
        
        任何一行校验失败时不写入任何数据。订单保存后库存逐行扣减，
        某行扣减失败不会回滚订单，该行会出现在返回结果的 stock_races 中，
        并保持 stock_applied=False 等待对账。
        
        Args:
            owner_id: 下单用户ID
            lines: 下单请求中的商品行
            shipping_address: 收货地址
            contact_info: 联系方式
            
        Returns:
            下单结果
            
        Raises:
            EmptyOrderException: 没有商品行
            ValidationException: 地址或联系方式格式无效
            ProductNotFoundException: 商品不存在
            InsufficientStockException: 库存不足
        """
        if not lines:
            raise EmptyOrderException()
        if not isinstance(shipping_address, dict):
            raise ValidationException("shippingAddress", "收货地址必须是对象")
        if not isinstance(contact_info, dict):
            raise ValidationException("contactInfo", "联系方式必须是对象")
        
        items, products = self._build_items(lines)
        order = Order.create(
            owner_id=owner_id,
            items=items,
            shipping_address=shipping_address,
            contact_info=contact_info,
        )
        
        with self.transaction_manager.start():
            self.order_repository.save(order)
        logger.info(f"订单已创建: ID={order.id}, 用户={owner_id}, 总金额={order.total}")
        
        stock_races = self._apply_stock(order, order.items)
        return OrderPlacementResult(order, products, stock_races)
    
    def reapply_stock(self, order: Order) -> List[StockRaceReport]:
        """
        对订单中库存尚未扣减的商品行重新尝试扣减。已取消的订单不再扣减库存。

        Args:
            order: 订单

        Returns:
            仍然扣减失败的商品行
        """
        if order.status == OrderStatus.CANCELLED:
            logger.info(f"订单已取消，跳过库存扣减: ID={order.id}")
            return []
        pending = order.pending_stock_items
        if not pending:
            return []
        logger.info(f"重新扣减订单库存: ID={order.id}, 待处理行数={len(pending)}")
        return self._apply_stock(order, pending)
    
    def _build_items(self, lines: Sequence[OrderLine]) -> Tuple[List[OrderItem], Dict[str, Product]]:
        # 同一商品尺码的多行按累计数量校验
        products: Dict[str, Product] = {}
        remaining: Dict[Tuple[str, str], int] = {}
        items: List[OrderItem] = []
        
        for position, line in enumerate(lines):
            product = products.get(str(line.product_id))
            if product is None:
                product = self.product_repository.get_by_id(line.product_id)
                if product is None:
                    raise ProductNotFoundException(line.product_id)
                products[str(product.id)] = product
                products[str(line.product_id)] = product
            
            key = (str(product.id), line.size)
            if key not in remaining:
                remaining[key] = product.available_quantity(line.size)
            available = remaining[key]
            
            if available < line.quantity:
                raise InsufficientStockException(
                    product_id=product.id,
                    size=line.size,
                    requested=line.quantity,
                    available=available,
                    product_name=product.name,
                )
            remaining[key] = available - line.quantity
            
            items.append(OrderItem(
                product_id=product.id,
                size=line.size,
                quantity=line.quantity,
                unit_price=product.price,
                position=position,
            ))
        
        return items, {str(p.id): p for p in products.values()}
    
    def _apply_stock(self, order: Order, items: Sequence[OrderItem]) -> List[StockRaceReport]:
        races: List[StockRaceReport] = []
        for item in items:
            try:
                # 先占用商品行再扣减，扣减失败时占用随事务回滚
                with self.transaction_manager.start():
                    claimed = self.order_repository.mark_stock_applied(order.id, item.position)
                    if claimed:
                        self.stock_adjuster.decrement(item.product_id, item.size, item.quantity)
                if not claimed:
                    logger.info(f"订单(ID={order.id})第{item.position}行库存已由其他请求扣减，跳过")
                order.mark_stock_applied(item.position)
            except StockRaceException as e:
                logger.warning(f"订单(ID={order.id})库存扣减失败: {e.message}")
                races.append(StockRaceReport(item.product_id, item.size, item.quantity, e.message))
                DomainEvents.publish(StockRaceDetectedEvent(
                    order_id=order.id,
                    product_id=item.product_id,
                    size=item.size,
                    quantity=item.quantity,
                ))
        return races


class OrderStatusMachine:
    """
    订单状态机。
    默认允许任意状态之间的覆盖；严格模式下只允许 ALLOWED_TRANSITIONS 中定义的变更。
    设置为当前状态总是成功且不产生变更。
    """
    
    def __init__(self, order_repository: OrderRepository, strict: bool = False):
        self.order_repository = order_repository
        self.strict = strict
    
    def can_transition(self, current_status: str, target_status: str) -> bool:
        if target_status == current_status:
            return True
        if not self.strict:
            return True
        return target_status in ALLOWED_TRANSITIONS.get(current_status, frozenset())
    
    def transition(self, order_id: Any, new_status: str) -> Order:
        """
        变更订单状态。
        
        Args:
            order_id: 订单ID
            new_status: 新状态
            
        Returns:
            变更后的订单
            
        Raises:
            ValidationException: 状态不在枚举内
            OrderNotFoundException: 订单不存在
            InvalidStatusTransitionException: 严格模式下不允许的状态变更
        """
        if new_status not in ORDER_STATUSES:
            raise ValidationException("status", f"无效的订单状态: {new_status}")
        
        order = self.order_repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundException(order_id)
        
        current_status = order.status
        if not self.can_transition(current_status, new_status):
            raise InvalidStatusTransitionException(order.id, current_status, new_status)
        
        if order.change_status(new_status):
            expected: Optional[str] = current_status if self.strict else None
            self.order_repository.update_status(order, expected_status=expected)
            logger.info(f"订单状态已变更: ID={order.id}, {current_status} -> {new_status}")
        return order
