"""
订单应用服务。
协调下单、状态变更、订单查询和库存对账。
"""
from typing import Any, Dict, Iterable, List

from loguru import logger

from core.domain import AuthorizationException, OrderNotFoundException, ValidationException
from core.infrastructure.cache import CacheService
from orders.application.commands import PlaceOrderCommand, ReconcileStockCommand, UpdateOrderStatusCommand
from orders.application.dtos import OrderDTO, OrderPlacementDTO, ReconciliationDTO
from orders.application.queries import (
    GetOrderQuery,
    ListAllOrdersQuery,
    ListUnreconciledOrdersQuery,
    ListUserOrdersQuery,
)
from orders.domain.aggregates import Order
from orders.domain.entities import OrderLine, OrderStatus
from orders.domain.repositories import OrderRepository
from orders.domain.services import OrderBuilder, OrderStatusMachine
from products.domain.entities import Product
from products.domain.repositories import ProductRepository


class OrderApplicationService:
    """
    订单应用服务。
    订单详情按 order:<id> 缓存，状态变更和库存对账后失效。
    """
    
    CACHE_KEY_PREFIX = "order:"
    
    def __init__(
        self,
        order_builder: OrderBuilder,
        status_machine: OrderStatusMachine,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        cache_service: CacheService,
        cache_timeout: int = 300
    ):
        """
        初始化订单应用服务。
        
        Args:
            order_builder: 下单领域服务
            status_machine: 订单状态机
            order_repository: 订单仓储
            product_repository: 商品仓储，用于补充订单中商品的名称和当前价格
            cache_service: 缓存服务
            cache_timeout: 订单详情缓存超时（秒），0表示不缓存
        """
        self.order_builder = order_builder
        self.status_machine = status_machine
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.cache_service = cache_service
        self.cache_timeout = cache_timeout
    
    def place_order(self, command: PlaceOrderCommand) -> OrderPlacementDTO:
        """
        下单。
        
        Args:
            command: 下单命令
            
        Returns:
            下单结果DTO，库存未能扣减的商品行列在stock_warnings中
        """
        lines = [self._to_line(item) for item in command.items or []]
        result = self.order_builder.place_order(
            owner_id=command.user_id,
            lines=lines,
            shipping_address=command.shipping_address,
            contact_info=command.contact_info,
        )
        return OrderPlacementDTO(
            order=OrderDTO.from_aggregate(result.order, result.products),
            stock_warnings=[race.to_dict() for race in result.stock_races],
        )
    
    def update_order_status(self, command: UpdateOrderStatusCommand) -> OrderDTO:
        """
        更新订单状态。
        
        Raises:
            ValidationException: 状态无效
            OrderNotFoundException: 订单不存在
            InvalidStatusTransitionException: 严格模式下不允许的状态变更
        """
        order = self.status_machine.transition(command.order_id, command.status)
        self._invalidate_cache(order.id)
        return self._to_dtos([order])[0]
    
    def get_order(self, query: GetOrderQuery) -> OrderDTO:
        """
        获取订单详情。只有下单用户本人和管理员可以查看。
        
        Args:
            query: 获取订单查询
            
        Returns:
            订单DTO
            
        Raises:
            OrderNotFoundException: 订单不存在
            AuthorizationException: 无权查看该订单
        """
        cache_key = f"{self.CACHE_KEY_PREFIX}{query.order_id}"
        order_dto = self.cache_service.get(cache_key) if self.cache_timeout > 0 else None
        
        if order_dto is None:
            order = self.order_repository.get_by_id(query.order_id)
            if order is None:
                raise OrderNotFoundException(query.order_id)
            order_dto = self._to_dtos([order])[0]
            if self.cache_timeout > 0:
                self.cache_service.set(cache_key, order_dto, self.cache_timeout)
        
        if not query.is_admin and str(order_dto.user_id) != str(query.user_id):
            logger.warning(f"用户{query.user_id}尝试查看他人订单: {query.order_id}")
            raise AuthorizationException(query.user_id, "查看", f"订单{query.order_id}")
        
        return order_dto
    
    def list_user_orders(self, query: ListUserOrdersQuery) -> List[OrderDTO]:
        """获取用户本人的订单列表，按创建时间倒序"""
        return self._to_dtos(self.order_repository.list_by_user(query.user_id))
    
    def list_all_orders(self, query: ListAllOrdersQuery) -> List[OrderDTO]:
        return self._to_dtos(self.order_repository.list_all())
    
    def list_unreconciled_orders(self, query: ListUnreconciledOrdersQuery) -> List[OrderDTO]:
        return self._to_dtos(self.order_repository.find_unreconciled())
    
    def reconcile_stock(self, command: ReconcileStockCommand) -> List[ReconciliationDTO]:
        """
        对库存未扣减的订单商品行重新扣减库存。
        
        Args:
            command: 库存对账命令
            
        Returns:
            每个订单的对账结果；dry_run时remaining_races列出待扣减的商品行且不做任何修改
            
        Raises:
            OrderNotFoundException: 指定的订单不存在
        """
        if command.order_id is not None:
            order = self.order_repository.get_by_id(command.order_id)
            if order is None:
                raise OrderNotFoundException(command.order_id)
            orders = [order]
        else:
            orders = self.order_repository.find_unreconciled()
        
        results = []
        for order in orders:
            pending = order.pending_stock_items
            if order.status == OrderStatus.CANCELLED:
                logger.info(f"订单已取消，跳过库存对账: ID={order.id}")
                results.append(ReconciliationDTO(
                    order_id=str(order.id),
                    pending_before=len(pending),
                    remaining_races=[],
                    skipped=True,
                ))
                continue
            if command.dry_run:
                remaining = [
                    {
                        "productId": str(item.product_id),
                        "size": item.size,
                        "quantity": item.quantity,
                        "message": "待扣减",
                    }
                    for item in pending
                ]
            else:
                remaining = [race.to_dict() for race in self.order_builder.reapply_stock(order)]
                if pending:
                    self._invalidate_cache(order.id)
            results.append(ReconciliationDTO(
                order_id=str(order.id),
                pending_before=len(pending),
                remaining_races=remaining,
            ))
        
        logger.info(f"库存对账完成: 订单数={len(results)}, dry_run={command.dry_run}")
        return results
    
    def _to_line(self, item: Dict[str, Any]) -> OrderLine:
        if not isinstance(item, dict):
            raise ValidationException("items", "商品行格式无效")
        return OrderLine(
            product_id=item.get("product_id"),
            size=item.get("size"),
            quantity=item.get("quantity"),
        )
    
    def _to_dtos(self, orders: Iterable[Order]) -> List[OrderDTO]:
        orders = list(orders)
        product_ids = {item.product_id for order in orders for item in order.items}
        products: Dict[str, Product] = self.product_repository.get_by_ids(product_ids) if product_ids else {}
        return [OrderDTO.from_aggregate(order, products) for order in orders]
    
    def _invalidate_cache(self, order_id: Any) -> None:
        self.cache_service.delete(f"{self.CACHE_KEY_PREFIX}{order_id}")
