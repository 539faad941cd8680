"""
订单仓储的Django实现。
"""
from typing import Any, List, Optional
import uuid

from django.db import transaction
from django.db.models import F
from loguru import logger

from core.domain import ConcurrencyException, DomainEvents, Money, OrderNotFoundException
from orders.domain.aggregates import Order
from orders.domain.entities import OrderItem, OrderStatus
from orders.domain.repositories import OrderRepository
from orders.infrastructure.models.order_models import (
    Order as OrderModel,
    OrderItem as OrderItemModel,
)


class DjangoOrderRepository(OrderRepository):
    """
    基于Django ORM的订单仓储实现。
    """
    
    def get_by_id(self, id: Any) -> Optional[Order]:
        order_id = self._parse_id(id)
        if order_id is None:
            return None
        
        try:
            order_model = OrderModel.objects.prefetch_related('items').get(id=order_id)
        except OrderModel.DoesNotExist:
            return None
        
        return self._to_domain(order_model)
    
    def save(self, order: Order) -> Order:
        """
        保存订单。
        
        Args:
            order: 订单聚合根
            
        Returns:
            保存后的订单
        """
        if OrderModel.objects.filter(id=order.id).exists():
            return self.update_status(order)
        
        with transaction.atomic():
            order_model = OrderModel.objects.create(
                id=order.id,
                user_id=order.owner_id,
                total_amount=order.total.amount,
                currency=order.total.currency,
                shipping_address=order.shipping_address,
                contact_info=order.contact_info,
                status=order.status,
                version=order.version,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
            OrderItemModel.objects.bulk_create([
                OrderItemModel(
                    order=order_model,
                    position=item.position,
                    product_id=item.product_id,
                    size=item.size,
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    stock_applied=item.stock_applied,
                )
                for item in order.items
            ])
        
        logger.debug(f"订单已写入数据库: ID={order.id}, 商品行数={len(order.items)}")
        self._publish_events(order)
        return order
    
    def update_status(self, order: Order, expected_status: Optional[str] = None) -> Order:
        """
        更新订单状态。
        
        Args:
            order: 已变更状态的订单
            expected_status: 数据库中应有的原状态，为None时无条件覆盖
            
        Returns:
            更新后的订单
        """
        queryset = OrderModel.objects.filter(id=order.id)
        if expected_status is not None:
            queryset = queryset.filter(status=expected_status)
        
        rows_updated = queryset.update(
            status=order.status,
            version=F('version') + 1,
            updated_at=order.updated_at,
        )
        
        if rows_updated == 0:
            if not OrderModel.objects.filter(id=order.id).exists():
                raise OrderNotFoundException(order.id)
            raise ConcurrencyException(f"订单(ID={order.id})状态已被其他请求修改，请刷新后重试")
        
        self._publish_events(order)
        return order
    
    def mark_stock_applied(self, order_id: Any, position: int) -> int:
        return (
            OrderItemModel.objects
            .filter(order_id=order_id, position=position, stock_applied=False)
            .update(stock_applied=True)
        )
    
    def list_by_user(self, user_id: Any) -> List[Order]:
        order_models = OrderModel.objects.filter(user_id=user_id).prefetch_related('items').order_by('-created_at')
        return [self._to_domain(model) for model in order_models]
    
    def list_all(self) -> List[Order]:
        order_models = OrderModel.objects.prefetch_related('items').order_by('-created_at')
        return [self._to_domain(model) for model in order_models]
    
    def find_unreconciled(self) -> List[Order]:
        order_models = (
            OrderModel.objects
            .filter(items__stock_applied=False)
            .exclude(status=OrderStatus.CANCELLED)
            .distinct()
            .prefetch_related('items')
            .order_by('created_at')
        )
        return [self._to_domain(model) for model in order_models]
    
    def _publish_events(self, order: Order) -> None:
        # 事务提交后再发布，回滚时事件随之丢弃
        events = order.clear_domain_events()
        if events:
            transaction.on_commit(lambda: self._dispatch(events))
    
    def _dispatch(self, events: List[Any]) -> None:
        for event in events:
            DomainEvents.publish(event)
    
    def _parse_id(self, id: Any) -> Optional[uuid.UUID]:
        if isinstance(id, uuid.UUID):
            return id
        try:
            return uuid.UUID(str(id))
        except (ValueError, TypeError, AttributeError):
            return None
    
    def _to_domain(self, order_model: OrderModel) -> Order:
        """
        将数据库模型转换为订单聚合根。
        
        Args:
            order_model: 订单数据库模型
            
        Returns:
            订单聚合根
        """
        currency = order_model.currency
        items = [
            OrderItem(
                product_id=item.product_id,
                size=item.size,
                quantity=item.quantity,
                unit_price=Money(item.unit_price, currency),
                position=item.position,
                stock_applied=item.stock_applied,
            )
            for item in order_model.items.all()
        ]
        return Order(
            id=order_model.id,
            owner_id=order_model.user_id,
            items=items,
            total=Money(order_model.total_amount, currency),
            shipping_address=order_model.shipping_address,
            contact_info=order_model.contact_info,
            status=order_model.status,
            created_at=order_model.created_at,
            updated_at=order_model.updated_at,
            version=order_model.version,
        )
