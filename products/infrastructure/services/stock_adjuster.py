"""
库存扣减服务实现。
使用带条件的单行UPDATE保证单个尺码条目的扣减不会出现负库存。
"""
from typing import Any

from django.db.models import F
from django.utils import timezone
from loguru import logger

from core.domain.exceptions import StockRaceException
from products.domain.repositories import StockAdjuster
from products.infrastructure.models.product_models import ProductStock as ProductStockModel


class DjangoStockAdjuster(StockAdjuster):
    """
    基于Django ORM的库存扣减实现。
    
    每次扣减是一条原子的条件更新语句，只有当匹配尺码的库存仍然充足时才生效。
    不同订单之间不做其他协调。
    """
    
    def decrement(self, product_id: Any, size: str, quantity: int) -> int:
        """
        扣减指定商品指定尺码的库存。
        
        Args:
            product_id: 商品ID
            size: 尺码
            quantity: 扣减数量
            
        Returns:
            扣减后的库存数量
            
        Raises:
            ValueError: 扣减数量小于1
            StockRaceException: 实时库存不足或条目不存在
        """
        if quantity < 1:
            raise ValueError(f"扣减数量必须至少为1: {quantity}")
        
        # 只有库存仍然充足时才更新
        rows_updated = ProductStockModel.objects.filter(
            product_id=product_id,
            size=size,
            quantity__gte=quantity
        ).update(
            quantity=F('quantity') - quantity,
            updated_at=timezone.now()
        )
        
        if rows_updated == 0:
            logger.warning(f"库存扣减竞争失败: 商品={product_id}, 尺码={size}, 数量={quantity}")
            raise StockRaceException(product_id, size, quantity)
        
        remaining = ProductStockModel.objects.filter(
            product_id=product_id,
            size=size
        ).values_list('quantity', flat=True).first()
        logger.debug(f"库存已扣减: 商品={product_id}, 尺码={size}, 数量={quantity}, 剩余={remaining}")
        return remaining
