"""
商品目录查询接口的Django实现。
"""
from typing import Any, Dict, Iterable, Optional
import uuid

from core.domain.value_objects import Money
from products.domain.entities import Product, StockEntry
from products.domain.repositories import ProductRepository
from products.infrastructure.models.product_models import Product as ProductModel


class DjangoProductRepository(ProductRepository):
    """
    基于Django ORM的商品目录查询实现。
    每次调用都读取数据库中的实时库存。
    """
    
    def get_by_id(self, id: Any) -> Optional[Product]:
        """
        根据ID获取商品。
        
        Args:
            id: 商品ID
            
        Returns:
            找到的商品，如果不存在或ID格式无效则返回None
        """
        product_id = self._parse_id(id)
        if product_id is None:
            return None
        
        try:
            product_model = ProductModel.objects.prefetch_related('stock').get(id=product_id)
        except ProductModel.DoesNotExist:
            return None
        
        return self._to_domain(product_model)
    
    def get_by_ids(self, ids: Iterable[Any]) -> Dict[Any, Product]:
        """
        批量获取商品。
        
        Args:
            ids: 商品ID集合
            
        Returns:
            以字符串形式商品ID为键的商品字典
        """
        parsed_ids = {pid for pid in (self._parse_id(i) for i in ids) if pid is not None}
        if not parsed_ids:
            return {}
        
        product_models = ProductModel.objects.prefetch_related('stock').filter(id__in=parsed_ids)
        return {str(model.id): self._to_domain(model) for model in product_models}
    
    def _parse_id(self, id: Any) -> Optional[uuid.UUID]:
        if isinstance(id, uuid.UUID):
            return id
        try:
            return uuid.UUID(str(id))
        except (ValueError, TypeError, AttributeError):
            return None
    
    def _to_domain(self, product_model: ProductModel) -> Product:
        """
        将数据库模型转换为领域实体。
        
        Args:
            product_model: 商品数据库模型
            
        Returns:
            商品领域实体
        """
        return Product(
            id=product_model.id,
            name=product_model.name,
            price=Money(product_model.price_amount, product_model.price_currency),
            stock=[
                StockEntry(size=row.size, quantity=row.quantity)
                for row in product_model.stock.all()
            ],
        )
