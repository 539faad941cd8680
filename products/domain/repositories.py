"""
商品领域模型中的仓储接口。
定义订单模块消费的商品目录查询接口和库存扣减接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from core.domain.repositories import ReadOnlyRepository
from products.domain.entities import Product


class ProductRepository(ReadOnlyRepository[Product]):
    """
    商品目录查询接口。
    返回商品的当前价格和完整库存台账。
    """
    
    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[Product]:
        """
        根据ID获取商品。
        
        Args:
            id: 商品ID
            
        Returns:
            找到的商品，不存在或ID格式无效时返回None
        """
        pass
    
    @abstractmethod
    def get_by_ids(self, ids: Iterable[Any]) -> Dict[Any, Product]:
        """
        批量获取商品。
        
        Args:
            ids: 商品ID集合
            
        Returns:
            以字符串形式商品ID为键的商品字典，不存在的ID不出现在结果中
        """
        pass


class StockAdjuster(ABC):
    """
    库存扣减接口。
    每次调用对单个商品的单个尺码做一次原子的条件扣减。
    """
    
    @abstractmethod
    def decrement(self, product_id: Any, size: str, quantity: int) -> int:
        """
        扣减指定商品指定尺码的库存。
        仅当该尺码的实时库存不少于扣减数量时才生效，不影响其他尺码。
        
        Args:
            product_id: 商品ID
            size: 尺码
            quantity: 扣减数量
            
        Returns:
            扣减后的库存数量
            
        Raises:
            StockRaceException: 实时库存不足或条目不存在
        """
        pass
