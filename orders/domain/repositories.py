"""
订单领域模型中的仓储接口。
"""
from abc import abstractmethod
from typing import Any, List, Optional

from core.domain import Repository
from orders.domain.aggregates import Order


class OrderRepository(Repository[Order]):
    """
    订单仓储接口。
    订单创建后商品行和总金额不再改写，只有状态和库存扣减标记可以更新。
    """
    
    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[Order]:
        """
        根据ID获取订单，ID格式无效时返回None。
        
        Args:
            id: 订单ID
            
        Returns:
            订单，如果不存在则返回None
        """
        pass
    
    @abstractmethod
    def save(self, order: Order) -> Order:
        """
        保存订单。新订单连同全部商品行一次性写入；已有订单只更新状态。
        
        Args:
            order: 订单聚合根
            
        Returns:
            保存后的订单
        """
        pass
    
    @abstractmethod
    def update_status(self, order: Order, expected_status: Optional[str] = None) -> Order:
        """
        持久化订单的当前状态。
        
        Args:
            order: 已变更状态的订单
            expected_status: 如果提供，仅当数据库中的状态仍为该值时才更新
            
        Returns:
            更新后的订单
            
        Raises:
            OrderNotFoundException: 订单不存在
            ConcurrencyException: 订单状态已被其他请求修改
        """
        pass
    
    @abstractmethod
    def mark_stock_applied(self, order_id: Any, position: int) -> int:
        """
        标记订单中指定位置商品行的库存已扣减。
        只更新仍为未扣减状态的商品行，同一行只能被标记一次。
        
        Args:
            order_id: 订单ID
            position: 商品行位置
            
        Returns:
            被标记的行数，为0表示该行已被标记
        """
        pass
    
    @abstractmethod
    def list_by_user(self, user_id: Any) -> List[Order]:
        """获取用户的全部订单，按创建时间倒序"""
        pass
    
    @abstractmethod
    def list_all(self) -> List[Order]:
        """获取全部订单，按创建时间倒序"""
        pass
    
    @abstractmethod
    def find_unreconciled(self) -> List[Order]:
        """获取存在库存未扣减商品行且未取消的订单"""
        pass
