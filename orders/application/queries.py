"""
订单应用服务层的查询对象。
"""
from typing import Any


class GetOrderQuery:
    """获取订单详情的查询"""
    
    def __init__(self, order_id: Any, user_id: Any, is_admin: bool = False):
        """
        初始化查询。
        
        Args:
            order_id: 订单ID
            user_id: 发起查询的用户ID
            is_admin: 发起查询的用户是否为管理员
        """
        self.order_id = order_id
        self.user_id = user_id
        self.is_admin = is_admin


class ListUserOrdersQuery:
    """获取用户订单列表的查询"""
    
    def __init__(self, user_id: Any):
        self.user_id = user_id


class ListAllOrdersQuery:
    """获取全部订单的查询，仅管理员可用"""
    pass


class ListUnreconciledOrdersQuery:
    """获取库存未完全扣减的订单的查询"""
    pass
