"""
订单应用服务层的命令对象。
定义用于修改系统状态的命令。
"""
from typing import Any, Dict, List, Optional


class PlaceOrderCommand:
    """下单命令"""
    
    def __init__(
        self,
        user_id: Any,
        items: List[Dict[str, Any]],
        shipping_address: Dict[str, Any],
        contact_info: Dict[str, Any]
    ):
        """
        初始化下单命令。
        
        Args:
            user_id: 下单用户ID
            items: 商品行列表，每项包含product_id、size和quantity
            shipping_address: 收货地址
            contact_info: 联系方式
        """
        self.user_id = user_id
        self.items = items
        self.shipping_address = shipping_address
        self.contact_info = contact_info


class UpdateOrderStatusCommand:
    """更新订单状态命令"""
    
    def __init__(self, order_id: Any, status: str):
        self.order_id = order_id
        self.status = status


class ReconcileStockCommand:
    """
    库存对账命令。
    order_id为空时处理全部存在未扣减商品行的订单。
    """
    
    def __init__(self, order_id: Optional[Any] = None, dry_run: bool = False):
        self.order_id = order_id
        self.dry_run = dry_run
