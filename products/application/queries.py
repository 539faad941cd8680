"""
商品应用服务层的查询对象。
"""


class GetProductStockQuery:
    """获取商品价格和库存台账的查询"""
    
    def __init__(self, id: str):
        """
        初始化查询。
        
        Args:
            id: 商品ID
        """
        self.id = id
