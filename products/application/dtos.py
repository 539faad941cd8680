"""
商品应用服务层的数据传输对象(DTOs)。
"""
from typing import Any, Dict, List


class ProductStockDTO:
    """商品价格和库存台账DTO"""
    
    def __init__(
        self,
        id: str,
        name: str,
        price: Dict[str, Any],
        stock: List[Dict[str, Any]]
    ):
        """
        初始化商品库存DTO。
        
        Args:
            id: 商品ID
            name: 商品名称
            price: 商品价格字典，包含amount和currency
            stock: 尺码库存列表，每项包含size和quantity
        """
        self.id = id
        self.name = name
        self.price = price
        self.stock = stock
    
    @classmethod
    def from_entity(cls, product) -> 'ProductStockDTO':
        """
        从商品实体创建DTO。
        
        Args:
            product: 商品实体
            
        Returns:
            商品库存DTO
        """
        return cls(
            id=str(product.id),
            name=product.name,
            price={
                "amount": product.price.amount,
                "currency": product.price.currency
            },
            stock=[entry.to_dict() for entry in product.stock]
        )
