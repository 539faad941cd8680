"""
商品领域模型中的实体。
包含下单所需的商品视图：价格与按尺码划分的库存台账。
"""
from typing import Any, List, Optional

from core.domain import Entity, Money, ValueObject


class Size:
    """尺码枚举"""
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


# 固定的尺码枚举顺序
SIZES = (Size.XS, Size.S, Size.M, Size.L, Size.XL, Size.XXL)


class StockEntry(ValueObject):
    """
    库存台账条目。
    每个商品每个尺码最多一条。
    """
    
    def __init__(self, size: str, quantity: int):
        """
        初始化库存条目。
        
        Args:
            size: 尺码
            quantity: 库存数量，非负整数
        """
        if size not in SIZES:
            raise ValueError(f"无效的尺码: {size}")
        if quantity < 0:
            raise ValueError(f"库存数量不能为负数: {quantity}")
        self.size = size
        self.quantity = quantity
    
    def to_dict(self):
        return {"size": self.size, "quantity": self.quantity}


class Product(Entity):
    """
    商品实体。
    由商品模块维护，订单模块只读取价格和库存台账。
    """
    
    def __init__(
        self,
        id: Any = None,
        name: str = "",
        price: Money = None,
        stock: Optional[List[StockEntry]] = None,
    ):
        """
        初始化商品实体。
        
        Args:
            id: 商品ID，如果未提供则自动生成
            name: 商品名称
            price: 商品价格
            stock: 库存台账条目列表
        """
        super().__init__(id)
        self.name = name
        self.price = price or Money(0)
        self.stock = list(stock or [])
        
        sizes = [entry.size for entry in self.stock]
        if len(sizes) != len(set(sizes)):
            raise ValueError(f"商品(ID={self.id})存在重复的尺码库存条目")
    
    def find_stock(self, size: str) -> Optional[StockEntry]:
        """
        查找指定尺码的库存条目。
        
        Args:
            size: 尺码
            
        Returns:
            库存条目，如果该尺码没有条目则返回None
        """
        for entry in self.stock:
            if entry.size == size:
                return entry
        return None
    
    def available_quantity(self, size: str) -> int:
        """指定尺码的可用数量，没有条目时为0"""
        entry = self.find_stock(size)
        return entry.quantity if entry else 0
