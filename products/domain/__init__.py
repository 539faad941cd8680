"""
商品领域模型包。
提供下单所需的商品实体、库存台账和库存扣减接口。
"""

from products.domain.entities import Product, StockEntry, Size, SIZES
from products.domain.repositories import ProductRepository, StockAdjuster

__all__ = [
    'Product',
    'StockEntry',
    'Size',
    'SIZES',
    'ProductRepository',
    'StockAdjuster',
]
