"""
商品应用服务层包。
"""

from products.application.dtos import ProductStockDTO
from products.application.queries import GetProductStockQuery
from products.application.product_service import ProductApplicationService

__all__ = [
    'ProductStockDTO',
    'GetProductStockQuery',
    'ProductApplicationService',
]
