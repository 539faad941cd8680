"""
商品应用服务。
提供订单流程和前端使用的商品库存读取路径。
"""
from loguru import logger

from core.domain.exceptions import ProductNotFoundException
from products.domain.repositories import ProductRepository
from products.application.dtos import ProductStockDTO
from products.application.queries import GetProductStockQuery


class ProductApplicationService:
    """
    商品应用服务。
    处理商品相关的只读查询。
    """
    
    def __init__(self, product_repository: ProductRepository):
        """
        初始化商品应用服务。
        
        Args:
            product_repository: 商品仓储
        """
        self.product_repository = product_repository
    
    def get_product_stock(self, query: GetProductStockQuery) -> ProductStockDTO:
        """
        获取商品价格和库存台账。
        库存实时读取，不经过缓存。
        
        Args:
            query: 获取商品库存查询
            
        Returns:
            商品库存DTO
            
        Raises:
            ProductNotFoundException: 商品不存在
        """
        product = self.product_repository.get_by_id(query.id)
        if product is None:
            logger.debug(f"商品不存在: {query.id}")
            raise ProductNotFoundException(query.id)
        return ProductStockDTO.from_entity(product)
