"""
商品基础设施层工厂。
负责创建和管理商品目录查询与库存扣减的实例。
"""
from products.domain import ProductRepository, StockAdjuster
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository
from products.infrastructure.services.stock_adjuster import DjangoStockAdjuster


class ProductInfrastructureFactory:
    """
    商品基础设施层工厂类。
    """
    
    def __init__(self):
        # 存储已创建的实例
        self._product_repository = None
        self._stock_adjuster = None
    
    def create_product_repository(self) -> ProductRepository:
        """
        创建商品仓储。
        
        Returns:
            商品仓储实例
        """
        if not self._product_repository:
            self._product_repository = DjangoProductRepository()
        
        return self._product_repository
    
    def create_stock_adjuster(self) -> StockAdjuster:
        """
        创建库存扣减服务。
        
        Returns:
            库存扣减服务实例
        """
        if not self._stock_adjuster:
            self._stock_adjuster = DjangoStockAdjuster()
        
        return self._stock_adjuster
