"""
订单基础设施层工厂。
负责组装订单仓储、领域服务和应用服务。
"""
from core.infrastructure.cache import CacheService, build_cache_service
from core.infrastructure.transaction import DjangoTransactionManager, TransactionManager
from orders.application.order_service import OrderApplicationService
from orders.domain import config
from orders.domain.repositories import OrderRepository
from orders.domain.services import OrderBuilder, OrderStatusMachine
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
from products.infrastructure.factory import ProductInfrastructureFactory


class OrderInfrastructureFactory:
    """
    订单基础设施层工厂类。
    """
    
    def __init__(self, product_factory: ProductInfrastructureFactory = None):
        self.product_factory = product_factory or ProductInfrastructureFactory()
        self._order_repository = None
        self._transaction_manager = None
        self._cache_service = None
    
    def create_order_repository(self) -> OrderRepository:
        if not self._order_repository:
            self._order_repository = DjangoOrderRepository()
        return self._order_repository
    
    def create_transaction_manager(self) -> TransactionManager:
        if not self._transaction_manager:
            self._transaction_manager = DjangoTransactionManager()
        return self._transaction_manager
    
    def create_cache_service(self) -> CacheService:
        if not self._cache_service:
            self._cache_service = build_cache_service()
        return self._cache_service
    
    def create_order_builder(self) -> OrderBuilder:
        return OrderBuilder(
            product_repository=self.product_factory.create_product_repository(),
            stock_adjuster=self.product_factory.create_stock_adjuster(),
            order_repository=self.create_order_repository(),
            transaction_manager=self.create_transaction_manager(),
        )
    
    def create_status_machine(self) -> OrderStatusMachine:
        return OrderStatusMachine(
            order_repository=self.create_order_repository(),
            strict=config.strict_status_transitions(),
        )
    
    def create_order_service(self) -> OrderApplicationService:
        """
        创建订单应用服务。
        
        Returns:
            订单应用服务实例
        """
        return OrderApplicationService(
            order_builder=self.create_order_builder(),
            status_machine=self.create_status_machine(),
            order_repository=self.create_order_repository(),
            product_repository=self.product_factory.create_product_repository(),
            cache_service=self.create_cache_service(),
            cache_timeout=config.cache_timeout(),
        )
