"""
领域异常模块。
包含领域模型中使用的各种异常类。
"""
from typing import Any, Optional


class DomainException(Exception):
    """
    领域异常基类。
    所有领域模型中的异常都应继承自此类。
    """
    
    def __init__(self, message: str):
        """
        初始化领域异常。
        
        Args:
            message: 异常消息
        """
        self.message = message
        super().__init__(self.message)


class EntityNotFoundException(DomainException):
    """
    实体未找到异常。
    当请求的实体不存在时抛出。
    """
    
    def __init__(self, entity_name: str, entity_id: Any):
        """
        初始化实体未找到异常。
        
        Args:
            entity_name: 实体名称
            entity_id: 实体ID
        """
        message = f"无法找到{entity_name}: ID={entity_id}"
        super().__init__(message)
        self.entity_name = entity_name
        self.entity_id = entity_id


class ProductNotFoundException(EntityNotFoundException):
    """下单时引用的商品不存在"""
    
    def __init__(self, product_id: Any):
        super().__init__("商品", product_id)
        self.product_id = product_id


class OrderNotFoundException(EntityNotFoundException):
    """订单不存在"""
    
    def __init__(self, order_id: Any):
        super().__init__("订单", order_id)
        self.order_id = order_id


class BusinessRuleViolationException(DomainException):
    """
    业务规则违反异常。
    当违反业务规则时抛出。
    """
    
    def __init__(self, rule_name: str, message: str):
        """
        初始化业务规则违反异常。
        
        Args:
            rule_name: 规则名称
            message: 异常消息
        """
        full_message = f"违反业务规则 '{rule_name}': {message}"
        super().__init__(full_message)
        self.rule_name = rule_name


class InvalidStatusTransitionException(BusinessRuleViolationException):
    """
    订单状态变更非法异常。
    仅在启用严格状态机时抛出。
    """
    
    def __init__(self, order_id: Any, current_status: str, target_status: str):
        """
        初始化订单状态变更非法异常。
        
        Args:
            order_id: 订单ID
            current_status: 当前状态
            target_status: 目标状态
        """
        super().__init__(
            "order_status_transition",
            f"订单(ID={order_id})状态不能从 {current_status} 变更为 {target_status}"
        )
        self.order_id = order_id
        self.current_status = current_status
        self.target_status = target_status


class ConcurrencyException(DomainException):
    """
    并发异常。
    当发生并发冲突时抛出，例如在乐观锁情况下。
    """
    
    def __init__(self, message: str):
        super().__init__(message)


class StockRaceException(ConcurrencyException):
    """
    库存扣减竞争失败异常。
    订单已创建，但扣减时该尺码的实时库存已不足（被并发订单抢先）。
    """
    
    def __init__(self, product_id: Any, size: str, requested: int):
        """
        初始化库存扣减竞争失败异常。
        
        Args:
            product_id: 商品ID
            size: 尺码
            requested: 需扣减数量
        """
        message = f"商品(ID={product_id})尺码{size}库存扣减失败，实时库存不足{requested}件"
        super().__init__(message)
        self.product_id = product_id
        self.size = size
        self.requested = requested


class InsufficientStockException(DomainException):
    """
    库存不足异常。
    当商品某尺码的库存不足以满足请求时抛出。
    """
    
    def __init__(
        self,
        product_id: Any,
        size: str,
        requested: int,
        available: int,
        product_name: Optional[str] = None
    ):
        """
        初始化库存不足异常。
        
        Args:
            product_id: 商品ID
            size: 尺码
            requested: 请求数量
            available: 可用数量
            product_name: 商品名称
        """
        label = f"{product_name}(ID={product_id})" if product_name else f"(ID={product_id})"
        message = f"商品{label}尺码{size}库存不足，请求:{requested}，可用:{available}"
        super().__init__(message)
        self.product_id = product_id
        self.product_name = product_name
        self.size = size
        self.requested = requested
        self.available = available


class ValidationException(DomainException):
    """
    数据验证异常。
    当数据验证失败时抛出。
    """
    
    def __init__(self, field_name: Optional[str] = None, message: str = "数据验证失败"):
        """
        初始化数据验证异常。
        
        Args:
            field_name: 字段名称
            message: 异常消息
        """
        if field_name:
            full_message = f"字段'{field_name}'验证失败: {message}"
        else:
            full_message = message
        super().__init__(full_message)
        self.field_name = field_name


class EmptyOrderException(ValidationException):
    """订单中没有任何商品行"""
    
    def __init__(self):
        super().__init__("items", "订单至少需要包含一件商品")


class AuthorizationException(DomainException):
    """
    授权异常。
    当用户没有执行操作的权限时抛出。
    """
    
    def __init__(self, user_id: Any, operation: str, resource: Optional[str] = None):
        """
        初始化授权异常。
        
        Args:
            user_id: 用户ID
            operation: 操作名称
            resource: 资源名称
        """
        if resource:
            message = f"用户(ID={user_id})没有权限执行'{operation}'操作，资源: {resource}"
        else:
            message = f"用户(ID={user_id})没有权限执行'{operation}'操作"
        super().__init__(message)
        self.user_id = user_id
        self.operation = operation
        self.resource = resource
