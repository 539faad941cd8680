"""
统一异常处理器。
提供全局异常处理机制，将各种异常转换为统一的API响应格式。
"""
import logging
from django.http import Http404
from django.core.exceptions import PermissionDenied
from rest_framework.views import exception_handler
from rest_framework.exceptions import (
    APIException, 
    NotAuthenticated, 
    AuthenticationFailed,
    PermissionDenied as DRFPermissionDenied,
    ValidationError as DRFValidationError
)
from rest_framework import status

from core.domain.exceptions import (
    DomainException,
    EntityNotFoundException,
    ProductNotFoundException,
    OrderNotFoundException,
    InsufficientStockException,
    EmptyOrderException,
    StockRaceException,
    InvalidStatusTransitionException,
    ConcurrencyException,
    ValidationException,
    AuthorizationException,
)
from core.infrastructure.response import ApiResponseBuilder, StatusCode

logger = logging.getLogger(__name__)

# 领域异常 -> (业务状态码, HTTP状态码)，按顺序匹配，子类必须排在父类之前
DOMAIN_EXCEPTION_MAPPING = (
    # 下单时引用的商品不存在属于请求数据错误
    (ProductNotFoundException, StatusCode.PRODUCT_NOT_FOUND, status.HTTP_400_BAD_REQUEST),
    (OrderNotFoundException, StatusCode.ORDER_NOT_FOUND, status.HTTP_404_NOT_FOUND),
    (EntityNotFoundException, StatusCode.ENTITY_NOT_FOUND, status.HTTP_404_NOT_FOUND),
    (InsufficientStockException, StatusCode.PRODUCT_STOCK_INSUFFICIENT, status.HTTP_400_BAD_REQUEST),
    (EmptyOrderException, StatusCode.EMPTY_ORDER, status.HTTP_400_BAD_REQUEST),
    (ValidationException, StatusCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST),
    (InvalidStatusTransitionException, StatusCode.INVALID_STATUS_TRANSITION, status.HTTP_409_CONFLICT),
    (StockRaceException, StatusCode.STOCK_RACE, status.HTTP_409_CONFLICT),
    (ConcurrencyException, StatusCode.CONFLICT, status.HTTP_409_CONFLICT),
    (AuthorizationException, StatusCode.FORBIDDEN, status.HTTP_403_FORBIDDEN),
    (DomainException, StatusCode.BAD_REQUEST, status.HTTP_400_BAD_REQUEST),
)


def unified_exception_handler(exc, context):
    """
    统一异常处理器，将各种异常转换为统一的API响应格式。
    
    Args:
        exc: 异常对象
        context: 异常上下文
        
    Returns:
        Response: 统一格式的API响应
    """
    request = context.get('request')
    
    # 1. 处理领域异常
    for exc_type, code, http_code in DOMAIN_EXCEPTION_MAPPING:
        if isinstance(exc, exc_type):
            if request is not None:
                logger.info(f"领域异常: {request.method} {request.path} - {exc.__class__.__name__}: {exc}")
            return ApiResponseBuilder.fail(message=str(exc), code=code, http_code=http_code)
    
    # 2. 处理Django异常
    if isinstance(exc, Http404):
        return ApiResponseBuilder.fail(
            message="请求的资源不存在",
            code=StatusCode.NOT_FOUND,
            http_code=status.HTTP_404_NOT_FOUND
        )
    
    if isinstance(exc, PermissionDenied):
        return ApiResponseBuilder.fail(
            message="权限不足",
            code=StatusCode.FORBIDDEN,
            http_code=status.HTTP_403_FORBIDDEN
        )
    
    # 3. 处理DRF异常
    if isinstance(exc, NotAuthenticated):
        return ApiResponseBuilder.fail(
            message="请先登录",
            code=StatusCode.UNAUTHORIZED,
            http_code=status.HTTP_401_UNAUTHORIZED
        )
    
    if isinstance(exc, AuthenticationFailed):
        return ApiResponseBuilder.fail(
            message="身份验证失败",
            code=StatusCode.TOKEN_INVALID,
            http_code=status.HTTP_401_UNAUTHORIZED
        )
    
    if isinstance(exc, DRFPermissionDenied):
        return ApiResponseBuilder.fail(
            message="权限不足",
            code=StatusCode.FORBIDDEN,
            http_code=status.HTTP_403_FORBIDDEN
        )
    
    if isinstance(exc, DRFValidationError):
        return ApiResponseBuilder.fail(
            message="数据验证失败",
            code=StatusCode.VALIDATION_ERROR,
            data=exc.detail,
            http_code=status.HTTP_400_BAD_REQUEST
        )
    
    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        return ApiResponseBuilder.fail(
            message=str(exc),
            code=StatusCode.BAD_REQUEST,
            http_code=response.status_code if response is not None else exc.status_code
        )
    
    # 4. 处理其他未预期的异常
    if request is not None:
        logger.exception(f"未处理的异常: {request.method} {request.path} - {exc.__class__.__name__}: {exc}")
    else:
        logger.exception(f"未处理的异常: {exc.__class__.__name__}: {exc}")
    return ApiResponseBuilder.fail(
        message="服务器内部错误",
        code=StatusCode.SERVER_ERROR,
        http_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
