"""
统一响应封装模块。
所有接口返回 {code, success, message, data?, timestamp, traceId, metadata?} 结构。
"""
import time
import uuid
import typing as t
from dataclasses import dataclass, field

from rest_framework.response import Response
from rest_framework import status as http_status


@dataclass
class ApiResponse:
    """API响应数据结构"""
    code: int = 10000  # 业务状态码
    success: bool = True
    message: str = "操作成功"
    data: t.Any = None
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))  # 毫秒
    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    metadata: t.Dict[str, t.Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        result = {
            "code": self.code,
            "success": self.success,
            "message": self.message,
            "timestamp": self.timestamp,
            "traceId": self.trace_id,
        }
        # data和metadata为空时省略
        if self.data is not None:
            result["data"] = self.data
        if self.metadata:
            result["metadata"] = self.metadata
        return result


class ApiResponseBuilder:
    """API响应构建器"""
    
    @staticmethod
    def build(
        success: bool,
        message: str,
        code: int,
        http_code: int,
        data: t.Any = None,
        metadata: t.Optional[t.Dict[str, t.Any]] = None
    ) -> Response:
        """
        构建统一格式的DRF响应。
        
        Args:
            success: 是否成功
            message: 响应消息
            code: 业务状态码
            http_code: HTTP状态码
            data: 响应数据
            metadata: 元数据，例如下单时的库存警告
            
        Returns:
            Response: DRF响应对象
        """
        body = ApiResponse(
            code=code,
            success=success,
            message=message,
            data=data,
            metadata=metadata or {}
        )
        return Response(body.to_dict(), status=http_code)
    
    @classmethod
    def success(cls, data=None, message="操作成功", code=10000, metadata=None) -> Response:
        return cls.build(True, message, code, http_status.HTTP_200_OK, data, metadata)
    
    @classmethod
    def created(cls, data=None, message="创建成功", code=10001, metadata=None) -> Response:
        return cls.build(True, message, code, http_status.HTTP_201_CREATED, data, metadata)
    
    @classmethod
    def fail(
        cls,
        message="操作失败",
        code=50000,
        data=None,
        http_code=http_status.HTTP_400_BAD_REQUEST,
        metadata=None
    ) -> Response:
        return cls.build(False, message, code, http_code, data, metadata)


class StatusCode:
    """业务状态码定义"""
    
    # 成功 (1xxxx)
    SUCCESS = 10000
    CREATED = 10001
    UPDATED = 10002
    
    # 请求错误 (400xx)
    BAD_REQUEST = 40000
    VALIDATION_ERROR = 40001
    
    # 认证和授权 (401xx-403xx)
    UNAUTHORIZED = 40100           # 未登录
    TOKEN_INVALID = 40102          # 身份验证失败
    FORBIDDEN = 40300
    
    # 资源不存在 (404xx)
    NOT_FOUND = 40400
    ENTITY_NOT_FOUND = 40401
    PRODUCT_NOT_FOUND = 40403
    ORDER_NOT_FOUND = 40404
    
    # 冲突 (409xx)
    CONFLICT = 40900               # 并发修改冲突
    STOCK_RACE = 40903             # 库存扣减竞争失败
    
    # 商品模块 (410xx)
    PRODUCT_STOCK_INSUFFICIENT = 41001
    
    # 订单模块 (411xx)
    EMPTY_ORDER = 41103
    INVALID_STATUS_TRANSITION = 41104
    
    # 服务端错误 (5xxxx)
    SERVER_ERROR = 50000
