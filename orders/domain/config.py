"""
订单模块配置。
从Django设置中读取订单模块的配置，每次调用时重新读取。
"""
from typing import Any, Dict

from django.conf import settings


def get_order_settings() -> Dict[str, Any]:
    """获取订单模块配置，如果不存在则返回空字典"""
    return getattr(settings, 'ORDER_SETTINGS', {})


def cache_timeout() -> int:
    """订单详情缓存超时（秒），0表示不缓存"""
    return get_order_settings().get('CACHE_TIMEOUT', 300)


def strict_status_transitions() -> bool:
    """是否启用严格的订单状态机"""
    return get_order_settings().get('STRICT_STATUS_TRANSITIONS', False)
