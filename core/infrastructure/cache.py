"""
缓存服务模块。
提供缓存服务的接口和实现。
"""
from abc import ABC, abstractmethod
import pickle
from typing import Any, Optional

from cachetools import TTLCache
from django.conf import settings
from loguru import logger
import redis


class CacheService(ABC):
    """
    缓存服务接口。
    定义缓存操作的抽象方法。
    """
    
    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        从缓存中获取值。
        
        Args:
            key: 缓存键
            
        Returns:
            缓存值，如果不存在则返回None
        """
        pass
    
    @abstractmethod
    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """
        将值存入缓存。
        
        Args:
            key: 缓存键
            value: 要缓存的值
            ttl: 过期时间（秒）
            
        Returns:
            是否成功
        """
        pass
    
    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        从缓存中删除键。
        
        Args:
            key: 缓存键
            
        Returns:
            是否成功
        """
        pass


class RedisCacheService(CacheService):
    """
    基于Redis的缓存服务实现。
    使用Redis作为缓存存储，值以pickle序列化。
    """
    
    def __init__(self, redis_client: redis.Redis, key_prefix: str = "storefront:"):
        """
        初始化Redis缓存服务。
        
        Args:
            redis_client: Redis客户端
            key_prefix: 键前缀
        """
        self.redis_client = redis_client
        self.key_prefix = key_prefix
    
    def _get_full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"
    
    def get(self, key: str) -> Optional[Any]:
        full_key = self._get_full_key(key)
        try:
            value = self.redis_client.get(full_key)
            if value:
                logger.debug(f"Redis缓存命中: {key}")
                return pickle.loads(value)
        except (redis.RedisError, pickle.PickleError) as e:
            logger.error(f"Redis缓存读取错误: {e}")
        
        logger.debug(f"缓存未命中: {key}")
        return None
    
    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        full_key = self._get_full_key(key)
        try:
            serialized = pickle.dumps(value)
            result = self.redis_client.setex(full_key, ttl, serialized)
            logger.debug(f"缓存已设置: {key}, TTL: {ttl}秒")
            return bool(result)
        except (redis.RedisError, pickle.PickleError) as e:
            logger.error(f"Redis缓存写入错误: {e}")
            return False
    
    def delete(self, key: str) -> bool:
        full_key = self._get_full_key(key)
        try:
            result = self.redis_client.delete(full_key)
            logger.debug(f"缓存已删除: {key}")
            return result > 0
        except redis.RedisError as e:
            logger.error(f"Redis缓存删除错误: {e}")
            return False


class MemoryCacheService(CacheService):
    """
    基于内存的缓存服务实现。
    使用TTLCache实现的纯内存缓存，适用于开发环境和测试。
    所有键共享同一个TTL，set的ttl参数仅用于接口兼容。
    """
    
    def __init__(self, maxsize: int = 1000, default_ttl: int = 300):
        """
        初始化内存缓存服务。
        
        Args:
            maxsize: 最大缓存项数
            default_ttl: 默认TTL（秒）
        """
        self.cache = TTLCache(maxsize=maxsize, ttl=default_ttl)
    
    def get(self, key: str) -> Optional[Any]:
        return self.cache.get(key)
    
    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.cache[key] = value
        return True
    
    def delete(self, key: str) -> bool:
        return self.cache.pop(key, None) is not None


class NoCacheService(CacheService):
    """
    空缓存服务实现。
    不进行实际缓存，适用于禁用缓存的场景。
    """
    
    def get(self, key: str) -> Optional[Any]:
        return None
    
    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        return True
    
    def delete(self, key: str) -> bool:
        return True


def build_cache_service() -> CacheService:
    """
    根据Django缓存配置创建缓存服务。
    默认缓存后端为django_redis时复用其连接池，否则禁用缓存。
    
    Returns:
        缓存服务实例
    """
    backend = settings.CACHES.get('default', {}).get('BACKEND', '')
    if backend.startswith('django_redis'):
        from django_redis import get_redis_connection
        
        key_prefix = settings.CACHES['default'].get('KEY_PREFIX', 'storefront')
        return RedisCacheService(
            redis_client=get_redis_connection("default"),
            key_prefix=f"{key_prefix}:"
        )
    return NoCacheService()
