"""
仓储接口模块。
定义仓储接口，用于持久化和检索领域对象。
"""
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')


class ReadOnlyRepository(Generic[T], ABC):
    """
    只读仓储接口。
    适用于只被本模块读取、由外部协作方维护的实体。
    """
    
    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """
        根据ID获取实体。
        
        Args:
            id: 实体ID
            
        Returns:
            找到的实体，如果不存在则返回None
        """
        pass


class Repository(ReadOnlyRepository[T], ABC):
    """
    仓储接口。
    定义了可写仓储必须实现的基本操作。
    """
    
    @abstractmethod
    def save(self, entity: T) -> T:
        """
        保存实体。
        如果实体已存在则更新，否则创建。
        
        Args:
            entity: 要保存的实体
            
        Returns:
            保存后的实体
        """
        pass
