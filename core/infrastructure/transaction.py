"""
事务管理器模块。
提供事务控制的接口和实现。
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Generator
from django.db import transaction as django_transaction
from loguru import logger


class TransactionManager(ABC):
    """
    事务管理器接口。
    定义开启事务的抽象方法。
    """
    
    @abstractmethod
    @contextmanager
    def start(self) -> Generator[None, None, None]:
        """
        开启一个事务。
        返回一个上下文管理器，用于在作用域结束时自动提交或回滚事务。
        
        Yields:
            None
        """
        pass


class DjangoTransactionManager(TransactionManager):
    """
    基于Django的事务管理器实现。
    使用Django的事务机制来管理事务。
    """
    
    @contextmanager
    def start(self) -> Generator[None, None, None]:
        """
        使用Django的事务机制开启一个事务。
        
        Yields:
            None
        """
        try:
            with django_transaction.atomic():
                logger.debug("事务已开启")
                yield
                logger.debug("事务已提交")
        except Exception as e:
            logger.error(f"事务回滚: {e}")
            raise
