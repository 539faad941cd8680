"""
领域事件模块。
包含DomainEvent基类和DomainEvents管理器，用于领域事件的发布和订阅。
"""
from datetime import datetime
from typing import Callable, Dict, List, Type
import uuid

from loguru import logger


class DomainEvent:
    """
    领域事件基类。
    领域事件表示领域模型中发生的重要事件，通常用于跨聚合的业务流程。
    """
    
    def __init__(self):
        """
        初始化领域事件。
        自动设置事件ID和发生时间。
        """
        self.id = uuid.uuid4()
        self.occurred_on = datetime.now()


# 事件处理器类型
EventHandler = Callable[[DomainEvent], None]


class DomainEvents:
    """
    领域事件管理器。
    负责事件的发布和订阅。
    """
    
    # 事件处理器字典，键为事件类型，值为处理器列表
    _handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}
    
    @classmethod
    def register(cls, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        注册事件处理器。同一处理器重复注册只保留一次。
        
        Args:
            event_type: 事件类型
            handler: 事件处理器函数
        """
        handlers = cls._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
    
    @classmethod
    def unregister(cls, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        取消注册事件处理器。
        
        Args:
            event_type: 事件类型
            handler: 事件处理器函数
        """
        if event_type in cls._handlers and handler in cls._handlers[event_type]:
            cls._handlers[event_type].remove(handler)
            if not cls._handlers[event_type]:
                del cls._handlers[event_type]
    
    @classmethod
    def publish(cls, event: DomainEvent) -> None:
        """
        发布事件。
        调用所有注册到该事件类型的处理器；单个处理器失败不影响其余处理器和发布方。
        
        Args:
            event: 要发布的事件
        """
        for handler in list(cls._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"领域事件处理失败: {type(event).__name__} - {e}")
    
    @classmethod
    def clear_handlers(cls) -> None:
        """
        清除所有事件处理器。
        通常用于测试环境的重置。
        """
        cls._handlers.clear()
