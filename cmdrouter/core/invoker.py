"""
调用者抽象

调用者以 InvokerKind 显式区分种类，兼容性检查只比较种类，不检查原生对象的类。
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class InvokerKind(str, Enum):
    PLAYER = "player"
    CONSOLE = "console"
    REMOTE = "remote"
    BLOCK = "block"
    OTHER = "other"


class CommandInvoker(ABC, Generic[T]):
    """命令调用者

    包装嵌入方的原生调用者对象（玩家、控制台等），
    处理函数收到的第一个参数就是 native。
    """

    kind: InvokerKind = InvokerKind.OTHER

    def __init__(self, native: T):
        self._native = native

    @property
    def native(self) -> T:
        """原生调用者对象"""
        return self._native

    @abstractmethod
    def send_message(self, text: str) -> None:
        """向调用者发送消息"""

    @abstractmethod
    def has_permission(self, node: str) -> bool:
        """调用者是否拥有权限节点"""

    def is_player_like(self) -> bool:
        return self.kind is InvokerKind.PLAYER

    def __repr__(self) -> str:
        native = "self" if self._native is self else type(self._native).__name__
        return f"{type(self).__name__}(kind={self.kind.value}, native={native})"
