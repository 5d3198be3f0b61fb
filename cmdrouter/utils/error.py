"""
错误类型定义

用户输入类错误（ArgumentFormatError / ArityError）可恢复，只回报给调用者；
ConfigurationError / HandlerInvocationError 属于内部错误，由捕获方记录日志。
"""

from __future__ import annotations

import reprlib
from typing import Any, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from cmdrouter.core.descriptor import CommandDescriptor


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", str(target_type))


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<{type(value).__name__}>"


class CommandRouterError(Exception):
    """cmdrouter 所有错误的基类"""

    def __init__(self, info: str):
        self.info = info
        super().__init__(info)


class UserInputError(CommandRouterError):
    """用户输入错误，带有展示给调用者的消息"""

    def __init__(self, info: str, display_message: str):
        super().__init__(info)
        self.display_message = display_message

    def with_usage(self, usage_line: str) -> "UserInputError":
        """追加用法提示，返回自身"""
        self.display_message = f"{self.display_message}\n{usage_line}"
        return self


class ArgumentFormatError(UserInputError):
    """单个参数无法转换为目标类型"""

    def __init__(self, token: str, target_type: Any, reason: str):
        self.token = token
        self.target_type = target_type
        self.reason = reason
        super().__init__(
            f"无法将参数 '{token}' 解析为 {_type_name(target_type)}",
            f"'{token}' {reason}",
        )


class ArityError(UserInputError):
    """提供的参数数量不满足处理函数的要求"""

    def __init__(self, required: int, supplied: int, display_message: Optional[str] = None):
        self.required = required
        self.supplied = supplied
        super().__init__(
            f"参数数量不匹配：需要 {required} 个，实际传入 {supplied} 个",
            display_message or "参数数量不正确。",
        )


class ConfigurationError(CommandRouterError):
    """不支持的参数类型，属于开发者错误"""

    def __init__(self, target_type: Any):
        self.target_type = target_type
        super().__init__(f"不支持的参数类型: {_type_name(target_type)}")


class HandlerInvocationError(CommandRouterError):
    """处理函数内部抛出的异常，仅在分发边界用于记录日志"""

    def __init__(
        self,
        descriptor: "CommandDescriptor",
        arguments: Sequence[Any],
        cause: BaseException,
    ):
        self.descriptor = descriptor
        self.arguments = tuple(arguments)
        self.cause = cause
        super().__init__(
            f"执行命令 '{descriptor.command}' 时出错 "
            f"(handler={descriptor.handler_name}, args={reprlib.repr(self.arguments)}): "
            f"{type(cause).__name__}: {_safe_str(cause)}"
        )


class ConfigLoadError(CommandRouterError):
    """配置文件无法读取或校验失败"""
