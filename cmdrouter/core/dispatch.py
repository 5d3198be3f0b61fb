"""
命令执行

对匹配到的描述依次执行：权限检查 -> 调用者种类检查 -> 调用处理函数。
处理函数内部的异常在这里被捕获并记录，不会继续向上抛出。
"""

from enum import Enum
from typing import Any, Sequence, TYPE_CHECKING

from cmdrouter.utils import get_log, HandlerInvocationError

from .descriptor import CommandDescriptor
from .invoker import CommandInvoker

if TYPE_CHECKING:
    from .context import CommandContext

LOG = get_log("DispatchEngine")


class DispatchOutcome(str, Enum):
    DENIED = "denied"  # 缺少权限
    INCOMPATIBLE = "incompatible"  # 调用者种类不符
    COMPLETED = "completed"
    FAILED = "failed"  # 处理函数抛出异常


class DispatchEngine:
    def __init__(self, context: "CommandContext"):
        self._context = context

    def invoke(
        self,
        invoker: CommandInvoker,
        descriptor: CommandDescriptor,
        arguments: Sequence[Any] = (),
    ) -> DispatchOutcome:
        messages = self._context.messages

        if descriptor.permission and not invoker.has_permission(descriptor.permission):
            invoker.send_message(messages.no_permission)
            return DispatchOutcome.DENIED

        if not descriptor.accepts(invoker.kind):
            if not invoker.is_player_like():
                invoker.send_message(messages.player_only)
            else:
                invoker.send_message(messages.wrong_invoker.format(kind=invoker.kind.value))
            return DispatchOutcome.INCOMPATIBLE

        try:
            descriptor.handler(invoker.native, *arguments)
        except Exception as e:
            try:
                error = HandlerInvocationError(descriptor, arguments, e)
                LOG.error(f"{error.info} (invoker={invoker!r})", exc_info=True)
            except Exception:
                LOG.error(f"执行命令 '{descriptor.command}' 时出错，且无法格式化诊断信息", exc_info=True)
            invoker.send_message(messages.execution_failed.format(command=descriptor.base_command))
            return DispatchOutcome.FAILED

        return DispatchOutcome.COMPLETED
