"""
命令注册表

基础命令 -> SubcommandIndex 的映射，提供注册与分发入口。

使用示例：
    ```python
    registry = CommandRegistry(CommandContext(environment="DEV"))

    @registry.command("home set", permission="home.set", usage="/home set <name>")
    def set_home(player, name: str):
        ...

    registry.dispatch(invoker, "home", ["set", "base"])
    ```
"""

import threading
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypedDict,
)

from typing_extensions import Unpack

from cmdrouter.utils import get_log, UserInputError

from .context import CommandContext
from .descriptor import CommandDescriptor, CommandSpec
from .dispatch import DispatchEngine
from .environment import Environment
from .index import SubcommandIndex
from .invoker import CommandInvoker, InvokerKind

LOG = get_log("CommandRegistry")


class CommandOptions(TypedDict, total=False):
    """register / command 可用的关键字参数"""
    description: str
    usage: str
    permission: Optional[str]
    environments: Environment
    args_types: Sequence[Any]
    aliases: Sequence[str]
    invoker_kinds: Iterable[InvokerKind]


class RegistrationListener:
    """注册通知接收者，默认实现什么也不做，按需覆盖"""

    def base_command_registered(self, registry: "CommandRegistry", base_command: str) -> None:
        """某个基础命令第一次注册时调用，每个基础命令只调用一次"""

    def command_registered(self, registry: "CommandRegistry", descriptor: CommandDescriptor) -> None:
        """每注册一个描述（主命令或别名）调用一次"""


class CommandRegistry:
    def __init__(
        self,
        context: Optional[CommandContext] = None,
        listener: Optional[RegistrationListener] = None,
    ):
        self.context = context or CommandContext()
        self.listener = listener or RegistrationListener()
        self.engine = DispatchEngine(self.context)
        self._indexes: Dict[str, SubcommandIndex] = {}
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # 注册
    # -------------------------------------------------------------------------

    def register_command(self, spec: CommandSpec) -> List[CommandDescriptor]:
        """注册命令声明，主命令和每个别名各生成一个描述

        Returns:
            本次注册生成的描述列表
        """
        registered: List[CommandDescriptor] = []
        for descriptor in spec.to_descriptors():
            base = descriptor.base_command
            with self._lock:
                is_new_base = base not in self._indexes
                if is_new_base:
                    self._indexes[base] = SubcommandIndex(base, self.context)
                self._indexes[base].attach(descriptor)

            if is_new_base:
                LOG.debug(f"新的基础命令: {base}")
                self.listener.base_command_registered(self, base)
            LOG.debug(f"注册命令 '{descriptor.command}' -> {descriptor.handler_name}")
            self.listener.command_registered(self, descriptor)
            registered.append(descriptor)
        return registered

    def register(
        self,
        command: str,
        handler: Callable[..., Any],
        **options: Unpack[CommandOptions],
    ) -> List[CommandDescriptor]:
        """注册处理函数，未给出 args_types 时从函数签名推导"""
        return self.register_command(CommandSpec.from_function(handler, command, **options))

    def command(self, command: str, **options: Unpack[CommandOptions]):
        """装饰器形式的 register，返回原函数"""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(command, func, **options)
            return func

        return decorator

    def register_all(self, specs: Iterable[CommandSpec]) -> int:
        """批量注册外部提供的命令声明，返回生成的描述数量"""
        count = 0
        for spec in specs:
            count += len(self.register_command(spec))
        LOG.info(f"已注册 {count} 个命令描述，共 {len(self._indexes)} 个基础命令")
        return count

    def register_parameter_type(self, target_type: Any, parser: Callable[[str], Any]) -> None:
        self.context.register_parameter_type(target_type, parser)

    # -------------------------------------------------------------------------
    # 查询
    # -------------------------------------------------------------------------

    def has_command(self, base_command: str) -> bool:
        return base_command in self._indexes

    def get_index(self, base_command: str) -> Optional[SubcommandIndex]:
        return self._indexes.get(base_command)

    def base_commands(self) -> List[str]:
        return list(self._indexes.keys())

    def get_all_descriptors(self) -> Mapping[str, Tuple[CommandDescriptor, ...]]:
        """按基础命令分组的只读快照，仅供帮助信息等展示用途"""
        with self._lock:
            snapshot = {base: index.descriptors() for base, index in self._indexes.items()}
        return MappingProxyType(snapshot)

    # -------------------------------------------------------------------------
    # 分发
    # -------------------------------------------------------------------------

    def dispatch(self, invoker: CommandInvoker, base_command: str, tokens: Sequence[str]) -> bool:
        """分发一条命令

        Returns:
            基础命令已注册且匹配到子命令时返回 True（无论处理函数是否成功），否则 False
        """
        index = self._indexes.get(base_command)
        if index is None:
            return False

        try:
            matched = index.match(tokens)
        except UserInputError as e:
            LOG.debug(f"命令 '{base_command}' 参数错误: {e.info}")
            invoker.send_message(e.display_message)
            return False

        if matched is None:
            LOG.debug(f"命令 '{base_command}' 没有匹配的子命令: {list(tokens)!r}")
            return False

        outcome = self.engine.invoke(invoker, matched.descriptor, matched.arguments)
        LOG.debug(f"命令 '{matched.descriptor.command}' 执行结果: {outcome.value}")
        return True

    def dispatch_line(self, invoker: CommandInvoker, line: str) -> bool:
        """分发一整行文本，可带命令前缀（默认 "/"）"""
        line = line.strip()
        prefix = self.context.command_prefix
        if prefix and line.startswith(prefix):
            line = line[len(prefix):]
        if not line:
            return False
        base_command, *tokens = line.split(" ")
        return self.dispatch(invoker, base_command, tokens)
