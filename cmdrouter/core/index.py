"""
子命令索引

同一基础命令下的所有子命令，按路径长度降序匹配（同长度按字典序），
保证更具体的子命令（如 "set region"）优先于较短的（"set"）。

参数绑定策略：
- 未声明参数：忽略剩余文本
- 只声明一个 Sentence：剩余文本整体作为一个值
- 其它：按位置逐个转换，数量不足抛出 ArityError，多余的 token 默认丢弃
"""

import threading
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, TYPE_CHECKING

from cmdrouter.utils import get_log, ArityError, ConfigurationError, UserInputError

from .descriptor import CommandDescriptor, MatchResult
from .environment import has_flag
from .params import Sentence

if TYPE_CHECKING:
    from .context import CommandContext

LOG = get_log("SubcommandIndex")


def _order_key(item: Tuple[str, CommandDescriptor]):
    path = item[0]
    return (-len(path), path)


class SubcommandIndex:
    """一个基础命令及其全部子命令"""

    def __init__(self, base_command: str, context: "CommandContext"):
        self.base_command = base_command
        self._context = context
        self._subcommands: Dict[str, CommandDescriptor] = {}
        # 已排序的只读快照，match 只读它，无需加锁
        self._ordered: Tuple[Tuple[str, CommandDescriptor], ...] = ()
        self._lock = threading.RLock()

    def attach(self, descriptor: CommandDescriptor) -> Optional[CommandDescriptor]:
        """挂载子命令，同一路径后注册的覆盖先注册的

        Returns:
            被覆盖的旧描述，没有则为 None
        """
        if descriptor.base_command != self.base_command:
            raise ValueError(
                f"描述的基础命令 {descriptor.base_command!r} 与索引 {self.base_command!r} 不一致"
            )
        path = descriptor.subcommand_path
        with self._lock:
            previous = self._subcommands.get(path)
            self._subcommands[path] = descriptor
            self._ordered = tuple(sorted(self._subcommands.items(), key=_order_key))

        if previous is not None:
            LOG.debug(f"子命令 '{descriptor.command}' 被覆盖: {previous.handler_name} -> {descriptor.handler_name}")
        return previous

    def get(self, path: str) -> Optional[CommandDescriptor]:
        return self._subcommands.get(path)

    def descriptors(self) -> Tuple[CommandDescriptor, ...]:
        """按匹配顺序返回所有描述"""
        return tuple(descriptor for _, descriptor in self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, path: object) -> bool:
        return path in self._subcommands

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self.descriptors())

    def match(self, tokens: Sequence[str]) -> Optional[MatchResult]:
        """根据参数 token 匹配子命令

        Raises:
            ArityError: 匹配到的子命令参数不足（或严格模式下参数过多）
            ArgumentFormatError: 参数无法转换为声明的类型
        """
        probe = " ".join(tokens)
        environment = self._context.environment

        for path, descriptor in self._ordered:
            if not probe.startswith(path):
                continue
            if not has_flag(environment, descriptor.environments):
                LOG.debug(f"子命令 '{descriptor.command}' 不允许在 {environment.name} 环境运行，跳过")
                continue

            unsupported = [t for t in descriptor.parameter_types if not self._context.parser.is_supported(t)]
            if unsupported:
                LOG.error(
                    f"子命令 '{descriptor.command}' ({descriptor.handler_name}) 配置错误: "
                    f"{ConfigurationError(unsupported[0])}，尝试其它候选"
                )
                continue

            remainder = probe[len(path):].strip()
            try:
                arguments = self._bind(descriptor, remainder)
            except UserInputError as e:
                raise e.with_usage(self._context.usage_line(descriptor.render_usage()))

            LOG.debug(f"匹配到子命令 '{descriptor.command}'，参数: {arguments!r}")
            return MatchResult(descriptor, arguments)

        return None

    def _bind(self, descriptor: CommandDescriptor, remainder: str) -> Tuple:
        parameter_types = descriptor.parameter_types
        messages = self._context.messages

        if descriptor.takes_remainder:
            return (Sentence(remainder),)

        # 与 str.split() 不同，连续空格会产生空 token
        tokens: List[str] = remainder.split(" ") if remainder else []
        required = len(parameter_types)

        if len(tokens) < required:
            raise ArityError(required, len(tokens), messages.not_enough_arguments)
        if self._context.strict_arity and len(tokens) > required:
            raise ArityError(required, len(tokens), messages.too_many_arguments)

        parser = self._context.parser
        return tuple(parser.parse(token, target_type) for token, target_type in zip(tokens, parameter_types))
