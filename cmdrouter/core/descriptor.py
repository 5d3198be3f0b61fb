"""
命令描述

- CommandSpec: 注册时的声明（完整命令串、别名、元数据、处理函数、参数类型）
- CommandDescriptor: 注册后的不可变记录，一个命令名（主命令或别名）对应一个
- MatchResult: 一次分发中匹配到的描述与已转换的参数
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterator, Optional, Tuple, get_type_hints

from .environment import Environment
from .invoker import InvokerKind
from .params import Sentence, normalize_type

DEFAULT_USAGE = "/<command>"


def split_command(command: str) -> Tuple[str, str]:
    """拆分完整命令串为 (基础命令, 子命令路径)"""
    fragments = command.split()
    if not fragments:
        raise ValueError("命令不能为空")
    return fragments[0], " ".join(fragments[1:])


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))


@dataclass(frozen=True)
class CommandDescriptor:
    base_command: str
    subcommand_path: str
    handler: Callable[..., Any]
    description: str = ""
    usage: str = DEFAULT_USAGE
    permission: Optional[str] = None
    environments: Environment = Environment.ALL
    parameter_types: Tuple[Any, ...] = ()
    aliases: FrozenSet[str] = frozenset()
    invoker_kinds: Optional[FrozenSet[InvokerKind]] = None  # None 表示不限制

    @property
    def command(self) -> str:
        """基础命令 + 子命令路径"""
        if not self.subcommand_path:
            return self.base_command
        return f"{self.base_command} {self.subcommand_path}"

    @property
    def handler_name(self) -> str:
        return _handler_name(self.handler)

    @property
    def takes_remainder(self) -> bool:
        """是否只声明了一个 Sentence 参数"""
        return len(self.parameter_types) == 1 and normalize_type(self.parameter_types[0]) is Sentence

    def accepts(self, kind: InvokerKind) -> bool:
        return self.invoker_kinds is None or kind in self.invoker_kinds

    def render_usage(self) -> str:
        return self.usage.replace("<command>", self.command)

    def __str__(self) -> str:
        return f"CommandDescriptor(command={self.command!r}, handler={self.handler_name})"


@dataclass(frozen=True)
class MatchResult:
    descriptor: CommandDescriptor
    arguments: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class CommandSpec:
    """命令声明

    Attributes:
        command: 完整命令串，如 "home set default"
        handler: 处理函数，第一个参数为原生调用者
        args_types: 处理函数除调用者外的参数类型，按顺序
        aliases: 别名，每个都是完整命令串，可以有不同的基础命令
        invoker_kinds: 允许的调用者种类，None 表示不限制
    """

    command: str
    handler: Callable[..., Any]
    description: str = ""
    usage: str = DEFAULT_USAGE
    permission: Optional[str] = None
    environments: Environment = Environment.ALL
    args_types: Tuple[Any, ...] = ()
    aliases: Tuple[str, ...] = ()
    invoker_kinds: Optional[FrozenSet[InvokerKind]] = field(default=None)

    def __post_init__(self):
        if not callable(self.handler):
            raise TypeError(f"命令 {self.command!r} 的处理函数不可调用")
        split_command(self.command)
        for alias in self.aliases:
            split_command(alias)
        # 允许以 list / set 传入
        object.__setattr__(self, "args_types", tuple(self.args_types))
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "environments", Environment(self.environments))
        if self.invoker_kinds is not None:
            object.__setattr__(self, "invoker_kinds", frozenset(self.invoker_kinds))

    @property
    def names(self) -> Tuple[str, ...]:
        """主命令与所有别名"""
        return (self.command,) + self.aliases

    def to_descriptors(self) -> Iterator[CommandDescriptor]:
        """每个命令名生成一个描述"""
        alias_set = frozenset(self.aliases)
        for name in self.names:
            base, path = split_command(name)
            yield CommandDescriptor(
                base_command=base,
                subcommand_path=path,
                handler=self.handler,
                description=self.description,
                usage=self.usage,
                permission=self.permission or None,
                environments=self.environments,
                parameter_types=self.args_types,
                aliases=alias_set,
                invoker_kinds=self.invoker_kinds,
            )

    @classmethod
    def from_function(cls, func: Callable[..., Any], command: str, **options: Any) -> "CommandSpec":
        """根据函数签名推导参数类型

        第一个参数视为调用者；其余位置参数的注解作为参数类型，
        未注解的参数按 str 处理。options 中显式给出 args_types 时不做推导。
        """
        if options.get("args_types") is None:
            options["args_types"] = analyse_args_types(func)
        return cls(command=command, handler=func, **options)


def analyse_args_types(func: Callable[..., Any]) -> Tuple[Any, ...]:
    """提取函数除第一个（调用者）参数外的位置参数类型"""
    sig = inspect.signature(func)
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        hints = {}

    params = [
        p
        for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if not params:
        raise TypeError(f"处理函数 {_handler_name(func)} 至少需要一个调用者参数")

    types = []
    for p in params[1:]:
        annotation = hints.get(p.name, p.annotation)
        types.append(str if annotation is inspect.Parameter.empty else annotation)
    return tuple(types)
