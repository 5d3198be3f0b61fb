"""
命令核心

注册、匹配、参数转换与分发。
"""

from .environment import Environment, parse_environment, resolve_environment, has_flag
from .params import ParameterParser, Sentence
from .invoker import CommandInvoker, InvokerKind
from .descriptor import CommandDescriptor, CommandSpec, MatchResult, split_command
from .context import CommandContext
from .index import SubcommandIndex
from .dispatch import DispatchEngine, DispatchOutcome
from .registry import CommandRegistry, CommandOptions, RegistrationListener

__all__ = [
    "Environment",
    "parse_environment",
    "resolve_environment",
    "has_flag",
    "ParameterParser",
    "Sentence",
    "CommandInvoker",
    "InvokerKind",
    "CommandDescriptor",
    "CommandSpec",
    "MatchResult",
    "split_command",
    "CommandContext",
    "SubcommandIndex",
    "DispatchEngine",
    "DispatchOutcome",
    "CommandRegistry",
    "CommandOptions",
    "RegistrationListener",
]
