"""
命令上下文

持有当前环境、参数解析表与消息文本。当前环境只能确定一次，之后只读。
"""

from typing import Any, Callable, Hashable, Optional, Union

from cmdrouter.utils import get_log, set_log_level, MessageConfig, RouterConfig

from .environment import Environment, resolve_environment
from .params import ParameterParser

LOG = get_log("CommandContext")


class CommandContext:
    def __init__(
        self,
        environment: Optional[Union[str, int, Environment]] = None,
        parser: Optional[ParameterParser] = None,
        messages: Optional[MessageConfig] = None,
        strict_arity: bool = False,
        command_prefix: str = "/",
    ):
        self._environment: Optional[Environment] = None
        self.parser = parser or ParameterParser()
        self.messages = messages or MessageConfig()
        self.strict_arity = strict_arity
        self.command_prefix = command_prefix
        if environment is not None:
            self.init_environment(environment)

    @classmethod
    def from_config(cls, config: RouterConfig, apply_logging: bool = True) -> "CommandContext":
        """由 RouterConfig 构造上下文"""
        if apply_logging:
            set_log_level(config.effective_log_level)
        return cls(
            environment=resolve_environment(config.environment),
            messages=config.messages,
            strict_arity=config.strict_arity,
            command_prefix=config.command_prefix,
        )

    def init_environment(self, environment: Union[str, int, Environment]) -> Environment:
        """确定当前环境，只允许调用一次"""
        if self._environment is not None:
            raise RuntimeError(f"当前环境已确定为 {self._environment.name}，不能重复设置")
        self._environment = resolve_environment(environment)
        LOG.debug(f"当前环境: {self._environment.name}")
        return self._environment

    @property
    def environment(self) -> Environment:
        """当前环境，未显式设置时在首次读取时固定为 PROD"""
        if self._environment is None:
            self._environment = Environment.PROD
        return self._environment

    def register_parameter_type(self, target_type: Hashable, parser: Callable[[str], Any]) -> None:
        self.parser.register(target_type, parser)

    def usage_line(self, usage: str) -> str:
        return f"{self.messages.usage_prefix}{usage}"
