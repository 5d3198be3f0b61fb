"""cmdrouter 工具包"""

from cmdrouter.utils.logger import get_log, set_log_level
from cmdrouter.utils.config import MessageConfig, RouterConfig, load_config
from cmdrouter.utils.error import (
    CommandRouterError,
    UserInputError,
    ArgumentFormatError,
    ArityError,
    ConfigurationError,
    HandlerInvocationError,
    ConfigLoadError,
)

__all__ = [
    "get_log", "set_log_level",
    "MessageConfig", "RouterConfig", "load_config",
    "CommandRouterError", "UserInputError", "ArgumentFormatError", "ArityError",
    "ConfigurationError", "HandlerInvocationError", "ConfigLoadError",
]
