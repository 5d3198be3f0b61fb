"""cmdrouter - 文本命令注册与分发"""

from cmdrouter.core import *  # noqa: F401,F403
from cmdrouter.core import __all__ as _core_all
from cmdrouter.utils import (
    RouterConfig,
    load_config,
    ArgumentFormatError,
    ArityError,
    ConfigurationError,
    HandlerInvocationError,
)

__version__ = "1.0.0"

__all__ = list(_core_all) + [
    "RouterConfig",
    "load_config",
    "ArgumentFormatError",
    "ArityError",
    "ConfigurationError",
    "HandlerInvocationError",
]
