"""
日志工具

所有模块通过 get_log 获取命名日志器，统一挂在 cmdrouter 根日志器下。
"""

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "cmdrouter"
LOG_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _ensure_root_handler() -> logging.Logger:
    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _configured:
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
            root.addHandler(handler)
        if root.level == logging.NOTSET:
            root.setLevel(logging.INFO)
        _configured = True
    return root


def get_log(name: Optional[str] = None) -> logging.Logger:
    """获取日志器

    Args:
        name: 日志器名称，会挂在 cmdrouter 根日志器之下

    Returns:
        logging.Logger 实例
    """
    root = _ensure_root_handler()
    if not name:
        return root
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)


def set_log_level(level: Union[int, str]) -> None:
    """设置 cmdrouter 根日志器的级别"""
    root = _ensure_root_handler()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"无效的日志级别: {level}")
    root.setLevel(level)
