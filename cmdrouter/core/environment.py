"""
部署环境标志

命令可以声明允许运行的环境（位掩码），当前环境在进程启动时确定一次。
"""

from enum import IntFlag
from typing import Union

from cmdrouter.utils import get_log

LOG = get_log("Environment")


class Environment(IntFlag):
    LOCAL = 1  # 本地功能测试
    DEV = 2  # 开发分支联调
    RELEASE = 4  # 发布候选
    PROD = 8  # 线上
    ALL = 15


_ALIASES = {
    "LOCAL": Environment.LOCAL,
    "FEATURE": Environment.LOCAL,
    "DEV": Environment.DEV,
    "DEVELOP": Environment.DEV,
    "DEVELOPMENT": Environment.DEV,
    "RELEASE": Environment.RELEASE,
    "REL": Environment.RELEASE,
    "PROD": Environment.PROD,
    "PRODUCTION": Environment.PROD,
    "LIVE": Environment.PROD,
    "MASTER": Environment.PROD,
    "ALL": Environment.ALL,
}


def parse_environment(value: Union[str, int, Environment]) -> Environment:
    """将名称或整数解析为环境标志

    Raises:
        ValueError: 名称不合法或数值超出 4 位
    """
    if isinstance(value, Environment):
        return value
    if isinstance(value, int):
        if value < 0 or value > Environment.ALL:
            raise ValueError(f"环境标志超出范围: {value}")
        return Environment(value)

    env = _ALIASES.get(str(value).strip().upper())
    if env is None:
        raise ValueError(f"无效的环境类型: {value!r}")
    return env


def resolve_environment(value: Union[str, int, Environment, None]) -> Environment:
    """解析环境，非法值回退为 PROD 并记录警告"""
    if value is None or value == "":
        return Environment.PROD
    try:
        return parse_environment(value)
    except ValueError:
        LOG.warning(f"无效的环境标志 {value!r}，使用默认值 PROD")
        return Environment.PROD


def has_flag(flag: int, mask: int) -> bool:
    """mask 是否包含 flag 的全部位"""
    return (mask & flag) == flag
