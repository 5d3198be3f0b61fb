"""
参数类型转换

将单个文本 token 转换为声明的参数类型。内置 str / int / float / bool / Sentence，
其余类型需通过 ParameterParser.register 注册解析函数。
"""

import re
from typing import Any, Callable, Dict, Hashable

from cmdrouter.utils import get_log, ArgumentFormatError, ConfigurationError

LOG = get_log("ParameterParser")

_INT_PATTERN = re.compile(r"^[+-]?\d+$")

TRUE_WORDS = frozenset({"on", "true", "yes"})
FALSE_WORDS = frozenset({"off", "false", "no"})


class Sentence(str):
    """吞掉剩余全部文本的参数类型

    处理函数只声明一个 Sentence 参数时，命令路径之后的全部文本（不拆分）作为一个值传入。
    """


# 字符串类型标签 -> 内置类型
TYPE_ALIASES: Dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "integer": int,
    "float": float,
    "double": float,
    "bool": bool,
    "boolean": bool,
    "sentence": Sentence,
    "remainder": Sentence,
}

BUILTIN_TYPES = (str, int, float, bool, Sentence)


def normalize_type(target_type: Any) -> Any:
    """将字符串类型标签映射到内置类型，其它值原样返回"""
    if isinstance(target_type, str):
        return TYPE_ALIASES.get(target_type.lower(), target_type)
    return target_type


def _parse_int(token: str) -> int:
    if not _INT_PATTERN.match(token):
        raise ArgumentFormatError(token, int, "必须是整数。")
    return int(token, 10)


def _parse_float(token: str) -> float:
    # float() 本身与 locale 无关，这里只额外拒绝下划线分组写法
    if "_" in token:
        raise ArgumentFormatError(token, float, "必须是数字，例如 3.14。")
    try:
        return float(token)
    except ValueError:
        raise ArgumentFormatError(token, float, "必须是数字，例如 3.14。") from None


def _parse_bool(token: str) -> bool:
    lowered = token.lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    raise ArgumentFormatError(token, bool, "必须是 true 或 false。")


_BUILTIN_PARSERS: Dict[type, Callable[[str], Any]] = {
    str: lambda token: token,
    Sentence: Sentence,
    int: _parse_int,
    float: _parse_float,
    bool: _parse_bool,
}


class ParameterParser:
    """参数解析表

    每个 CommandContext 持有一个独立实例，自定义类型注册不会泄漏到其它上下文。
    """

    def __init__(self):
        self._custom: Dict[Hashable, Callable[[str], Any]] = {}

    def register(self, target_type: Hashable, parser: Callable[[str], Any]) -> None:
        """注册自定义参数类型

        Args:
            target_type: 类型标签（通常是类）
            parser: 解析函数，输入 token，返回值或抛出 ArgumentFormatError / ValueError
        """
        if normalize_type(target_type) in BUILTIN_TYPES:
            raise ValueError(f"不能覆盖内置参数类型: {target_type!r}")
        if not callable(parser):
            raise TypeError("parser 必须是可调用对象")
        self._custom[target_type] = parser
        LOG.debug(f"注册自定义参数类型: {getattr(target_type, '__name__', target_type)}")

    def is_supported(self, target_type: Any) -> bool:
        target_type = normalize_type(target_type)
        return target_type in _BUILTIN_PARSERS or target_type in self._custom

    def parse(self, token: str, target_type: Any) -> Any:
        """将 token 解析为 target_type

        Raises:
            ArgumentFormatError: token 格式不符合目标类型
            ConfigurationError: 目标类型既不是内置类型也未注册
        """
        target_type = normalize_type(target_type)

        builtin = _BUILTIN_PARSERS.get(target_type)
        if builtin is not None:
            return builtin(token)

        parser = self._custom.get(target_type)
        if parser is None:
            raise ConfigurationError(target_type)

        try:
            return parser(token)
        except ArgumentFormatError:
            raise
        except ValueError as e:
            raise ArgumentFormatError(token, target_type, str(e) or "格式不正确。") from e
        except Exception as e:
            # 自定义解析函数的任何失败都视为用户输入错误
            LOG.debug(f"自定义解析函数失败: {type(e).__name__}: {e}")
            raise ArgumentFormatError(token, target_type, "格式不正确。") from e
