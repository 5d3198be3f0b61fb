"""
配置

支持 YAML 与 TOML 两种配置文件，按后缀选择解析器；
环境变量 CMDROUTER_ENVIRONMENT 覆盖文件中的 environment 字段。
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .error import ConfigLoadError
from .logger import get_log

LOG = get_log("Config")

ENVIRONMENT_VARIABLE = "CMDROUTER_ENVIRONMENT"


class MessageConfig(BaseModel):
    """展示给调用者的文本"""

    no_permission: str = "抱歉，你没有执行此命令所需的权限。"
    player_only: str = "此命令只能由玩家执行。"
    wrong_invoker: str = "此命令不能由你这种类型的调用者执行 ({kind})。"
    execution_failed: str = "执行 {command} 命令时发生错误。"
    usage_prefix: str = "用法: "
    not_enough_arguments: str = "参数不足。"
    too_many_arguments: str = "参数过多。"


class RouterConfig(BaseModel):
    """cmdrouter 运行配置"""

    environment: str = "PROD"
    debug: bool = False
    log_level: str = "INFO"
    strict_arity: bool = False
    command_prefix: str = "/"
    messages: MessageConfig = Field(default_factory=MessageConfig)

    @field_validator("log_level", mode="before")
    def _upper_level(cls, v):
        return str(v).upper()

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


def _read_file(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".toml":
                data = toml.load(f)
            else:
                raise ConfigLoadError(f"不支持的配置文件格式: {path.name}")
    except (yaml.YAMLError, toml.TomlDecodeError) as e:
        raise ConfigLoadError(f"解析配置文件失败: {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"配置文件顶层必须是映射: {path}")
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> RouterConfig:
    """读取配置

    Args:
        path: 配置文件路径，不存在时使用默认配置
        environ: 环境变量映射，默认为 os.environ

    Returns:
        RouterConfig 实例
    """
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        if path.exists():
            data = _read_file(path)
            LOG.debug(f"已读取配置文件: {path}")
        else:
            LOG.info(f"配置文件 {path} 不存在，使用默认配置")

    override = environ.get(ENVIRONMENT_VARIABLE)
    if override:
        data["environment"] = override

    try:
        return RouterConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(f"配置校验失败: {e}") from e
