"""配置加载测试"""

import logging
import os
import tempfile
from pathlib import Path

import pytest

from cmdrouter.core import CommandContext, Environment
from cmdrouter.utils import ConfigLoadError, RouterConfig, load_config
from cmdrouter.utils.config import ENVIRONMENT_VARIABLE


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture(autouse=True)
def restore_log_level():
    root = logging.getLogger("cmdrouter")
    level = root.level
    yield
    root.setLevel(level)


class TestLoadConfig:
    """配置文件读取测试"""

    def test_defaults_without_file(self):
        config = load_config(None, environ={})

        assert config.environment == "PROD"
        assert config.strict_arity is False
        assert config.command_prefix == "/"

    def test_missing_file_gives_defaults(self, temp_dir):
        config = load_config(temp_dir / "missing.yaml", environ={})
        assert config == RouterConfig()

    def test_yaml(self, temp_dir):
        path = temp_dir / "cmdrouter.yaml"
        path.write_text(
            "environment: dev\n"
            "strict_arity: true\n"
            "log_level: debug\n"
            "messages:\n"
            "  no_permission: 'Nope.'\n",
            encoding="utf-8",
        )

        config = load_config(path, environ={})

        assert config.environment == "dev"
        assert config.strict_arity is True
        assert config.log_level == "DEBUG"
        assert config.messages.no_permission == "Nope."
        # 未覆盖的文本保持默认
        assert config.messages.player_only == RouterConfig().messages.player_only

    def test_toml(self, temp_dir):
        path = temp_dir / "cmdrouter.toml"
        path.write_text(
            'environment = "release"\n'
            'command_prefix = "!"\n'
            "\n"
            "[messages]\n"
            'usage_prefix = "Usage: "\n',
            encoding="utf-8",
        )

        config = load_config(path, environ={})

        assert config.environment == "release"
        assert config.command_prefix == "!"
        assert config.messages.usage_prefix == "Usage: "

    def test_empty_yaml(self, temp_dir):
        path = temp_dir / "empty.yml"
        path.write_text("", encoding="utf-8")

        assert load_config(path, environ={}) == RouterConfig()

    def test_environment_variable_overrides_file(self, temp_dir):
        path = temp_dir / "cmdrouter.yaml"
        path.write_text("environment: dev\n", encoding="utf-8")

        config = load_config(path, environ={ENVIRONMENT_VARIABLE: "local"})

        assert config.environment == "local"

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv(ENVIRONMENT_VARIABLE, "release")

        assert load_config().environment == "release"

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "broken.yaml"
        path.write_text("environment: [dev\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path, environ={})

    def test_non_mapping_top_level(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- dev\n- prod\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path, environ={})

    def test_validation_failure(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("strict_arity: maybe\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path, environ={})

    def test_unsupported_suffix(self, temp_dir):
        path = temp_dir / "cmdrouter.ini"
        path.write_text("[x]\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path, environ={})


class TestContextFromConfig:
    """由配置构造上下文"""

    def test_environment_resolved(self):
        context = CommandContext.from_config(RouterConfig(environment="develop"))
        assert context.environment is Environment.DEV

    def test_invalid_environment_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cmdrouter"):
            context = CommandContext.from_config(RouterConfig(environment="staging"))

        assert context.environment is Environment.PROD
        assert any("staging" in r.getMessage() for r in caplog.records)

    def test_debug_sets_log_level(self):
        CommandContext.from_config(RouterConfig(debug=True))
        assert logging.getLogger("cmdrouter").level == logging.DEBUG

    def test_options_copied(self):
        config = RouterConfig(strict_arity=True, command_prefix="!")

        context = CommandContext.from_config(config, apply_logging=False)

        assert context.strict_arity is True
        assert context.command_prefix == "!"
        assert context.messages is config.messages
