"""环境标志与上下文测试"""

import pytest

from cmdrouter.core import CommandContext, Environment, has_flag, parse_environment, resolve_environment


class TestParseEnvironment:
    """环境名称解析测试"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("local", Environment.LOCAL),
            ("FEATURE", Environment.LOCAL),
            ("develop", Environment.DEV),
            ("Development", Environment.DEV),
            ("rel", Environment.RELEASE),
            ("live", Environment.PROD),
            ("master", Environment.PROD),
            ("all", Environment.ALL),
        ],
    )
    def test_aliases(self, name, expected):
        assert parse_environment(name) is expected

    def test_integer_value(self):
        assert parse_environment(2) is Environment.DEV

    def test_invalid_name(self):
        with pytest.raises(ValueError):
            parse_environment("staging")

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            parse_environment(16)

    def test_resolve_falls_back_to_prod(self):
        assert resolve_environment("staging") is Environment.PROD
        assert resolve_environment(None) is Environment.PROD


class TestHasFlag:
    """位掩码检查测试"""

    def test_contained(self):
        mask = Environment.DEV | Environment.PROD
        assert has_flag(Environment.PROD, mask)
        assert has_flag(Environment.DEV, mask)

    def test_not_contained(self):
        assert not has_flag(Environment.LOCAL, Environment.DEV | Environment.PROD)

    def test_all_contains_everything(self):
        for env in (Environment.LOCAL, Environment.DEV, Environment.RELEASE, Environment.PROD):
            assert has_flag(env, Environment.ALL)


class TestContextEnvironment:
    """上下文中当前环境只能确定一次"""

    def test_default_is_prod(self):
        assert CommandContext().environment is Environment.PROD

    def test_init_once(self):
        context = CommandContext()
        context.init_environment("dev")

        assert context.environment is Environment.DEV
        with pytest.raises(RuntimeError):
            context.init_environment("prod")

    def test_read_freezes_default(self):
        context = CommandContext()
        _ = context.environment

        with pytest.raises(RuntimeError):
            context.init_environment("dev")

    def test_independent_contexts(self):
        assert CommandContext("local").environment is Environment.LOCAL
        assert CommandContext("release").environment is Environment.RELEASE
