"""公共测试夹具"""

import pytest

from cmdrouter.core import CommandContext, CommandRegistry, Environment
from cmdrouter.utils.testing import MockInvoker, RecordingListener


@pytest.fixture
def context():
    """PROD 环境的独立上下文"""
    return CommandContext(environment=Environment.PROD)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def registry(context, listener):
    return CommandRegistry(context, listener)


@pytest.fixture
def player():
    """拥有全部权限的玩家"""
    return MockInvoker(permissions={"*"})
