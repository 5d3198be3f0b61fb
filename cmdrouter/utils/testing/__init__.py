"""
cmdrouter 测试工具模块

提供记录消息的调用者与记录注册通知的监听器：
```python
from cmdrouter.utils.testing import MockInvoker, RecordingListener

invoker = MockInvoker(permissions={"home.set"})
registry.dispatch(invoker, "home", ["set", "base"])
invoker.assert_message_sent("设置成功")
```
"""

from .mock_invoker import MockInvoker
from .recording_listener import RecordingListener

__all__ = [
    "MockInvoker",
    "RecordingListener",
]
