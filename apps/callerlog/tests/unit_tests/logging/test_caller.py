"""
调用位置解析单元测试

验证 resolve_caller 的栈帧跳过、文件名截断与占位回退。
"""

from __future__ import annotations

import inspect
from types import SimpleNamespace

from callerlog.logging import caller as caller_module
from callerlog.logging.caller import format_caller, resolve_caller


def _wrapper() -> str:
    return resolve_caller(1)


class TestFormatCaller:
    """file:line 格式化测试"""

    def test_keeps_basename_only(self) -> None:
        """只保留最后一个分隔符之后的部分"""
        assert format_caller("/srv/app/pkg/server.py", 42) == "server.py:42"

    def test_path_without_separator(self) -> None:
        """没有分隔符时保持原样"""
        assert format_caller("server.py", 7) == "server.py:7"


class TestResolveCaller:
    """栈帧跳过测试"""

    def test_skip_zero_is_calling_function(self) -> None:
        """skip=0 指向调用 resolve_caller 的位置"""
        line = inspect.currentframe().f_lineno + 1
        assert resolve_caller(0) == f"test_caller.py:{line}"

    def test_skip_one_lands_on_wrapper_caller(self) -> None:
        """经过一层包装后指向包装函数的调用者"""
        line = inspect.currentframe().f_lineno + 1
        assert _wrapper() == f"test_caller.py:{line}"

    def test_walk_past_outermost_frame(self) -> None:
        """超出栈底时回退为占位符"""
        assert resolve_caller(100_000) == "<???>:1"

    def test_introspection_unavailable(self, monkeypatch) -> None:
        """无法获取栈帧时回退为占位符"""
        monkeypatch.setattr(caller_module, "inspect", SimpleNamespace(currentframe=lambda: None))
        assert resolve_caller(2) == "<???>:1"
