"""
Logger 单元测试

测试阈值设置、阈值过滤、调用风格、Fatal/Panic 行为以及多 sink 分发。
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import orjson
import pytest

import callerlog
from callerlog.logging import BaseSink, Level, LevelParseError, Logger, PanicError
from callerlog.logging.core import exit_process


class FailingSink(BaseSink):
    def emit(self, event_dict) -> None:
        raise OSError("sink unavailable")

    def close(self) -> None:
        pass


class TestSetLevel:
    """阈值设置测试"""

    def test_default_level_is_info(self) -> None:
        """默认阈值为 info"""
        assert Logger().level is Level.INFO

    @pytest.mark.parametrize("name", ["debug", "info", "warn", "error", "fatal", "panic"])
    def test_set_valid_level(self, logger: Logger, name: str) -> None:
        """合法名称设置后可读回规范名称"""
        assert str(logger.set_level(name)) == name
        assert str(logger.level) == name

    @pytest.mark.parametrize("name", ["bogus", "WARNINGS", "", " info", "debug\n", " debug\n"])
    def test_invalid_level_leaves_threshold(self, logger: Logger, name: str) -> None:
        """非法名称不改变阈值"""
        logger.set_level("error")
        with pytest.raises(LevelParseError):
            logger.set_level(name)
        assert logger.level is Level.ERROR

    def test_is_enabled(self, logger: Logger) -> None:
        """is_enabled 与阈值一致"""
        logger.set_level("warn")
        assert not logger.is_enabled(Level.INFO)
        assert logger.is_enabled(Level.WARN)
        assert logger.is_enabled(Level.PANIC)


class TestThreshold:
    """阈值过滤测试"""

    def test_below_threshold_dropped(self, logger: Logger, memory_sink) -> None:
        """低于阈值的日志不产生输出"""
        logger.set_level("warn")
        entry = logger.bind(caller="a.py:1")
        entry.debug("d")
        entry.info("i")
        entry.warn("w")
        entry.error("e")
        assert memory_sink.messages == ["w", "e"]
        assert [e["level"] for e in memory_sink.entries] == ["warn", "error"]

    def test_entry_fields(self, logger: Logger, memory_sink) -> None:
        """日志条目包含级别、消息、时间戳与绑定字段"""
        logger.bind(caller="main.py:10").info("hello")
        (entry,) = memory_sink.entries
        assert entry["message"] == "hello"
        assert entry["level"] == "info"
        assert entry["caller"] == "main.py:10"
        assert "timestamp" in entry
        assert "event" not in entry


class TestCallStyles:
    """调用风格测试"""

    def test_space_joined(self, logger: Logger, memory_sink) -> None:
        """参数以单个空格连接"""
        logger.bind().info("a", 1, None, 2.5)
        assert memory_sink.messages == ["a 1 None 2.5"]

    def test_line_joined_drops_trailing_newline(self, logger: Logger, memory_sink) -> None:
        """ln 风格去掉末尾换行"""
        logger.bind().infoln("done", "ok\n")
        assert memory_sink.messages == ["done ok"]

    def test_format_style(self, logger: Logger, memory_sink) -> None:
        """printf 风格插值"""
        logger.bind().warnf("%s took %dms", "query", 12)
        logger.bind().warnf("%(name)s=%(value)s", {"name": "x", "value": 1})
        assert memory_sink.messages == ["query took 12ms", "x=1"]

    def test_format_mismatch_does_not_raise(self, logger: Logger, memory_sink) -> None:
        """模板与参数不匹配时不抛异常"""
        logger.bind().errorf("%d items", "many")
        logger.bind().errorf("100%")
        assert memory_sink.messages == ["%d items many", "100%"]


class TestFatal:
    """Fatal 行为测试"""

    @pytest.mark.parametrize("method", ["fatal", "fatalln"])
    def test_emits_then_exits(self, logger: Logger, memory_sink, exit_recorder, method: str) -> None:
        """先输出再以状态码 1 退出"""
        getattr(logger.bind(caller="x.py:3"), method)("boom")
        assert memory_sink.messages == ["boom"]
        assert memory_sink.entries[0]["level"] == "fatal"
        assert exit_recorder.codes == [1]

    def test_fatalf(self, logger: Logger, memory_sink, exit_recorder) -> None:
        logger.bind().fatalf("code %d", 7)
        assert memory_sink.messages == ["code 7"]
        assert exit_recorder.codes == [1]

    def test_exits_even_when_filtered(self, logger: Logger, memory_sink, exit_recorder) -> None:
        """阈值为 panic 时 fatal 不输出但仍退出"""
        logger.set_level("panic")
        logger.bind().fatal("hidden")
        assert memory_sink.entries == []
        assert exit_recorder.codes == [1]

    def test_default_exit_func_is_exit_process(self) -> None:
        """默认退出函数为 exit_process"""
        assert Logger().exit_func is exit_process


_FATAL_CALLS = {
    "main_thread": 'callerlog.fatal("boom")',
    "worker_thread": (
        't = threading.Thread(target=lambda: callerlog.fatal("boom"))\n'
        "t.start()\n"
        "t.join()"
    ),
    "thread_pool": (
        "with ThreadPoolExecutor(max_workers=1) as pool:\n"
        '    pool.submit(callerlog.fatalf, "%s", "boom").result()'
    ),
    "swallowing_handler": (
        "try:\n"
        '    callerlog.fatalln("boom")\n'
        "except BaseException:\n"
        "    pass"
    ),
}


class TestFatalTerminatesProcess:
    """Fatal 在任意线程中都会终止整个进程"""

    @pytest.mark.parametrize("call", list(_FATAL_CALLS), ids=list(_FATAL_CALLS))
    def test_process_exits_with_status_one(self, call: str) -> None:
        """输出 fatal 日志后进程以状态码 1 退出，后续代码不再执行"""
        script = "\n".join(
            [
                "import sys",
                "import threading",
                "from concurrent.futures import ThreadPoolExecutor",
                "import callerlog",
                "callerlog.configure_logging(level='info', fmt='json', stream=sys.stderr, syslog=False)",
                _FATAL_CALLS[call],
                "print('STILL-ALIVE', flush=True)",
            ]
        )
        env = dict(os.environ)
        src_dir = str(Path(callerlog.__file__).resolve().parent.parent)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [src_dir, env.get("PYTHONPATH")]))

        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            env=env,
            timeout=60,
        )

        assert result.returncode == 1
        assert "STILL-ALIVE" not in result.stdout
        entry = orjson.loads(result.stderr.splitlines()[-1])
        assert entry["level"] == "fatal"
        assert entry["message"] == "boom"


class TestPanic:
    """Panic 行为测试"""

    @pytest.mark.parametrize(
        ("method", "args", "expected"),
        [
            ("panic", ("a", "b"), "a b"),
            ("panicln", ("a", "b"), "a b"),
            ("panicf", ("n=%d", 3), "n=3"),
        ],
    )
    def test_emits_then_raises(self, logger: Logger, memory_sink, method: str, args: tuple, expected: str) -> None:
        """先输出再抛出携带消息的 PanicError"""
        with pytest.raises(PanicError) as exc_info:
            getattr(logger.bind(caller="p.py:9"), method)(*args)
        assert exc_info.value.message == expected
        assert str(exc_info.value) == expected
        assert exc_info.value.fields == {"caller": "p.py:9"}
        assert memory_sink.messages == [expected]
        assert memory_sink.entries[0]["level"] == "panic"


class TestSinks:
    """多 sink 分发测试"""

    def test_each_sink_receives_entry_once(self, logger: Logger, memory_sink) -> None:
        second = type(memory_sink)()
        logger.add_sink(second)
        logger.bind().info("fan-out")
        assert memory_sink.messages == ["fan-out"]
        assert second.messages == ["fan-out"]

    def test_failing_sink_does_not_block_others(self, memory_sink) -> None:
        """单个 sink 失败不影响其他 sink，也不向调用方抛出"""
        lg = Logger(sinks=[FailingSink(), memory_sink])
        lg.bind().error("still delivered")
        assert memory_sink.messages == ["still delivered"]

    def test_close_closes_sinks(self, memory_sink) -> None:
        lg = Logger(sinks=[memory_sink])
        lg.close()
        assert memory_sink.closed
        assert lg.sinks == ()
