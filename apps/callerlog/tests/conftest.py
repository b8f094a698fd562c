import threading
import typing as t

import pytest
from structlog.typing import EventDict

from callerlog.logging import BaseSink, Logger, set_logger


class MemorySink(BaseSink):
    """Test sink collecting emitted event dicts."""

    def __init__(self) -> None:
        self.entries: list[EventDict] = []
        self.closed = False
        self._lock = threading.Lock()

    def emit(self, event_dict: EventDict) -> None:
        with self._lock:
            self.entries.append(dict(event_dict))

    def close(self) -> None:
        self.closed = True

    @property
    def messages(self) -> list[str]:
        return [entry["message"] for entry in self.entries]


class ExitRecorder:
    """Stand-in for sys.exit recording the requested status codes."""

    def __init__(self) -> None:
        self.codes: list[int] = []

    def __call__(self, code: int) -> None:
        self.codes.append(code)


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def exit_recorder() -> ExitRecorder:
    return ExitRecorder()


@pytest.fixture
def logger(memory_sink: MemorySink, exit_recorder: ExitRecorder) -> t.Iterator[Logger]:
    """
    Installs a fresh process-wide Logger writing to a MemorySink.
    The previous logger is restored afterwards.
    """
    test_logger = Logger(level="debug", sinks=[memory_sink], exit_func=exit_recorder)
    previous = set_logger(test_logger)
    yield test_logger
    set_logger(previous)
