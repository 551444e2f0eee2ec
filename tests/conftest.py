import typing as t
from pathlib import Path

import pytest

from sinklog import core
from sinklog.dispatcher import Dispatcher, SinkConfig


class FakeSyslogTransport:
    """Records every send instead of talking to the system log."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple[str, str, str, int]] = []
        self.fail = fail

    def send(self, tag: str, priority: str, message: str, pid: int) -> None:
        if self.fail:
            raise OSError("syslog unavailable")
        self.sent.append((tag, priority, message, pid))


@pytest.fixture(autouse=True)
def reset_process_logging():
    """Each test starts without a process-wide dispatcher or structlog config."""
    core.reset_logging()
    yield
    core.reset_logging()


@pytest.fixture
def syslog_transport() -> FakeSyslogTransport:
    return FakeSyslogTransport()


@pytest.fixture
def make_config(tmp_path: Path) -> t.Callable[..., SinkConfig]:
    """SinkConfig pointing file and json sinks into tmp_path, console uncolored."""

    def factory(**overrides: t.Any) -> SinkConfig:
        values: dict[str, t.Any] = {
            "application": "testapp",
            "file_path": str(tmp_path / "logs" / "testapp.log"),
            "json_path": str(tmp_path / "logs" / "testapp.log.json"),
            "console_color": "never",
        }
        values.update(overrides)
        return SinkConfig(**values)

    return factory


@pytest.fixture
def make_dispatcher(make_config, syslog_transport) -> t.Callable[..., Dispatcher]:
    def factory(debug_hook=None, **overrides: t.Any) -> Dispatcher:
        return Dispatcher(make_config(**overrides), syslog_transport=syslog_transport, debug_hook=debug_hook)

    return factory
