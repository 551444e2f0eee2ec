"""
Sink writer tests.
"""

from __future__ import annotations

import io
import json
import os
from pathlib import Path

import pytest

from sinklog.encoders import FallbackJsonEncoder, PreciseJsonEncoder
from sinklog.events import LogEvent
from sinklog.exceptions import SinkWriteFailure
from sinklog.formatters import COLORS, render
from sinklog.levels import SeverityLevel
from sinklog.reporter import ExceptionReporter
from sinklog.sinks import ConsoleSink, FileSink, JsonSink, SyslogSink


def make_event(level: str = "INFO", message: str = "Started", **data: str) -> LogEvent:
    return LogEvent(
        timestamp="2024-01-01 12:00:00",
        timestamp_epoch=1704110400,
        level=level,
        message=message,
        pid=4242,
        application="testapp",
        data=data,
    )


@pytest.fixture
def quiet_reporter() -> ExceptionReporter:
    return ExceptionReporter(color="never", stream=io.StringIO())


class TestConsoleSink:
    def test_info_goes_to_stdout(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        ConsoleSink(color="never", stdout=out, stderr=err).emit(make_event(), SeverityLevel.INFO)

        assert out.getvalue() == "2024-01-01 12:00:00 [INFO] Started\n"
        assert err.getvalue() == ""

    @pytest.mark.parametrize("level", ["ERROR", "CRIT", "ALERT", "EMERG"])
    def test_severe_levels_go_to_stderr(self, level: str) -> None:
        out, err = io.StringIO(), io.StringIO()
        ConsoleSink(color="never", stdout=out, stderr=err).emit(make_event(level), SeverityLevel[level])

        assert out.getvalue() == ""
        assert err.getvalue() == f"2024-01-01 12:00:00 [{level}] Started\n"

    def test_colored_line_is_bold_in_level_color(self) -> None:
        out = io.StringIO()
        ConsoleSink(color="always", stdout=out).emit(make_event(), SeverityLevel.INFO)

        expected = render("2024-01-01 12:00:00 [INFO] Started", "green", bold=True)
        assert out.getvalue() == expected + "\n"
        assert out.getvalue().startswith(COLORS["bold"] + COLORS["green"])

    def test_auto_color_skips_non_tty(self) -> None:
        out = io.StringIO()
        ConsoleSink(color="auto", stdout=out).emit(make_event(), SeverityLevel.INFO)
        assert "\033[" not in out.getvalue()

    def test_custom_renderer(self) -> None:
        out = io.StringIO()
        calls = []

        def renderer(text: str, color: str, bold: bool) -> str:
            calls.append((color, bold))
            return f"<{text}>"

        ConsoleSink(color="always", renderer=renderer, stdout=out).emit(make_event("WARN"), SeverityLevel.WARN)
        assert out.getvalue() == "<2024-01-01 12:00:00 [WARN] Started>\n"
        assert calls == [("yellow", True)]


class TestFileSink:
    def test_appends_lines_and_creates_directory(self, tmp_path: Path, quiet_reporter) -> None:
        target = tmp_path / "deep" / "app.log"
        sink = FileSink(target, max_bytes=1024, reporter=quiet_reporter)

        sink.emit(make_event(), SeverityLevel.INFO)
        sink.emit(make_event("WARN", "Careful"), SeverityLevel.WARN)

        assert target.read_text().splitlines() == [
            "2024-01-01 12:00:00 [INFO] Started",
            "2024-01-01 12:00:00 [WARN] Careful",
        ]

    def test_rotates_before_writing(self, tmp_path: Path, quiet_reporter) -> None:
        target = tmp_path / "app.log"
        target.write_text("old\n" * 10)
        rotated: list[Path] = []
        sink = FileSink(target, max_bytes=8, reporter=quiet_reporter, on_rotated=rotated.append)

        sink.emit(make_event(), SeverityLevel.INFO)

        assert len(rotated) == 1
        assert rotated[0].read_text() == "old\n" * 10
        assert target.read_text() == "2024-01-01 12:00:00 [INFO] Started\n"

    def test_write_failure_raises_sink_write_failure(self, tmp_path: Path, quiet_reporter) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        sink = FileSink(blocker / "app.log", max_bytes=1024, reporter=quiet_reporter)

        with pytest.raises(SinkWriteFailure) as excinfo:
            sink.emit(make_event(), SeverityLevel.INFO)
        assert excinfo.value.details["sink"] == "file"

    def test_failed_rotation_still_appends_to_path(self, tmp_path: Path, monkeypatch) -> None:
        target = tmp_path / "app.log"
        target.write_text("old\n" * 10)
        stream = io.StringIO()
        rotated: list[Path] = []
        sink = FileSink(
            target,
            max_bytes=8,
            reporter=ExceptionReporter(color="never", stream=stream),
            on_rotated=rotated.append,
        )

        def broken_replace(src, dst):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(os, "replace", broken_replace)
        sink.emit(make_event(), SeverityLevel.INFO)

        assert rotated == []
        assert target.read_text() == "old\n" * 10 + "2024-01-01 12:00:00 [INFO] Started\n"
        assert "rotation sink failed" in stream.getvalue()
        assert "read-only filesystem" in stream.getvalue()


class TestJsonSink:
    @pytest.mark.parametrize("encoder_cls", [PreciseJsonEncoder, FallbackJsonEncoder])
    def test_appends_one_record_per_line(self, tmp_path: Path, quiet_reporter, encoder_cls) -> None:
        target = tmp_path / "logs" / "app.log.json"
        sink = JsonSink(target, encoder=encoder_cls(), max_bytes=4096, reporter=quiet_reporter)

        sink.emit(make_event(user="alice"), SeverityLevel.INFO)
        sink.emit(make_event(), SeverityLevel.INFO)

        lines = target.read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["data"] == {"user": "alice"}
        assert "data" not in json.loads(lines[1])

    def test_rotates_file_target(self, tmp_path: Path, quiet_reporter) -> None:
        target = tmp_path / "app.log.json"
        target.write_text("{}\n" * 50)
        rotated: list[Path] = []
        sink = JsonSink(
            target, encoder=PreciseJsonEncoder(), max_bytes=10, reporter=quiet_reporter, on_rotated=rotated.append
        )

        sink.emit(make_event(), SeverityLevel.INFO)

        assert len(rotated) == 1
        assert len(target.read_text().splitlines()) == 1

    def test_dash_writes_to_stdout_without_rotation(self, capsys, quiet_reporter) -> None:
        sink = JsonSink("-", encoder=PreciseJsonEncoder(), max_bytes=0, reporter=quiet_reporter)

        assert sink.is_stream()
        sink.emit(make_event(), SeverityLevel.INFO)

        record = json.loads(capsys.readouterr().out)
        assert record["message"] == "Started"

    def test_fifo_target_is_a_stream(self, tmp_path: Path, quiet_reporter) -> None:
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        sink = JsonSink(fifo, encoder=PreciseJsonEncoder(), max_bytes=0, reporter=quiet_reporter)
        assert sink.is_stream()

    def test_stream_target_is_never_rotated(self, monkeypatch) -> None:
        stream = io.StringIO()
        rotated: list[Path] = []
        rotation_calls: list[str] = []
        monkeypatch.setattr("sinklog.sinks.rotate_if_needed", lambda path, *args, **kwargs: rotation_calls.append(path))
        sink = JsonSink(
            os.devnull,
            encoder=PreciseJsonEncoder(),
            max_bytes=0,
            reporter=ExceptionReporter(color="never", stream=stream),
            on_rotated=rotated.append,
        )

        assert sink.is_stream()
        sink.emit(make_event(), SeverityLevel.INFO)

        assert rotation_calls == []
        assert rotated == []
        assert stream.getvalue() == ""

    def test_regular_or_missing_file_is_not_a_stream(self, tmp_path: Path, quiet_reporter) -> None:
        target = tmp_path / "app.log.json"
        sink = JsonSink(target, encoder=PreciseJsonEncoder(), max_bytes=0, reporter=quiet_reporter)
        assert not sink.is_stream()
        target.write_text("")
        assert not sink.is_stream()


class TestSyslogSink:
    def test_sends_tag_priority_and_message(self, syslog_transport) -> None:
        transport = syslog_transport
        SyslogSink(tag="testapp", facility="local0", transport=transport).emit(
            make_event("WARN", "Careful"), SeverityLevel.WARN
        )

        assert transport.sent == [("testapp", "local0.4", "WARN: Careful", 4242)]

    def test_unknown_level_uses_error_severity(self, syslog_transport) -> None:
        transport = syslog_transport
        SyslogSink(tag="t", facility="local3", transport=transport).emit(make_event("BOGUS"), SeverityLevel.ERROR)

        assert transport.sent[0][1:3] == ("local3.3", "BOGUS: Started")

    def test_transport_failure_becomes_sink_write_failure(self, syslog_transport) -> None:
        syslog_transport.fail = True
        sink = SyslogSink(tag="t", facility="local0", transport=syslog_transport)

        with pytest.raises(SinkWriteFailure, match="syslog unavailable"):
            sink.emit(make_event(), SeverityLevel.INFO)
