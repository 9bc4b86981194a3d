"""Tests for the scrolling monitor (core/monitor.py)."""

from __future__ import annotations

import io

import pytest

from parex_commander.core import ansi
from parex_commander.core.monitor import (
    DEFAULT_MONITOR_LINES,
    MonitoredWriter,
    RollingBuffer,
    ScrollingMonitor,
)
from parex_commander.core.protocols import Writer
from parex_commander.exceptions import InvalidOptionsError
from parex_commander.infra.terminal import NullModeControl, TerminalModeGuard
from parex_commander.infra.writer import StreamWriter


def _redraws(output: io.StringIO, height: int) -> list[str]:
    """Split captured output into the segments between cursor-up moves."""
    return output.getvalue().split(ansi.cursor_up_and_start(height))


# ---------------------------------------------------------------------------
# RollingBuffer
# ---------------------------------------------------------------------------

class TestRollingBuffer:
    def test_evicts_oldest_first(self) -> None:
        buffer = RollingBuffer(2)
        for line in ("one\n", "two\n", "three\n", "four\n"):
            buffer.append(line)
        assert buffer.visible() == ["three", "four"]

    def test_unterminated_line_is_extended(self) -> None:
        buffer = RollingBuffer(3)
        buffer.append("down")
        buffer.append("loading")
        buffer.append("...\n")
        buffer.append("next")
        assert buffer.visible() == ["downloading...", "next"]

    def test_multi_line_write_is_split(self) -> None:
        buffer = RollingBuffer(3)
        buffer.append("a\nb\nc")
        assert buffer.visible() == ["a", "b", "c"]
        assert len(buffer) == 3

    def test_empty_write_adds_nothing(self) -> None:
        buffer = RollingBuffer(2)
        buffer.append("")
        assert len(buffer) == 0


class TestMonitoredWriter:
    def test_write_line_appends_newline(self) -> None:
        received: list[str] = []
        writer = MonitoredWriter(received.append)
        writer.write("a", 1)
        writer.write_line("b")
        assert received == ["a1", "b\n"]


# ---------------------------------------------------------------------------
# ScrollingMonitor
# ---------------------------------------------------------------------------

class TestScrollingMonitor:
    def test_returns_callback_value(self, writer: StreamWriter) -> None:
        monitor = ScrollingMonitor(writer, 2)
        assert monitor.run("Working", lambda w: 42) == 42

    def test_label_and_reserved_region(self, writer: StreamWriter, output: io.StringIO) -> None:
        ScrollingMonitor(writer, 3).run("Working", lambda w: None)
        assert output.getvalue().startswith(":> Working\n\n\n\n")

    def test_shows_last_lines_in_order(self, writer: StreamWriter, output: io.StringIO) -> None:
        def work(w: Writer) -> None:
            for line in ("one", "two", "three", "four"):
                w.write_line(line)

        ScrollingMonitor(writer, 2).run("Working", work)
        segments = _redraws(output, 2)
        # header, one redraw per write, final erase
        assert len(segments) == 6
        assert segments[-2] == (
            f"{ansi.CLEAR_LINE} > three\n"
            f"{ansi.CLEAR_LINE} > four\n"
        )

    def test_unused_rows_are_blank(self, writer: StreamWriter, output: io.StringIO) -> None:
        ScrollingMonitor(writer, 3).run("Working", lambda w: w.write_line("only"))
        segments = _redraws(output, 3)
        assert segments[1] == (
            f"{ansi.CLEAR_LINE} > only\n"
            f"{ansi.CLEAR_LINE}\n"
            f"{ansi.CLEAR_LINE}\n"
        )

    def test_region_erased_on_completion(self, writer: StreamWriter, output: io.StringIO) -> None:
        ScrollingMonitor(writer, 2).run("Working", lambda w: w.write_line("x"))
        assert output.getvalue().endswith(ansi.cursor_up_and_start(2) + ansi.CLEAR_DOWN)

    def test_region_erased_when_callback_raises(
        self, writer: StreamWriter, output: io.StringIO,
    ) -> None:
        def boom(w: Writer) -> None:
            w.write_line("about to fail")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            ScrollingMonitor(writer, 2).run("Working", boom)
        assert output.getvalue().endswith(ansi.cursor_up_and_start(2) + ansi.CLEAR_DOWN)

    def test_buffer_not_shared_between_runs(
        self, writer: StreamWriter, output: io.StringIO,
    ) -> None:
        monitor = ScrollingMonitor(writer, 2)
        monitor.run("first", lambda w: w.write_line("old"))
        output.seek(0)
        output.truncate()
        monitor.run("second", lambda w: w.write_line("new"))
        assert "old" not in output.getvalue()

    def test_guard_engaged_during_callback(self, writer: StreamWriter) -> None:
        control = NullModeControl()
        guard = TerminalModeGuard(control)
        states: list[bool] = []

        ScrollingMonitor(writer, 2, guard).run("Working", lambda w: states.append(control.raw))
        assert states == [True]
        assert control.raw is False

    def test_default_height(self, writer: StreamWriter) -> None:
        assert ScrollingMonitor(writer).max_lines == DEFAULT_MONITOR_LINES

    @pytest.mark.parametrize("height", [0, -1])
    def test_non_positive_height_rejected(self, writer: StreamWriter, height: int) -> None:
        with pytest.raises(InvalidOptionsError):
            ScrollingMonitor(writer, height)
