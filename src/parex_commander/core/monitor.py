"""Scrolling monitor: a fixed-height window over a callback's output.

The monitor prints a label, reserves ``max_lines`` blank rows and hands
the callback a writer.  Every write lands in a rolling buffer and the
reserved rows are redrawn with the newest lines.  When the callback
returns, the rows are erased again.  Everything runs on the calling
thread; monitoring is a rendering discipline, not a background task.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import TypeVar

from parex_commander.core import ansi
from parex_commander.core.protocols import ModeGuard, Writer
from parex_commander.exceptions import InvalidOptionsError

T = TypeVar("T")

DEFAULT_MONITOR_LINES: int = 5
LABEL_PREFIX: str = ":> "
LINE_PREFIX: str = " > "


class RollingBuffer:
    """At most ``max_lines`` lines; the oldest is evicted first."""

    def __init__(self, max_lines: int) -> None:
        self._lines: deque[str] = deque(maxlen=max_lines)

    def append(self, text: str) -> None:
        """Add *text*, which may span several lines."""
        pieces = text.split("\n")
        for piece in pieces[:-1]:
            self._append_piece(piece + "\n")
        if pieces[-1]:
            self._append_piece(pieces[-1])

    def _append_piece(self, text: str) -> None:
        # Extend an unterminated last line, otherwise start a new one.
        if self._lines and not self._lines[-1].endswith("\n"):
            self._lines[-1] += text
        else:
            self._lines.append(text)

    def visible(self) -> list[str]:
        """Buffered lines without their terminators, oldest first."""
        return [line.rstrip("\n") for line in self._lines]

    def __len__(self) -> int:
        return len(self._lines)


class MonitoredWriter:
    """Writer handed to the monitored callback."""

    def __init__(self, sink: Callable[[str], None]) -> None:
        self._sink = sink

    def write(self, *parts: object) -> None:
        self._sink("".join(str(part) for part in parts))

    def write_line(self, *parts: object) -> None:
        self.write(*parts, "\n")


class ScrollingMonitor:
    """Run a callback while showing its latest output in a fixed region."""

    def __init__(
        self,
        writer: Writer,
        max_lines: int = DEFAULT_MONITOR_LINES,
        guard: ModeGuard | None = None,
    ) -> None:
        if max_lines < 1:
            raise InvalidOptionsError(
                f"Monitor height must be at least 1, got {max_lines}.",
            )
        self._writer = writer
        self._max_lines = max_lines
        self._guard = guard

    @property
    def max_lines(self) -> int:
        return self._max_lines

    def run(self, label: str, callback: Callable[[Writer], T]) -> T:
        """Invoke *callback* with a monitored writer and return its result.

        The reserved region is erased even when the callback raises.
        """
        buffer = RollingBuffer(self._max_lines)

        def sink(text: str) -> None:
            buffer.append(text)
            self._redraw(buffer)

        self._writer.write_line(LABEL_PREFIX, label)
        self._writer.write("\n" * self._max_lines)

        if self._guard is not None:
            self._guard.enable()
        try:
            return callback(MonitoredWriter(sink))
        finally:
            if self._guard is not None:
                self._guard.restore()
            self._writer.write(ansi.cursor_up_and_start(self._max_lines), ansi.CLEAR_DOWN)

    def _redraw(self, buffer: RollingBuffer) -> None:
        self._writer.write(ansi.cursor_up_and_start(self._max_lines))
        visible = buffer.visible()
        for row in range(self._max_lines):
            self._writer.write(ansi.CLEAR_LINE)
            if row < len(visible):
                self._writer.write_line(LINE_PREFIX, visible[row])
            else:
                self._writer.write_line()
