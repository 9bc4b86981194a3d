"""Shared pytest fixtures and configuration for the parex-commander suite.

Guidelines
----------
* No test touches the real terminal: mode changes go through
  ``NullModeControl`` and input comes from ``ScriptedInput``.
* Output is captured by a ``StreamWriter`` over ``io.StringIO``.
* Tests must not depend on whether the runner has a TTY.
"""

from __future__ import annotations

import io
from collections import deque
from collections.abc import Iterable, Iterator

import pytest

from parex_commander.infra.terminal import NullModeControl, TerminalModeGuard
from parex_commander.infra.writer import StreamWriter

UP = b"\x1b[A"
DOWN = b"\x1b[B"
SPACE = b" "
ENTER = b"\n"


class ScriptedInput:
    """In-memory ``InputSource``.

    *keys* is a sequence of byte chunks; each chunk is served one byte
    at a time and a ``None`` entry simulates a poll that timed out.
    Once both queues are exhausted the stream reports end-of-file.
    """

    def __init__(
        self,
        keys: Iterable[bytes | None] = (),
        lines: Iterable[str] = (),
    ) -> None:
        self._bytes: deque[bytes | None] = deque()
        for chunk in keys:
            if chunk is None:
                self._bytes.append(None)
            else:
                self._bytes.extend(bytes([b]) for b in chunk)
        self._lines: deque[str] = deque(lines)
        self.timeouts: list[float] = []

    def read_byte(self, timeout: float) -> bytes | None:
        self.timeouts.append(timeout)
        if not self._bytes:
            return b""
        return self._bytes.popleft()

    def read_line(self) -> str | None:
        if not self._lines:
            return None
        return self._lines.popleft()


@pytest.fixture(autouse=True)
def _reset_active_guard() -> Iterator[None]:
    yield
    TerminalModeGuard._active = None


@pytest.fixture()
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def writer(output: io.StringIO) -> StreamWriter:
    return StreamWriter(output)


@pytest.fixture()
def control() -> NullModeControl:
    return NullModeControl()


@pytest.fixture()
def guard(control: NullModeControl) -> Iterator[TerminalModeGuard]:
    guard = TerminalModeGuard(control)
    yield guard
    guard.restore()
