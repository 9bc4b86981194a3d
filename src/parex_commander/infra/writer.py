"""Stream-backed :class:`~parex_commander.core.protocols.Writer`."""

from __future__ import annotations

import sys
from typing import TextIO


class StreamWriter:
    """Append text to a stream, flushing after every call.

    Prompts redraw in place with cursor escapes, so nothing may linger
    in the stream buffer between a render and the next key read.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        """The target stream (``sys.stdout`` resolved at call time by default)."""
        return self._stream if self._stream is not None else sys.stdout

    def write(self, *parts: object) -> None:
        stream = self.stream
        stream.write("".join(str(part) for part in parts))
        stream.flush()

    def write_line(self, *parts: object) -> None:
        self.write(*parts, "\n")
