"""File-descriptor backed :class:`~parex_commander.core.protocols.InputSource`.

Both line reads and single-byte reads go through ``os.read`` on the
raw descriptor.  Mixing them with the buffered ``sys.stdin`` object
would let Python's read-ahead swallow bytes that ``select`` can no
longer see.
"""

from __future__ import annotations

import os
import select
import sys
from typing import TextIO

from parex_commander.exceptions import EnvironmentError, InputClosedError


class FileDescriptorInput:
    """Polled byte reads and blocking line reads from a file descriptor."""

    def __init__(self, stream: TextIO | None = None, *, encoding: str = "utf-8") -> None:
        self._stream = stream
        self._encoding = encoding

    def fileno(self) -> int:
        """Return the underlying descriptor.

        Raises
        ------
        EnvironmentError
            When the stream is not backed by a descriptor (e.g. replaced
            by an in-memory buffer).
        """
        stream = self._stream if self._stream is not None else sys.stdin
        try:
            return stream.fileno()
        except (AttributeError, OSError, ValueError) as exc:
            raise EnvironmentError(
                "Input stream has no file descriptor.",
                hint="Interactive prompts need a real stdin.",
            ) from exc

    def read_byte(self, timeout: float) -> bytes | None:
        fd = self.fileno()
        try:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None
            return os.read(fd, 1)
        except OSError as exc:
            raise InputClosedError(f"Cannot read from input: {exc}") from exc

    def read_line(self) -> str | None:
        fd = self.fileno()
        chunks: list[bytes] = []
        while True:
            try:
                char = os.read(fd, 1)
            except OSError as exc:
                raise InputClosedError(f"Cannot read from input: {exc}") from exc
            if not char:
                break
            chunks.append(char)
            if char == b"\n":
                break

        if not chunks:
            return None
        return b"".join(chunks).decode(self._encoding, errors="replace")
