"""Keypress decoding for the raw-mode menu.

A keypress arrives as one to three bytes.  Escape sequences (``ESC``,
``ESC [``, ``ESC [ X``) are assembled with at most two extra bounded
reads, so a lone Escape or a truncated sequence never blocks.
"""

from __future__ import annotations

from parex_commander.core.ansi import ESC
from parex_commander.core.models import Key
from parex_commander.core.protocols import InputSource
from parex_commander.exceptions import InputClosedError

READ_TIMEOUT: float = 0.2
"""Seconds each physical read waits before reporting "no key"."""

_ESC_BYTE = ESC.encode("ascii")

_KEYMAP: dict[bytes, Key] = {
    _ESC_BYTE + b"[A": Key.UP,
    _ESC_BYTE + b"[B": Key.DOWN,
    b" ": Key.SPACE,
    b"\n": Key.ENTER,
    b"\r": Key.ENTER,
}


def decode(raw: bytes) -> Key:
    """Classify a raw byte sequence as a logical :class:`Key`."""
    return _KEYMAP.get(raw, Key.UNRECOGNIZED)


class KeyDecoder:
    """Read one logical keypress at a time from an :class:`InputSource`."""

    def __init__(self, source: InputSource, timeout: float = READ_TIMEOUT) -> None:
        self._source = source
        self._timeout = timeout

    def read_key(self) -> Key | None:
        """Return the next key, or ``None`` when no byte arrived in time.

        Raises
        ------
        InputClosedError
            When the input stream is at end-of-file.
        """
        first = self._read()
        if first is None:
            return None

        raw = first
        if first == _ESC_BYTE:
            second = self._read()
            if second is not None:
                raw += second
                if second == b"[":
                    third = self._read()
                    if third is not None:
                        raw += third

        return decode(raw)

    def _read(self) -> bytes | None:
        data = self._source.read_byte(self._timeout)
        if data == b"":
            raise InputClosedError(
                "Input stream closed while waiting for a key.",
                hint="Run the command from an interactive terminal.",
            )
        return data
