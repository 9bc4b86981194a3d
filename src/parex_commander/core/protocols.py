"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so every prompt can be driven by in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol


class Writer(Protocol):
    """Output sink every prompt renders through."""

    def write(self, *parts: object) -> None:
        """Write the concatenation of *parts* without a line terminator."""
        ...  # pragma: no cover

    def write_line(self, *parts: object) -> None:
        """Write the concatenation of *parts* followed by a newline."""
        ...  # pragma: no cover


class InputSource(Protocol):
    """Contract for the input stream behind the prompts.

    Implementations must map backend-specific failures to
    :class:`~parex_commander.exceptions.ParexError` subclasses.
    """

    def read_byte(self, timeout: float) -> bytes | None:
        """Read one byte, waiting at most *timeout* seconds.

        Returns
        -------
        bytes | None
            A single byte, ``b""`` at end-of-file, or ``None`` when
            nothing arrived within *timeout*.
        """
        ...  # pragma: no cover

    def read_line(self) -> str | None:
        """Block until a full line is read.

        Returns
        -------
        str | None
            The line including its terminator, or ``None`` at
            end-of-file.
        """
        ...  # pragma: no cover


class ModeControl(Protocol):
    """Capability to switch the controlling terminal in and out of raw mode."""

    def enter_raw(self) -> None:
        """Disable canonical mode and echo.

        Raises
        ------
        TerminalModeError
            When the mode cannot be changed (not a TTY, permission).
        """
        ...  # pragma: no cover

    def restore(self) -> None:
        """Reinstate the mode captured by :meth:`enter_raw`."""
        ...  # pragma: no cover


class ModeGuard(Protocol):
    """Scoped owner of raw terminal mode, as used by the menu and monitor."""

    def enable(self) -> bool:
        """Enter raw mode; ``False`` means input stays line-buffered."""
        ...  # pragma: no cover

    def restore(self) -> None:
        """Leave raw mode.  Must be idempotent."""
        ...  # pragma: no cover
