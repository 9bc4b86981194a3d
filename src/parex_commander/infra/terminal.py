"""Raw terminal mode control and the guard that always restores it.

The terminal mode is process-wide state: once echo and canonical
input are switched off, every later program in the same shell inherits
that until someone switches them back.  :class:`TerminalModeGuard`
therefore restores on every exit path it can observe:

* explicit :meth:`~TerminalModeGuard.restore` / ``with`` block exit,
* object teardown (``__del__``),
* interpreter shutdown (``atexit``) and SIGTERM/SIGHUP.

All of them converge on the same idempotent ``restore()``.
"""

from __future__ import annotations

import atexit
import logging
import os
import signal
import sys
import threading
from types import FrameType
from typing import Any, ClassVar, TextIO

from parex_commander.core.protocols import ModeControl
from parex_commander.exceptions import TerminalModeError

if os.name != "nt":
    import termios

logger = logging.getLogger(__name__)

_EXIT_SIGNALS: tuple[str, ...] = ("SIGTERM", "SIGHUP")


# ---------------------------------------------------------------------------
# Mode controls
# ---------------------------------------------------------------------------

class TermiosModeControl:
    """Switch a POSIX terminal into non-canonical, non-echoing input.

    ``ISIG`` is left on so Ctrl+C still raises ``KeyboardInterrupt`` and
    unwinds through the guard.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._saved: list[Any] | None = None
        self._fd: int | None = None

    def enter_raw(self) -> None:
        if os.name == "nt":
            raise TerminalModeError("Raw terminal mode requires a POSIX terminal.")

        stream = self._stream if self._stream is not None else sys.stdin
        try:
            fd = stream.fileno()
            if not os.isatty(fd):
                raise TerminalModeError("Input is not an interactive terminal.")
            saved = termios.tcgetattr(fd)
            mode = termios.tcgetattr(fd)
            mode[3] &= ~(termios.ICANON | termios.ECHO)
            mode[6][termios.VMIN] = 1
            mode[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSANOW, mode)
        except (termios.error, OSError, ValueError, AttributeError) as exc:
            raise TerminalModeError(f"Cannot switch terminal mode: {exc}") from exc

        self._fd = fd
        self._saved = saved

    def restore(self) -> None:
        if self._saved is None or self._fd is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        except (termios.error, OSError) as exc:
            raise TerminalModeError(f"Cannot restore terminal mode: {exc}") from exc
        finally:
            self._saved = None
            self._fd = None


class NullModeControl:
    """Mode control that changes nothing, for tests and non-TTY runs."""

    def __init__(self) -> None:
        self.raw: bool = False
        self.enter_calls: int = 0
        self.restore_calls: int = 0

    def enter_raw(self) -> None:
        self.enter_calls += 1
        self.raw = True

    def restore(self) -> None:
        self.restore_calls += 1
        self.raw = False


# ---------------------------------------------------------------------------
# Guard
# ---------------------------------------------------------------------------

class TerminalModeGuard:
    """Scoped ownership of raw terminal mode.

    Usage::

        with TerminalModeGuard() as guard:
            if guard.degraded:
                ...  # keys arrive line-buffered
            key = decoder.read_key()

    Only one guard owns the terminal at a time.  Enabling a second
    guard while another is active is a no-op, not a nested stack.
    """

    _active: ClassVar[TerminalModeGuard | None] = None

    def __init__(self, control: ModeControl | None = None) -> None:
        self._control: ModeControl = control if control is not None else TermiosModeControl()
        self._altered: bool = False
        self._previous_handlers: dict[int, Any] = {}
        self.degraded: bool = False
        """``True`` when the last :meth:`enable` could not change the mode."""
        self.warning: str | None = None
        """Reason for degraded mode, if any."""

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> TerminalModeGuard:
        self.enable()
        return self

    def __exit__(self, *_args: object) -> None:
        self.restore()

    def __del__(self) -> None:
        if getattr(self, "_altered", False):
            self.restore()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def altered(self) -> bool:
        """Whether this guard currently holds the terminal in raw mode."""
        return self._altered

    def enable(self) -> bool:
        """Enter raw mode (idempotent).

        Returns
        -------
        bool
            ``True`` when raw input is in effect, ``False`` when the
            terminal could not be switched and input stays line-buffered.
        """
        if self._altered:
            return True

        owner = TerminalModeGuard._active
        if owner is not None and owner.altered:
            logger.debug("Terminal already in raw mode; not stacking a second guard")
            return True

        try:
            self._control.enter_raw()
        except TerminalModeError as exc:
            self.degraded = True
            self.warning = str(exc)
            logger.warning("Raw terminal mode unavailable, using line input: %s", exc)
            return False

        self._altered = True
        self.degraded = False
        self.warning = None
        TerminalModeGuard._active = self
        self._install_exit_hooks()
        logger.debug("Terminal switched to raw mode")
        return True

    def restore(self) -> None:
        """Leave raw mode (idempotent)."""
        if not self._altered:
            return

        # Terminal before bookkeeping: _on_signal may re-enter from hook removal.
        try:
            self._control.restore()
        except TerminalModeError as exc:
            logger.warning("%s", exc)
        else:
            logger.debug("Terminal mode restored")

        self._altered = False
        if TerminalModeGuard._active is self:
            TerminalModeGuard._active = None
        self._remove_exit_hooks()

    # ------------------------------------------------------------------
    # Process-level safety net
    # ------------------------------------------------------------------

    def _install_exit_hooks(self) -> None:
        atexit.register(self.restore)

        # signal.signal() only works from the main thread.
        if threading.current_thread() is not threading.main_thread():
            return
        for name in _EXIT_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is None:
                continue
            self._previous_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, self._on_signal)

    def _remove_exit_hooks(self) -> None:
        atexit.unregister(self.restore)

        handlers = self._previous_handlers
        if handlers and threading.current_thread() is threading.main_thread():
            for signum, previous in handlers.items():
                signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous_handlers = {}

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        previous = self._previous_handlers.get(signum, signal.SIG_DFL)
        if previous is None:
            previous = signal.SIG_DFL
        self.restore()
        # Hooks may still be mid-removal when the signal lands.
        signal.signal(signum, previous)

        if callable(previous):
            previous(signum, frame)
        elif previous != signal.SIG_IGN:
            # Default disposition is back in place; deliver again to terminate.
            signal.raise_signal(signum)
