"""Custom exception hierarchy for parex-commander.

All exceptions that cross layer boundaries must inherit from
:class:`ParexError`.  Raw OS/terminal exceptions (``termios.error``,
``OSError``) must NEVER propagate beyond the infrastructure layer.
They are caught and either re-raised as a typed subclass defined here
or turned into degraded behaviour.

Validation failures inside a prompt (a wrong answer, an empty required
selection) are *not* exceptions: the prompt shows a hint and asks
again.

Hierarchy
---------
ParexError
├── InvalidOptionsError
├── InputClosedError
├── TerminalModeError
└── EnvironmentError
"""

from __future__ import annotations


class ParexError(Exception):
    """Base exception for all parex-commander errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Caller configuration --------------------------------------------------

class InvalidOptionsError(ParexError, ValueError):
    """Raised when a prompt is configured with unusable arguments.

    Always raised before the terminal mode is touched, so no cleanup
    is owed by the caller.
    """


# --- Input -----------------------------------------------------------------

class InputClosedError(ParexError, EOFError):
    """Raised when the input stream reaches end-of-file during a prompt."""


# --- Terminal --------------------------------------------------------------

class TerminalModeError(ParexError):
    """Raised by mode controls when the terminal mode cannot be changed.

    :class:`~parex_commander.infra.terminal.TerminalModeGuard` catches
    this and degrades to line-buffered input instead of crashing.
    """


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ParexError):
    """Raised when a required runtime dependency is not available."""
