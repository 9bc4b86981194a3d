"""Infrastructure layer — the real terminal and standard streams.

Every raw OS exception (``termios.error``, ``OSError``) must be caught
here and re-raised as a :class:`~parex_commander.exceptions.ParexError`
subclass, or absorbed into degraded mode by the terminal guard.

Rules
-----
* No imports from ``cli``.
* No user-facing output beyond the writer itself.
"""

from parex_commander.infra.input import FileDescriptorInput
from parex_commander.infra.terminal import NullModeControl, TermiosModeControl, TerminalModeGuard
from parex_commander.infra.writer import StreamWriter

__all__: list[str] = [
    "FileDescriptorInput",
    "NullModeControl",
    "StreamWriter",
    "TermiosModeControl",
    "TerminalModeGuard",
]
