"""``IO`` facade — one object through which a command talks to the user.

It owns the writer, the input source and the terminal guard, and
builds a fresh prompt object for every call.  Command handlers receive
an ``IO`` instance and never touch the terminal directly.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import TypeVar

from parex_commander.core import ansi
from parex_commander.core.confirmation import (
    DEFAULT_NO_OPTIONS,
    DEFAULT_YES_OPTIONS,
    Confirmation,
)
from parex_commander.core.monitor import DEFAULT_MONITOR_LINES, ScrollingMonitor
from parex_commander.core.protocols import InputSource, ModeGuard, Writer
from parex_commander.core.question import Question, Validator
from parex_commander.core.selection import SelectionMenu
from parex_commander.infra.input import FileDescriptorInput
from parex_commander.infra.terminal import TerminalModeGuard
from parex_commander.infra.writer import StreamWriter

T = TypeVar("T")

HEADER_BORDER: str = "*"
HEADER_PADDING: int = 6


class IO:
    """User interaction facade.

    Parameters
    ----------
    writer:
        Output sink.  Defaults to a :class:`StreamWriter` on stdout.
    source:
        Input stream.  Defaults to stdin's file descriptor.
    guard:
        Raw mode guard shared by the menu and monitor.  Defaults to a
        :class:`TerminalModeGuard` on the real terminal.
    """

    def __init__(
        self,
        writer: Writer | None = None,
        source: InputSource | None = None,
        guard: ModeGuard | None = None,
    ) -> None:
        self.writer: Writer = writer if writer is not None else StreamWriter()
        self.source: InputSource = source if source is not None else FileDescriptorInput()
        self.guard: ModeGuard = guard if guard is not None else TerminalModeGuard()

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def confirm(
        self,
        prompt: str,
        default: bool = True,
        yes_options: Sequence[str] = DEFAULT_YES_OPTIONS,
        no_options: Sequence[str] = DEFAULT_NO_OPTIONS,
    ) -> bool:
        """Ask a yes/no question.  See :meth:`Confirmation.ask`."""
        return Confirmation(self.writer, self.source).ask(
            prompt, default, yes_options, no_options,
        )

    def ask(
        self,
        prompt: str,
        default: str = "",
        validator: Validator | None = None,
    ) -> str:
        """Ask for text, followed by a blank line.  See :meth:`Question.ask`."""
        result = Question(self.writer, self.source).ask(prompt, default, validator)
        self.write_line()
        return result

    def select(
        self,
        prompt: str,
        options: Sequence[str] | Mapping[Hashable, str],
        multiple: bool = False,
        required: bool = True,
    ) -> Hashable | list[Hashable]:
        """Show a selection menu, followed by a blank line.

        See :meth:`SelectionMenu.select`.
        """
        menu = SelectionMenu(self.writer, self.source, self.guard)
        result = menu.select(prompt, options, multiple, required)
        self.write_line()
        return result

    def monitor(
        self,
        label: str,
        callback: Callable[[Writer], T],
        lines: int = DEFAULT_MONITOR_LINES,
    ) -> T:
        """Run *callback* inside a scrolling monitor of *lines* rows."""
        return ScrollingMonitor(self.writer, lines, self.guard).run(label, callback)

    # ------------------------------------------------------------------
    # Plain output
    # ------------------------------------------------------------------

    def write(self, *parts: object) -> None:
        self.writer.write(*parts)

    def write_line(self, *parts: object) -> None:
        self.writer.write_line(*parts)

    def write_header(self, content: str) -> None:
        """Print *content* centred in an asterisk box, then a blank line."""
        left, right = HEADER_BORDER + " ", " " + HEADER_BORDER
        lines = content.split("\n")
        inner = max(len(line) for line in lines) + HEADER_PADDING
        border = HEADER_BORDER * (len(left) + inner + len(right))

        self.write_line(border)
        for line in lines:
            # Odd padding leaves the extra space on the right.
            pad = (inner - len(line)) // 2
            self.write_line(left, " " * pad, line.ljust(inner - pad), right)
        self.write_line(border)
        self.write_line()

    def clear_screen(self) -> None:
        self.write(ansi.CLEAR_SCREEN, ansi.CURSOR_HOME)
