"""Arrow-key selection menu (single and multiple choice).

The menu is drawn below the cursor and redrawn in place: before every
render except the first, the cursor moves up by the number of lines the
previous render printed and everything below is cleared.  When the
menu finishes, the last render is erased the same way, so only what the
caller prints afterwards remains on screen.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field

from parex_commander.core import ansi
from parex_commander.core.keys import READ_TIMEOUT, KeyDecoder
from parex_commander.core.models import Key, OptionSet
from parex_commander.core.protocols import InputSource, ModeGuard, Writer

logger = logging.getLogger(__name__)

SINGLE_HINT: str = "Use the up/down arrow keys to navigate and Enter to select."
MULTI_HINT: str = "Use the up/down arrow keys to navigate, space to select, and Enter to confirm."
REQUIRED_ERROR: str = "Select some option."

CURSOR_MARKER: str = " » "
NO_CURSOR_MARKER: str = "   "
CHECKED: str = "[×] "
UNCHECKED: str = "[ ] "
BULLET: str = "• "


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class MenuState:
    """Cursor and selection of one menu session."""

    count: int
    multiple: bool = False
    cursor: int = 0
    selected: set[int] = field(default_factory=set)
    error: str | None = None

    def move_up(self) -> None:
        self.cursor = (self.cursor - 1) % self.count

    def move_down(self) -> None:
        self.cursor = (self.cursor + 1) % self.count

    def toggle(self) -> None:
        """Flip membership of the cursor position (multiple choice only)."""
        if not self.multiple:
            return
        self.selected ^= {self.cursor}
        self.error = None

    def confirm(self) -> list[int]:
        """Finalize and return the chosen positions in display order."""
        if not self.multiple:
            self.selected = {self.cursor}
        return sorted(self.selected)

    def apply(self, key: Key) -> list[int] | None:
        """Apply *key*; return the chosen positions once Enter is pressed."""
        if key is Key.UP:
            self.move_up()
        elif key is Key.DOWN:
            self.move_down()
        elif key is Key.SPACE:
            self.toggle()
        elif key is Key.ENTER:
            return self.confirm()
        return None


def render(prompt: str, options: OptionSet, state: MenuState) -> str:
    """Build the full menu text; every line ends with a newline."""
    lines = [prompt]
    for position, option in enumerate(options):
        marker = CURSOR_MARKER if position == state.cursor else NO_CURSOR_MARKER
        if state.multiple:
            box = CHECKED if position in state.selected else UNCHECKED
        else:
            box = BULLET
        lines.append(f"{marker}{box}{option.label}")

    lines.append(MULTI_HINT if state.multiple else SINGLE_HINT)
    if state.error:
        lines.append(state.error)
    return "".join(f"{line}\n" for line in lines)


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------

class SelectionMenu:
    """Interactive single/multiple choice menu driven by arrow keys."""

    def __init__(
        self,
        writer: Writer,
        source: InputSource,
        guard: ModeGuard,
        *,
        timeout: float = READ_TIMEOUT,
    ) -> None:
        self._writer = writer
        self._source = source
        self._guard = guard
        self._timeout = timeout
        self.degraded: bool = False
        """Set when the last run could not switch the terminal to raw mode."""

    def select(
        self,
        prompt: str,
        options: Sequence[str] | Mapping[Hashable, str],
        multiple: bool = False,
        required: bool = True,
    ) -> Hashable | list[Hashable]:
        """Show the menu and block until the user confirms a choice.

        Parameters
        ----------
        prompt:
            Line shown above the options.
        options:
            A list of labels (the chosen labels are returned) or a
            key→label mapping (the chosen keys are returned).
        multiple:
            Allow toggling several options with Space.
        required:
            Refuse an empty confirmation and ask again.

        Returns
        -------
        Hashable | list[Hashable]
            One result for single choice, a list in display order for
            multiple choice.

        Raises
        ------
        InvalidOptionsError
            When *options* is empty.  Raised before the terminal is touched.
        InputClosedError
            When the input stream ends while the menu is open.
        """
        option_set = OptionSet.from_options(options)
        state = MenuState(len(option_set), multiple)
        decoder = KeyDecoder(self._source, self._timeout)
        lines = 0

        self.degraded = not self._guard.enable()
        if self.degraded:
            logger.warning("Menu running without raw mode; keys take effect after Enter")

        try:
            while True:
                if lines:
                    self._erase(lines)
                output = render(prompt, option_set, state)
                lines = output.count("\n")
                self._writer.write(output)

                key = decoder.read_key()
                while key is None:
                    key = decoder.read_key()

                chosen = state.apply(key)
                if chosen is None:
                    continue
                if chosen or not required:
                    break
                state.error = REQUIRED_ERROR
        finally:
            self._guard.restore()

        self._erase(lines)

        results = [option_set.result_for(position) for position in chosen]
        if multiple:
            return results
        return results[0]

    def _erase(self, lines: int) -> None:
        self._writer.write(ansi.cursor_up_and_start(lines), ansi.CLEAR_DOWN)
