"""Line-buffered yes/no confirmation prompt."""

from __future__ import annotations

from collections.abc import Sequence

from parex_commander.core.protocols import InputSource, Writer
from parex_commander.exceptions import InputClosedError, InvalidOptionsError

DEFAULT_YES_OPTIONS: tuple[str, ...] = ("y", "yes")
DEFAULT_NO_OPTIONS: tuple[str, ...] = ("n", "no")


class Confirmation:
    """Ask a yes/no question until a recognised answer is given."""

    def __init__(self, writer: Writer, source: InputSource) -> None:
        self._writer = writer
        self._source = source

    def ask(
        self,
        prompt: str,
        default: bool = True,
        yes_options: Sequence[str] = DEFAULT_YES_OPTIONS,
        no_options: Sequence[str] = DEFAULT_NO_OPTIONS,
    ) -> bool:
        """Prompt until the user answers.

        Only the first alias of each list is displayed; the side that
        matches *default* is shown in upper case.  An empty answer
        returns *default*.  Matching is case-insensitive.

        Raises
        ------
        InvalidOptionsError
            When either alias list is empty.
        InputClosedError
            When the input stream ends before an answer is given.
        """
        yes = [option.lower() for option in yes_options]
        no = [option.lower() for option in no_options]
        if not yes or not no:
            raise InvalidOptionsError("Confirmation needs at least one yes and one no option.")

        yes_display, no_display = yes[0], no[0]
        if default:
            yes_display = yes_display.upper()
        else:
            no_display = no_display.upper()
        choices = f"[{yes_display}/{no_display}]"

        while True:
            self._writer.write(prompt, " ", choices, " ")
            line = self._source.read_line()
            if line is None:
                raise InputClosedError("Input stream closed before the question was answered.")

            answer = line.strip().lower()
            if answer == "":
                return default
            if answer in yes:
                return True
            if answer in no:
                return False

            self._writer.write_line("Please enter one of the options: ", ", ".join([*yes, *no]))
