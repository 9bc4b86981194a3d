"""Line-buffered free-text prompt with an optional validator."""

from __future__ import annotations

from collections.abc import Callable

from parex_commander.core.protocols import InputSource, Writer
from parex_commander.exceptions import InputClosedError

Validator = Callable[[str], bool | str]
"""Returns ``True`` for valid text, or an error message / ``False``."""

INVALID_VALUE_MESSAGE: str = "Invalid value"


class Question:
    """Ask for text until the validator accepts it."""

    def __init__(self, writer: Writer, source: InputSource) -> None:
        self._writer = writer
        self._source = source

    def ask(
        self,
        prompt: str,
        default: str = "",
        validator: Validator | None = None,
    ) -> str:
        """Prompt until an acceptable answer is given.

        Empty input is replaced by *default* before validation.  A
        validator returning a string has that string shown as the error;
        any other non-``True`` result shows ``"Invalid value"``.

        Raises
        ------
        InputClosedError
            When the input stream ends before an answer is accepted.
        """
        display = f"{prompt} [{default}]" if default else prompt

        while True:
            self._writer.write(display, " ")
            line = self._source.read_line()
            if line is None:
                raise InputClosedError("Input stream closed before the question was answered.")

            text = line.strip() or default
            if validator is None:
                return text

            verdict = validator(text)
            if verdict is True:
                return text
            self._writer.write_line(verdict if isinstance(verdict, str) else INVALID_VALUE_MESSAGE)
