"""Diagnostic console with optional Rich support.

Prompts themselves never go through Rich: they render plain text via a
``Writer`` so that cursor arithmetic stays exact.  This console is for
the CLI layer's own messages (errors, warnings, the doctor table) and
targets stderr.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
keep working when it is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from parex_commander.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?(?:(?:bold|dim|red|green|yellow|cyan) ?)+\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def strip_markup(text: str) -> str:
    """Remove the Rich style tags this console emits, such as ``[bold red]``."""
    return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with plain stderr fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*(strip_markup(str(obj)) for obj in objects), file=sys.stderr)
            return
        rich_console.print(*objects)

    def warn(self, message: str) -> None:
        """Print a highlighted warning line."""
        self.print(f"[yellow]Warning:[/yellow] {message}")


console = _ConsoleProxy()
