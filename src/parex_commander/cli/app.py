"""CLI application entry point and command routing for ``parex-demo``.

This module is the **sole error boundary** for the demo program.  It
catches :class:`~parex_commander.exceptions.ParexError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* Prompts render through the ``IO`` facade; the Rich console is only
  used for the boundary's own messages.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time

from parex_commander.cli import exit_codes
from parex_commander.cli.console import console
from parex_commander.cli.io import IO
from parex_commander.core.protocols import Writer
from parex_commander.exceptions import ParexError
from parex_commander.version import __version__

_PHRASES: tuple[str, ...] = (
    "I'm thinking...",
    "I'm writing...",
    "Where's my paper?",
    "Where's my pencil?",
    "I'd like some coffee.",
)

_PURPOSES: dict[str, str] = {
    "ac": "App creator",
    "e": "Explorer",
    "?": "42",
}

_FRAMEWORKS: list[str] = ["Angular", "React", "Svelte", "Vue"]


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``parex-demo demo``    — interactive walkthrough of every prompt
    * ``parex-demo doctor``  — terminal capability diagnostics
    * ``parex-demo --version``
    """
    parser = argparse.ArgumentParser(
        prog="parex-demo",
        description="Interactive terminal prompts for command-line programs.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log terminal mode changes to stderr.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=("demo", "doctor"),
        help="'demo' for the walkthrough, 'doctor' to run diagnostics.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _think(writer: Writer, steps: int = 10, delay: float = 0.3) -> int:
    """Monitored task used by the walkthrough."""
    last = -1
    for _ in range(steps):
        index = random.randrange(len(_PHRASES))
        while index == last:
            index = random.randrange(len(_PHRASES))
        writer.write_line(_PHRASES[index])
        last = index
        time.sleep(delay)
    return steps


def _require_name(text: str) -> bool | str:
    return True if text else "Name is required"


def _handle_demo(io: IO | None = None) -> int:
    """Run the interactive walkthrough.

    Flow:
    1. Header, a warning when keys will arrive line-buffered, and a
       confirmation to continue.
    2. A monitored task with a two-line scrolling window.
    3. A validated question.
    4. A keyed single choice and a list multiple choice.
    """
    io = io if io is not None else IO()

    io.clear_screen()
    io.write_header("Parex Commander\nExample of using the IO class")

    if not io.guard.enable():
        console.warn("raw terminal mode unavailable; type arrow keys and press Enter.")
    io.guard.restore()

    go = io.confirm("Do you want to continue?")
    io.write_line("Thanks!" if go else "Err...")
    if not go:
        return exit_codes.DECLINED

    io.monitor("Wait a minute, I'm preparing questions.", _think, lines=2)

    name = io.ask("What is your name?", validator=_require_name)
    io.write_line(f"Hi, {name}")

    purpose = io.select("What is your purpose?", _PURPOSES)
    io.write_line(
        {
            "ac": "An excellent choice",
            "e": "You found a powerful tool",
        }.get(str(purpose), "Don't panic"),
    )

    frameworks = io.select(
        "What is your favourite JS framework?", _FRAMEWORKS, multiple=True,
    )
    io.write_line("WOW! I like ", " and ".join(str(fw) for fw in frameworks), " too!")

    io.write_line("Thanks, we'll get back to you.")
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from parex_commander.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the parex-demo CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_demo()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ParexError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
