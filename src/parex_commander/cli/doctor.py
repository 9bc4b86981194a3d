"""``parex-demo doctor`` — terminal capability diagnostics.

Reports whether the current process can run the interactive prompts
with full functionality: an interactive stdin/stdout, POSIX terminal
mode control, and the optional Rich console.

This module lives in the CLI layer and renders via Rich when it is
installed.  It only collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from parex_commander.cli import exit_codes
from parex_commander.cli.console import console
from parex_commander.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    python_version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", python_version, status


def _is_tty(stream: TextIO) -> bool:
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def _tty_check(label: str, stream: TextIO) -> tuple[str, str, str]:
    """Return the row for an interactive stream.

    A missing TTY is a warning, not a failure: prompts fall back to
    line-buffered input.
    """
    if _is_tty(stream):
        return label, "terminal", "[green]OK[/green]"
    return label, "not a terminal", "[yellow]WARN[/yellow]"


def _termios_check() -> tuple[str, str, str]:
    """Return (label, value, status) for raw mode support."""
    if os.name == "nt":
        return "termios", "unsupported platform", "[yellow]WARN[/yellow]"
    try:
        import termios  # noqa: F401
    except ImportError:
        return "termios", "NOT AVAILABLE", "[yellow]WARN[/yellow]"
    return "termios", "available", "[green]OK[/green]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the optional Rich console."""
    try:
        rich_version = version("rich")
    except PackageNotFoundError:
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"
    return "rich", rich_version, "[green]OK[/green]"


def _parex_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the parex-commander version row."""
    return "parex-commander", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nparex-demo doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks() -> list[tuple[str, str, str]]:
    """Run every diagnostic and return the table rows."""
    return [
        _parex_version_check(),
        _python_version_check(),
        _tty_check("stdin", sys.stdin),
        _tty_check("stdout", sys.stdout),
        _termios_check(),
        _rich_check(),
    ]


def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails (warnings are
        allowed), :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)
    has_warning = any("WARN" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="parex-demo doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=16)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()

    if has_warning:
        console.print(
            "[yellow]Prompts will fall back to line-buffered input "
            "where raw mode is unavailable.[/yellow]",
        )

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
