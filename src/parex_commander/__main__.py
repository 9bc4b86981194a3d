"""Allow ``python -m parex_commander`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m parex_commander`` behaves identically to the
``parex-demo`` console script.
"""

from __future__ import annotations

from parex_commander.cli.app import cli

if __name__ == "__main__":
    cli()
