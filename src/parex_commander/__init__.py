"""parex-commander — interactive terminal prompts for command-line programs.

Confirmations, validated questions, arrow-key selection menus and a
scrolling monitor, all rendered through an injectable writer so they
can be driven from tests without a real terminal.
"""

from parex_commander.version import __version__

__all__: list[str] = ["__version__"]
