"""Core layer — prompt state machines, rendering and key decoding.

Rules
-----
* No ``print()`` calls; all output goes through a ``Writer``.
* No direct terminal or descriptor access; input comes from an
  ``InputSource`` and raw mode from a ``ModeGuard``.
* No imports from ``cli`` or ``infra``.
"""

from parex_commander.core.confirmation import Confirmation
from parex_commander.core.keys import KeyDecoder
from parex_commander.core.models import Key, Option, OptionSet
from parex_commander.core.monitor import ScrollingMonitor
from parex_commander.core.protocols import InputSource, ModeControl, ModeGuard, Writer
from parex_commander.core.question import Question
from parex_commander.core.selection import MenuState, SelectionMenu

__all__: list[str] = [
    "Confirmation",
    "InputSource",
    "Key",
    "KeyDecoder",
    "MenuState",
    "ModeControl",
    "ModeGuard",
    "Option",
    "OptionSet",
    "Question",
    "ScrollingMonitor",
    "SelectionMenu",
    "Writer",
]
