"""Domain models for parex-commander.

All models are **frozen** dataclasses or enums: immutable value
objects with no behaviour beyond data access.  They carry zero I/O and
must remain pure across the entire lifecycle of a prompt.
"""

from __future__ import annotations

import enum
from collections.abc import Hashable, Iterator, Mapping, Sequence
from dataclasses import dataclass

from parex_commander.exceptions import InvalidOptionsError


# ---------------------------------------------------------------------------
# Logical keys
# ---------------------------------------------------------------------------

class Key(enum.Enum):
    """A logical keypress recognised by the menu."""

    UP = "up"
    DOWN = "down"
    SPACE = "space"
    ENTER = "enter"
    UNRECOGNIZED = "unrecognized"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Option:
    """A single selectable entry."""

    key: Hashable
    """Caller-supplied mapping key, or the zero-based position for lists."""

    label: str
    """Text displayed in the menu."""


@dataclass(frozen=True, slots=True)
class OptionSet:
    """Immutable, ordered collection of :class:`Option` entries.

    Lists and mappings collapse into this one representation at the
    API boundary; the menu itself only ever deals with positions.
    """

    options: tuple[Option, ...]

    keyed: bool = False
    """``True`` when built from a mapping, so results report the keys."""

    @classmethod
    def from_options(
        cls,
        options: Sequence[str] | Mapping[Hashable, str],
    ) -> OptionSet:
        """Build an option set from a list of labels or a key→label mapping.

        Raises
        ------
        InvalidOptionsError
            When *options* is empty or is a bare string.
        """
        if isinstance(options, (str, bytes)):
            raise InvalidOptionsError(
                "Options must be a sequence or mapping, not a string.",
            )
        if isinstance(options, Mapping):
            items = tuple(Option(key, str(label)) for key, label in options.items())
            keyed = True
        else:
            items = tuple(Option(i, str(label)) for i, label in enumerate(options))
            keyed = False

        if not items:
            raise InvalidOptionsError(
                "Options for selection cannot be empty.",
                hint="Pass at least one option to the menu.",
            )
        return cls(items, keyed)

    def result_for(self, position: int) -> Hashable:
        """Return what a selection at *position* reports to the caller.

        Lists report the label itself, mappings report the key.
        """
        option = self.options[position]
        return option.key if self.keyed else option.label

    def __len__(self) -> int:
        return len(self.options)

    def __iter__(self) -> Iterator[Option]:
        return iter(self.options)

    def __getitem__(self, position: int) -> Option:
        return self.options[position]
