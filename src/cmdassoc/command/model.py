"""Command value type and the well-known command aliases.

A ``Command`` binds an alias to a command-line template such as
``xdg-open $f``.  Templates are stored verbatim; placeholder expansion
belongs to whoever launches the command.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

# ---------------------------------------------------------------------------
# Well-known aliases
# ---------------------------------------------------------------------------

FILE_OPENER_ALIAS: Final[str] = "open"
URL_OPENER_ALIAS: Final[str] = "openURL"
FILE_MANAGER_ALIAS: Final[str] = "openFM"
EXE_OPENER_ALIAS: Final[str] = "openEXE"
VIEWER_ALIAS: Final[str] = "view"
EDITOR_ALIAS: Final[str] = "edit"
CMD_OPENER_ALIAS: Final[str] = "openCmd"

RUN_AS_EXECUTABLE_ALIAS: Final[str] = "execute"


class CommandType(Enum):
    """Whether a command is provided by the platform or defined by the user."""

    SYSTEM = "system"
    OTHER = "other"

    @classmethod
    def parse(cls, text: object) -> "CommandType":
        """Return the kind named by ``text``.

        ``None`` means OTHER.  The legacy spellings ``normal`` and
        ``invisible`` are accepted and map to OTHER.

        Raises
        ------
        ValueError
            If ``text`` is not a string or names no known kind.
        """
        if text is None:
            return cls.OTHER
        if not isinstance(text, str):
            raise ValueError(f"Command type must be a string, got {text!r}")
        key = text.strip().lower()
        if key in _LEGACY_KIND_NAMES:
            return cls.OTHER
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown command type: {text!r}") from None


_LEGACY_KIND_NAMES: Final[frozenset[str]] = frozenset({"normal", "invisible"})


@dataclass(frozen=True, slots=True)
class Command:
    """An aliased command-line template.

    Commands compare equal when every field matches, and sort by alias.

    Parameters
    ----------
    alias:
        Unique key of the command.
    template:
        Command line to run, placeholders included.
    kind:
        ``SYSTEM`` for platform-provided commands, ``OTHER`` otherwise.
    display_name:
        Optional human-readable name shown instead of the alias.
    """

    alias: str
    template: str
    kind: CommandType = CommandType.OTHER
    display_name: str | None = None

    def __post_init__(self) -> None:
        if not self.alias or not self.alias.strip():
            raise ValueError("Command alias must not be empty")
        if not self.template or not self.template.strip():
            raise ValueError(f"Command {self.alias!r} has an empty template")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return self.alias < other.alias

    @property
    def label(self) -> str:
        """Return the display name, falling back to the alias."""
        return self.display_name or self.alias

    @property
    def is_system(self) -> bool:
        return self.kind is CommandType.SYSTEM


RUN_AS_EXECUTABLE_COMMAND: Final[Command] = Command(
    RUN_AS_EXECUTABLE_ALIAS, "$f", CommandType.SYSTEM
)
