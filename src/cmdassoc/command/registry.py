"""Alias-keyed store of commands with dirty tracking.

The registry also owns the *default command*: the first command ever
registered under ``FILE_OPENER_ALIAS``.  Once adopted it never changes,
even if the alias is later re-registered with another template.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator

from cmdassoc.command.model import FILE_OPENER_ALIAS, Command
from cmdassoc.errors import DuplicateAliasError, UnknownAliasError

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Mapping of alias to ``Command``.

    Registrations made with ``track_modification=True`` flag the registry
    as modified when they change the stored value; the persistence layer
    only writes modified registries.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._default: Command | None = None
        self._modified = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, command: Command, track_modification: bool = True) -> None:
        """Register ``command``, replacing any command with the same alias.

        Parameters
        ----------
        command:
            The command to store.
        track_modification:
            When ``True`` and the stored value changes, the registry is
            flagged as modified.  Loaders and platform bootstrap pass
            ``False``.
        """
        self._adopt_default(command)
        logger.debug("Registering %r as %r", command.template, command.alias)

        previous = self._commands.get(command.alias)
        self._commands[command.alias] = command
        if track_modification and command != previous:
            self._modified = True

    def register_strict(self, command: Command, track_modification: bool = True) -> None:
        """Register ``command`` unless its alias is already taken.

        Raises
        ------
        DuplicateAliasError
            If a command is already registered under ``command.alias``.
        """
        if command.alias in self._commands:
            raise DuplicateAliasError(command.alias)
        self.register(command, track_modification)

    def _adopt_default(self, command: Command) -> None:
        if self._default is None and command.alias == FILE_OPENER_ALIAS:
            logger.debug("Registering %r as default command", command.template)
            self._default = command

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, alias: str) -> Command | None:
        """Return the command registered under ``alias``, or ``None``."""
        return self._commands.get(alias)

    def get(self, alias: str) -> Command:
        """Return the command registered under ``alias``.

        Raises
        ------
        UnknownAliasError
            If nothing is registered under ``alias``.
        """
        try:
            return self._commands[alias]
        except KeyError:
            raise UnknownAliasError(alias) from None

    def list_commands(self) -> list[Command]:
        """Return every registered command, sorted by alias."""
        return sorted(self._commands.values())

    @property
    def default_command(self) -> Command | None:
        """The command adopted from the file-opener alias, if any."""
        return self._default

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------

    @property
    def modified(self) -> bool:
        """Whether the registry holds changes that were not saved."""
        return self._modified

    def mark_modified(self) -> None:
        self._modified = True

    def clear_modified(self) -> None:
        self._modified = False

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __contains__(self, alias: object) -> bool:
        return alias in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.list_commands())

    def __repr__(self) -> str:
        return (
            f"CommandRegistry(aliases={sorted(self._commands)}, "
            f"default={self._default.alias if self._default else None!r}, "
            f"modified={self._modified})"
        )
