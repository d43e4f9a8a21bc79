"""Ordered association rules: user-defined and system-default.

User associations are edited by the user and persisted; system
associations come from platform bootstrap and are never written to disk.
Within each sequence, registration order is match order.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from cmdassoc.command.model import Command
from cmdassoc.command.registry import CommandRegistry
from cmdassoc.errors import UnknownAliasError
from cmdassoc.filters.nodes import FileFilter, FileSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandAssociation:
    """Routes files accepted by ``filter`` to ``command``."""

    command: Command
    filter: FileFilter

    def accept(self, file: FileSnapshot) -> bool:
        return self.filter.accept(file)


class AssociationRegistry:
    """The user and system association sequences.

    Parameters
    ----------
    commands:
        Registry against which association aliases are checked.
    """

    def __init__(self, commands: CommandRegistry) -> None:
        self._commands = commands
        self._user: list[CommandAssociation] = []
        self._system: list[CommandAssociation] = []
        self._modified = False

    @property
    def commands(self) -> CommandRegistry:
        return self._commands

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_user(
        self,
        command: Command | str,
        filter: FileFilter,  # noqa: A002
        track_modification: bool = True,
    ) -> CommandAssociation:
        """Append a user association.

        Parameters
        ----------
        command:
            The command, or its alias.  Either way the alias must already
            be registered; the registered command is the one referenced.
        filter:
            Files accepted by this filter are routed to the command.
        track_modification:
            Flag the user sequence as modified.  Loaders pass ``False``.

        Raises
        ------
        UnknownAliasError
            If the alias is not registered.
        """
        association = self._create(command, filter)
        self._user.append(association)
        if track_modification:
            self._modified = True
        return association

    def register_system(self, command: Command | str, filter: FileFilter) -> CommandAssociation:  # noqa: A002
        """Append a system association.

        Raises
        ------
        UnknownAliasError
            If the alias is not registered.
        """
        association = self._create(command, filter)
        self._system.append(association)
        return association

    def clear_user(self) -> None:
        """Remove every user association."""
        if self._user:
            self._user.clear()
            self._modified = True

    def _create(self, command: Command | str, filter: FileFilter) -> CommandAssociation:  # noqa: A002
        alias = command if isinstance(command, str) else command.alias
        registered = self._commands.lookup(alias)
        if registered is None:
            logger.debug("Failed to create association as %r is not known", alias)
            raise UnknownAliasError(alias)
        return CommandAssociation(registered, filter)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def iter_user(self) -> Iterator[CommandAssociation]:
        """Iterate over user associations in registration order."""
        return iter(tuple(self._user))

    def iter_system(self) -> Iterator[CommandAssociation]:
        """Iterate over system associations in registration order."""
        return iter(tuple(self._system))

    @property
    def user_count(self) -> int:
        return len(self._user)

    @property
    def system_count(self) -> int:
        return len(self._system)

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------

    @property
    def modified(self) -> bool:
        """Whether the user sequence holds changes that were not saved."""
        return self._modified

    def mark_modified(self) -> None:
        self._modified = True

    def clear_modified(self) -> None:
        self._modified = False

    def __repr__(self) -> str:
        return (
            f"AssociationRegistry(user={len(self._user)}, "
            f"system={len(self._system)}, modified={self._modified})"
        )
