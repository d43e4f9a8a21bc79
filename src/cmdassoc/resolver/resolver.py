"""Picks the command that opens a file.

Lookup order, first match wins:

1. user associations, in registration order;
2. system associations, in registration order;
3. the default command (adopted from the file-opener alias);
4. the built-in "run as executable" command, if the caller allows it.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from cmdassoc.associations.registry import AssociationRegistry, CommandAssociation
from cmdassoc.command.model import RUN_AS_EXECUTABLE_COMMAND, Command
from cmdassoc.command.registry import CommandRegistry
from cmdassoc.filters.nodes import FileSnapshot
from cmdassoc.filters.snapshot import snapshot

logger = logging.getLogger(__name__)


def _first_match(file: FileSnapshot, associations: Iterator[CommandAssociation]) -> Command | None:
    for association in associations:
        if association.accept(file):
            return association.command
    return None


class Resolver:
    """Resolves files to commands using the given registries."""

    def __init__(self, commands: CommandRegistry, associations: AssociationRegistry) -> None:
        self._commands = commands
        self._associations = associations

    def resolve(self, file: FileSnapshot, allow_executable_fallback: bool = False) -> Command | None:
        """Return the command that must be executed to open ``file``.

        Parameters
        ----------
        file:
            Snapshot of the file to open.
        allow_executable_fallback:
            When nothing else matches, return ``RUN_AS_EXECUTABLE_COMMAND``
            instead of ``None``.

        Returns
        -------
        Command | None
            The matching command, or ``None`` when nothing matched and the
            executable fallback is not allowed.
        """
        command = _first_match(file, self._associations.iter_user())
        if command is not None:
            return command

        command = _first_match(file, self._associations.iter_system())
        if command is not None:
            return command

        default = self._commands.default_command
        if default is not None:
            return default

        if allow_executable_fallback:
            logger.debug("No command for %r, running it as an executable", file.name)
            return RUN_AS_EXECUTABLE_COMMAND
        return None

    def resolve_path(
        self, path: str | os.PathLike[str], allow_executable_fallback: bool = False
    ) -> Command | None:
        """Snapshot ``path`` and resolve it.

        Raises
        ------
        OSError
            If ``path`` cannot be inspected.
        """
        return self.resolve(snapshot(path), allow_executable_fallback)
