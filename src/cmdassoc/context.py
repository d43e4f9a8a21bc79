"""One place that wires the registries, resolver and persistence together.

Each ``CommandContext`` owns its own registries, so several can coexist
in a process (tests use a fresh one each).

Example
-------
::

    from cmdassoc import CommandContext
    from cmdassoc.filters import NameMaskFilter

    context = CommandContext.create()
    context.add_command("view", "less $f")
    context.associate("view", NameMaskFilter("*.log"))
    command = context.resolve_path("server.log", allow_executable_fallback=True)
    context.save()
"""
from __future__ import annotations

import os
from pathlib import Path

from cmdassoc.associations.registry import AssociationRegistry, CommandAssociation
from cmdassoc.command.model import Command, CommandType
from cmdassoc.command.registry import CommandRegistry
from cmdassoc.filters.nodes import FileFilter, FileSnapshot
from cmdassoc.persistence.engine import PersistenceEngine
from cmdassoc.platform.bootstrap import register_platform_defaults
from cmdassoc.platform.preferences import preferences_dir
from cmdassoc.resolver.resolver import Resolver
from cmdassoc.shutdown import ShutdownHook


class CommandContext:
    """Registries, resolver and persistence engine for one application.

    Parameters
    ----------
    prefs_dir:
        Directory holding the stores.  Defaults to the platform
        preferences directory, resolved lazily.
    """

    def __init__(self, prefs_dir: str | os.PathLike[str] | None = None) -> None:
        self._prefs_dir = Path(prefs_dir) if prefs_dir is not None else None
        self.commands = CommandRegistry()
        self.associations = AssociationRegistry(self.commands)
        self.resolver = Resolver(self.commands, self.associations)
        self.persistence = PersistenceEngine(self.commands, self.associations, self._preferences)
        self._shutdown_hook: ShutdownHook | None = None

    @classmethod
    def create(
        cls,
        prefs_dir: str | os.PathLike[str] | None = None,
        *,
        bootstrap: bool = True,
        load: bool = True,
        platform: str | None = None,
    ) -> "CommandContext":
        """Build a ready-to-use context.

        Parameters
        ----------
        prefs_dir:
            Directory holding the stores.
        bootstrap:
            Register the platform's system commands and associations.
        load:
            Load the user's stores from disk.
        platform:
            ``sys.platform`` value used by bootstrap.
        """
        context = cls(prefs_dir)
        if bootstrap:
            register_platform_defaults(context.associations, platform)
        if load:
            context.persistence.load()
        return context

    def _preferences(self) -> Path:
        return preferences_dir(self._prefs_dir)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_command(
        self,
        alias: str,
        template: str,
        display_name: str | None = None,
        kind: CommandType = CommandType.OTHER,
    ) -> Command:
        """Register a user command and return it."""
        command = Command(alias, template, kind, display_name)
        self.commands.register(command)
        return command

    def associate(self, alias: str, filter: FileFilter) -> CommandAssociation:  # noqa: A002
        """Append a user association routing ``filter`` matches to ``alias``."""
        return self.associations.register_user(alias, filter)

    # ------------------------------------------------------------------
    # Resolution and persistence
    # ------------------------------------------------------------------

    def resolve(self, file: FileSnapshot, allow_executable_fallback: bool = False) -> Command | None:
        return self.resolver.resolve(file, allow_executable_fallback)

    def resolve_path(
        self, path: str | os.PathLike[str], allow_executable_fallback: bool = False
    ) -> Command | None:
        return self.resolver.resolve_path(path, allow_executable_fallback)

    def save(self) -> tuple[bool, bool]:
        """Save whichever stores were modified."""
        return self.persistence.save()

    def shutdown_hook(self) -> ShutdownHook:
        """Return the hook that saves this context at exit, creating it once.

        Call ``install()`` on it to save automatically when the interpreter
        exits.
        """
        if self._shutdown_hook is None:
            self._shutdown_hook = ShutdownHook(self.persistence)
        return self._shutdown_hook

    def __repr__(self) -> str:
        return f"CommandContext(commands={len(self.commands)}, associations={self.associations!r})"
