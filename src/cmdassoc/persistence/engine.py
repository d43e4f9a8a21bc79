"""Loading and saving of the command and association registries.

Each store exists in two formats: the CURRENT YAML format, which is read
and written, and the LEGACY XML format, which is only ever read.  Loading
follows a small state machine::

    CURRENT file present  -> read it                 -> LoadOutcome.CURRENT
    else LEGACY present   -> read it, mark dirty     -> LoadOutcome.MIGRATED
    else                  -> leave the registry as-is -> LoadOutcome.ABSENT

Marking the registry dirty after a legacy read makes the next save emit
the CURRENT format, which completes the one-way migration.  The legacy
file itself is never modified.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Final

from cmdassoc.associations.builder import AssociationBuilder, build_associations
from cmdassoc.associations.registry import AssociationRegistry
from cmdassoc.command.builder import CommandBuilder, build_commands
from cmdassoc.command.model import Command
from cmdassoc.command.registry import CommandRegistry
from cmdassoc.errors import FormatError, InvalidTargetError, UnknownAliasError
from cmdassoc.filters.instructions import FilterInstruction, build_filter
from cmdassoc.persistence.associations_xml import read_legacy_associations
from cmdassoc.persistence.associations_yaml import AssociationsYamlWriter, read_associations
from cmdassoc.persistence.backup import backup_output, read_text
from cmdassoc.persistence.commands_xml import read_legacy_commands
from cmdassoc.persistence.commands_yaml import CommandsYamlWriter, read_commands
from cmdassoc.platform.preferences import preferences_dir

logger = logging.getLogger(__name__)

DEFAULT_COMMANDS_FILE_NAME: Final[str] = "commands.yaml"
DEFAULT_ASSOCIATIONS_FILE_NAME: Final[str] = "associations.yaml"
LEGACY_SUFFIX: Final[str] = ".xml"


class LoadOutcome(Enum):
    """What a load call found on disk."""

    CURRENT = "current"
    MIGRATED = "migrated"
    ABSENT = "absent"


def legacy_path(current: Path) -> Path | None:
    """Return the legacy sibling of a CURRENT store path.

    ``None`` when the current path already carries the legacy suffix, in
    which case there is nothing to migrate from.
    """
    legacy = current.with_suffix(LEGACY_SUFFIX)
    return None if legacy == current else legacy


# ---------------------------------------------------------------------------
# Registry loaders
# ---------------------------------------------------------------------------


class _CommandLoader(CommandBuilder):
    """Registers loaded commands without flagging the registry."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry
        self.count = 0

    def add_command(self, command: Command) -> None:
        self._registry.register(command, track_modification=False)
        self.count += 1


class _AssociationLoader(AssociationBuilder):
    """Registers loaded associations as untracked user associations."""

    def __init__(self, registry: AssociationRegistry, path: Path) -> None:
        self._registry = registry
        self._path = path
        self._alias: str | None = None
        self._instructions: list[FilterInstruction] = []
        self.count = 0

    def start_association(self, alias: str) -> None:
        self._alias = alias
        self._instructions = []

    def add_filter(self, instruction: FilterInstruction) -> None:
        self._instructions.append(instruction)

    def end_association(self) -> None:
        if self._alias is None:
            raise RuntimeError("end_association() called outside an association")
        try:
            filter_ = build_filter(self._instructions)
        except FormatError as exc:
            raise exc.with_path(self._path) from exc
        try:
            self._registry.register_user(self._alias, filter_, track_modification=False)
        except UnknownAliasError as exc:
            raise FormatError(
                f"Association refers to unknown command {exc.alias!r}", self._path
            ) from exc
        self._alias = None
        self.count += 1


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class PersistenceEngine:
    """Reads and writes the commands and associations stores.

    Parameters
    ----------
    commands:
        The command registry to populate and save.
    associations:
        The association registry to populate and save.
    preferences:
        Callable returning the preferences directory.  It is only called
        when a store path has not been overridden.
    """

    def __init__(
        self,
        commands: CommandRegistry,
        associations: AssociationRegistry,
        preferences: Callable[[], Path] = preferences_dir,
    ) -> None:
        self._commands = commands
        self._associations = associations
        self._preferences = preferences
        self._commands_file: Path | None = None
        self._associations_file: Path | None = None

    # ------------------------------------------------------------------
    # Store locations
    # ------------------------------------------------------------------

    @property
    def commands_file(self) -> Path:
        """CURRENT-format commands store."""
        if self._commands_file is None:
            return self._preferences() / DEFAULT_COMMANDS_FILE_NAME
        return self._commands_file

    @property
    def associations_file(self) -> Path:
        """CURRENT-format associations store."""
        if self._associations_file is None:
            return self._preferences() / DEFAULT_ASSOCIATIONS_FILE_NAME
        return self._associations_file

    def set_commands_file(self, path: str | os.PathLike[str] | None) -> None:
        """Override the commands store; ``None`` restores the default.

        Raises
        ------
        InvalidTargetError
            If ``path`` is a directory.
        """
        self._commands_file = self._check_target(path)

    def set_associations_file(self, path: str | os.PathLike[str] | None) -> None:
        """Override the associations store; ``None`` restores the default.

        Raises
        ------
        InvalidTargetError
            If ``path`` is a directory.
        """
        self._associations_file = self._check_target(path)

    @staticmethod
    def _check_target(path: str | os.PathLike[str] | None) -> Path | None:
        if path is None:
            return None
        target = Path(path).expanduser().absolute()
        if target.is_dir():
            raise InvalidTargetError(target)
        return target

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def load_commands(self) -> LoadOutcome:
        """Load the commands store into the command registry.

        Raises
        ------
        FormatError
            If the store is malformed; commands read before the faulty
            record stay registered.
        OSError
            If the store cannot be read.
        """
        current = self.commands_file
        if current.exists():
            logger.debug("Loading custom commands from: %s", current)
            loader = _CommandLoader(self._commands)
            read_commands(read_text(current), loader, current)
            logger.debug("Loaded %d command(s)", loader.count)
            return LoadOutcome.CURRENT

        legacy = legacy_path(current)
        if legacy is None or not legacy.exists():
            logger.debug("No custom commands file found at %s", current)
            return LoadOutcome.ABSENT

        logger.debug("Loading custom commands from: %s", legacy)
        loader = _CommandLoader(self._commands)
        read_legacy_commands(read_text(legacy), loader, legacy)
        # written back in the current format on the next save
        self._commands.mark_modified()
        logger.warning(
            "Migrated %d command(s) from legacy file %s; they will be saved to %s",
            loader.count,
            legacy,
            current,
        )
        return LoadOutcome.MIGRATED

    def save_commands(self) -> bool:
        """Write the command registry if it was modified.

        Returns
        -------
        bool
            ``True`` if the store was written.

        Raises
        ------
        OSError
            If the store cannot be written.  The registry stays modified.
        """
        if not self._commands.modified:
            logger.debug("Custom commands not modified, skip saving.")
            return False

        target = self.commands_file
        logger.debug("Writing custom commands to file: %s", target)
        with backup_output(target) as stream:
            build_commands(self._commands, CommandsYamlWriter(stream))
        self._commands.clear_modified()
        return True

    # ------------------------------------------------------------------
    # Associations
    # ------------------------------------------------------------------

    def load_associations(self) -> LoadOutcome:
        """Load the associations store as user associations.

        Raises
        ------
        FormatError
            If the store is malformed or names an unknown command;
            associations read before the faulty record stay registered.
        OSError
            If the store cannot be read.
        """
        current = self.associations_file
        if current.exists():
            logger.debug("Loading associations from file: %s", current)
            loader = _AssociationLoader(self._associations, current)
            try:
                read_associations(read_text(current), loader, current)
            finally:
                self._associations.clear_modified()
            logger.debug("Loaded %d association(s)", loader.count)
            return LoadOutcome.CURRENT

        legacy = legacy_path(current)
        if legacy is None or not legacy.exists():
            logger.debug("No associations file found at %s", current)
            return LoadOutcome.ABSENT

        logger.debug("Loading associations from file: %s", legacy)
        loader = _AssociationLoader(self._associations, legacy)
        read_legacy_associations(read_text(legacy), loader, legacy)
        self._associations.mark_modified()
        logger.warning(
            "Migrated %d association(s) from legacy file %s; they will be saved to %s",
            loader.count,
            legacy,
            current,
        )
        return LoadOutcome.MIGRATED

    def save_associations(self) -> bool:
        """Write the user associations if they were modified.

        Returns
        -------
        bool
            ``True`` if the store was written.

        Raises
        ------
        FormatError
            If an association filter cannot be flattened.
        OSError
            If the store cannot be written.  The registry stays modified.
        """
        if not self._associations.modified:
            logger.debug("Custom file associations not modified, skip saving.")
            return False

        target = self.associations_file
        logger.debug("Writing associations to file: %s", target)
        with backup_output(target) as stream:
            build_associations(self._associations, AssociationsYamlWriter(stream))
        self._associations.clear_modified()
        return True

    # ------------------------------------------------------------------
    # Both stores
    # ------------------------------------------------------------------

    def load(self) -> tuple[LoadOutcome, LoadOutcome]:
        """Load commands, then associations (which need the commands)."""
        return self.load_commands(), self.load_associations()

    def save(self) -> tuple[bool, bool]:
        """Save commands, then associations."""
        return self.save_commands(), self.save_associations()
