"""Platform-specific system commands and associations.

Everything registered here is untracked: system commands are written to
the commands file only alongside user changes, and system associations
are never persisted.
"""
from __future__ import annotations

import logging
import sys
from typing import Final

from cmdassoc.associations.registry import AssociationRegistry
from cmdassoc.command.model import (
    CMD_OPENER_ALIAS,
    EXE_OPENER_ALIAS,
    FILE_MANAGER_ALIAS,
    FILE_OPENER_ALIAS,
    URL_OPENER_ALIAS,
    Command,
    CommandType,
)
from cmdassoc.filters.nodes import NameMaskFilter

logger = logging.getLogger(__name__)

_LINUX_COMMANDS: Final[dict[str, str]] = {
    FILE_OPENER_ALIAS: "xdg-open $f",
    URL_OPENER_ALIAS: "xdg-open $f",
    FILE_MANAGER_ALIAS: "xdg-open $p",
    CMD_OPENER_ALIAS: "x-terminal-emulator",
}

_MACOS_COMMANDS: Final[dict[str, str]] = {
    FILE_OPENER_ALIAS: "open $f",
    URL_OPENER_ALIAS: "open $f",
    FILE_MANAGER_ALIAS: "open -a Finder $p",
    EXE_OPENER_ALIAS: "open -a $f",
    CMD_OPENER_ALIAS: "open -a Terminal .",
}

_WINDOWS_COMMANDS: Final[dict[str, str]] = {
    FILE_OPENER_ALIAS: 'cmd /c start "" "$f"',
    URL_OPENER_ALIAS: 'cmd /c start "" "$f"',
    FILE_MANAGER_ALIAS: 'explorer /select,"$f"',
    EXE_OPENER_ALIAS: '"$f"',
    CMD_OPENER_ALIAS: "cmd /c start cmd.exe",
}

_FILE_MANAGER_NAMES: Final[dict[str, str]] = {
    "linux": "File Manager",
    "darwin": "Finder",
    "win32": "Explorer",
}


def platform_commands(platform: str | None = None) -> list[Command]:
    """Return the system commands known for ``platform``.

    Unknown platforms are treated like Linux, which covers most
    freedesktop-compliant systems.
    """
    platform = platform or sys.platform
    if platform == "win32":
        templates = _WINDOWS_COMMANDS
    elif platform == "darwin":
        templates = _MACOS_COMMANDS
    else:
        templates = _LINUX_COMMANDS

    file_manager = _FILE_MANAGER_NAMES.get(platform, _FILE_MANAGER_NAMES["linux"])
    return [
        Command(
            alias,
            template,
            CommandType.SYSTEM,
            file_manager if alias == FILE_MANAGER_ALIAS else None,
        )
        for alias, template in templates.items()
    ]


def register_platform_defaults(
    associations: AssociationRegistry, platform: str | None = None
) -> None:
    """Register the system commands and associations of ``platform``.

    Parameters
    ----------
    associations:
        Association registry; its command registry receives the commands.
    platform:
        A ``sys.platform`` value; defaults to the running platform.
    """
    platform = platform or sys.platform
    commands = associations.commands
    system_commands = platform_commands(platform)
    for command in system_commands:
        commands.register(command, track_modification=False)

    if platform == "win32":
        associations.register_system(
            EXE_OPENER_ALIAS, NameMaskFilter(r".*\.(exe|bat|com|cmd)", regex=True)
        )
    elif platform == "darwin":
        associations.register_system(FILE_OPENER_ALIAS, NameMaskFilter("*.app"))

    logger.debug(
        "Registered %d system command(s) and %d system association(s) for %s",
        len(system_commands),
        associations.system_count,
        platform,
    )
