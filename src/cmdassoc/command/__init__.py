"""Command value type, command registry and command builder protocol."""
from __future__ import annotations

from cmdassoc.command.builder import CommandBuilder, build_commands
from cmdassoc.command.model import (
    CMD_OPENER_ALIAS,
    EDITOR_ALIAS,
    EXE_OPENER_ALIAS,
    FILE_MANAGER_ALIAS,
    FILE_OPENER_ALIAS,
    RUN_AS_EXECUTABLE_ALIAS,
    RUN_AS_EXECUTABLE_COMMAND,
    URL_OPENER_ALIAS,
    VIEWER_ALIAS,
    Command,
    CommandType,
)
from cmdassoc.command.registry import CommandRegistry

__all__ = [
    # Model
    "Command",
    "CommandType",
    # Aliases
    "FILE_OPENER_ALIAS",
    "URL_OPENER_ALIAS",
    "FILE_MANAGER_ALIAS",
    "EXE_OPENER_ALIAS",
    "VIEWER_ALIAS",
    "EDITOR_ALIAS",
    "CMD_OPENER_ALIAS",
    "RUN_AS_EXECUTABLE_ALIAS",
    "RUN_AS_EXECUTABLE_COMMAND",
    # Registry and builder
    "CommandRegistry",
    "CommandBuilder",
    "build_commands",
]
