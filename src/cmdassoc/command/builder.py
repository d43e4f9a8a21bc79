"""Builder protocol used to stream the command list to a writer."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdassoc.command.model import Command
    from cmdassoc.command.registry import CommandRegistry


class CommandBuilder(ABC):
    """Receives commands one at a time between ``start_building`` and ``end_building``."""

    def start_building(self) -> None:
        """Called once before the first command."""

    def end_building(self) -> None:
        """Called once after the last command, even if the traversal failed."""

    @abstractmethod
    def add_command(self, command: "Command") -> None:
        """Receive the next command."""


@contextmanager
def building(builder: CommandBuilder) -> Iterator[CommandBuilder]:
    """Bracket a traversal with ``start_building`` / ``end_building``."""
    builder.start_building()
    try:
        yield builder
    finally:
        builder.end_building()


def build_commands(registry: "CommandRegistry", builder: CommandBuilder) -> None:
    """Pass every registered command to ``builder``, in alias order.

    ``builder.end_building()`` is called even when an error interrupts the
    traversal; in that case not every command has been passed on.
    """
    with building(builder):
        for command in registry.list_commands():
            builder.add_command(command)
