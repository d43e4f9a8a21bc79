"""Builder protocol used to stream user associations to a writer."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from cmdassoc.filters.instructions import FilterInstruction, decompose

if TYPE_CHECKING:
    from cmdassoc.associations.registry import AssociationRegistry


class AssociationBuilder(ABC):
    """Receives associations as alias plus flat filter instructions.

    Calls arrive in this order::

        start_building
            start_association, add_filter*, end_association   (per association)
        end_building
    """

    def start_building(self) -> None:
        """Called once before the first association."""

    def end_building(self) -> None:
        """Called once after the last association, even if the traversal failed."""

    @abstractmethod
    def start_association(self, alias: str) -> None:
        """Open a new association routed to ``alias``."""

    @abstractmethod
    def add_filter(self, instruction: FilterInstruction) -> None:
        """Add one filter instruction to the open association."""

    @abstractmethod
    def end_association(self) -> None:
        """Close the open association."""


@contextmanager
def building(builder: AssociationBuilder) -> Iterator[AssociationBuilder]:
    """Bracket a traversal with ``start_building`` / ``end_building``."""
    builder.start_building()
    try:
        yield builder
    finally:
        builder.end_building()


def build_associations(registry: "AssociationRegistry", builder: AssociationBuilder) -> None:
    """Pass every user association to ``builder``, in registration order.

    ``builder.end_building()`` is called even when an error interrupts the
    traversal; in that case not every association has been passed on.

    Raises
    ------
    FormatError
        If an association filter cannot be flattened.
    """
    with building(builder):
        for association in registry.iter_user():
            instructions = decompose(association.filter)
            builder.start_association(association.command.alias)
            for instruction in instructions:
                builder.add_filter(instruction)
            builder.end_association()
