"""Association registry and association builder protocol."""
from __future__ import annotations

from cmdassoc.associations.builder import AssociationBuilder, build_associations
from cmdassoc.associations.registry import AssociationRegistry, CommandAssociation

__all__ = [
    "CommandAssociation",
    "AssociationRegistry",
    "AssociationBuilder",
    "build_associations",
]
