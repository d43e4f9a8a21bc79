"""File filter model, snapshot provider and flat instruction codec."""
from __future__ import annotations

from cmdassoc.filters.instructions import (
    FilterInstruction,
    InstructionKind,
    build_filter,
    decompose,
)
from cmdassoc.filters.nodes import (
    AttributeFilter,
    CompositeFilter,
    FileAttribute,
    FileFilter,
    FilePermission,
    FileSnapshot,
    NameMaskFilter,
    PermissionFilter,
)
from cmdassoc.filters.snapshot import snapshot

__all__ = [
    # Model
    "FileSnapshot",
    "FileAttribute",
    "FilePermission",
    "FileFilter",
    "AttributeFilter",
    "PermissionFilter",
    "NameMaskFilter",
    "CompositeFilter",
    # Snapshot provider
    "snapshot",
    # Instructions
    "InstructionKind",
    "FilterInstruction",
    "decompose",
    "build_filter",
]
