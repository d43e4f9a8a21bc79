"""Flattening of filter trees into declarative instructions, and back.

Stores describe a filter as a flat, ordered list of instructions, one per
leaf: a hidden or symlink toggle, a read/write/execute requirement, or a
name mask.  The flat form can only express a single-level AND, so
composite filters are expanded depth-first.  Because composites always
AND their children, flattening nested composites keeps the set of
accepted files unchanged; only the nesting itself is lost.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from cmdassoc.errors import FormatError
from cmdassoc.filters.nodes import (
    AttributeFilter,
    CompositeFilter,
    FileAttribute,
    FileFilter,
    FilePermission,
    NameMaskFilter,
    PermissionFilter,
)

logger = logging.getLogger(__name__)


class InstructionKind(Enum):
    """The kinds of instruction a flat filter is made of."""

    HIDDEN = "hidden"
    SYMLINK = "symlink"
    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"
    NAME_MASK = "name_mask"


_ATTRIBUTE_KINDS = {
    FileAttribute.HIDDEN: InstructionKind.HIDDEN,
    FileAttribute.SYMLINK: InstructionKind.SYMLINK,
}
_PERMISSION_KINDS = {
    FilePermission.READ: InstructionKind.READ,
    FilePermission.WRITE: InstructionKind.WRITE,
    FilePermission.EXECUTE: InstructionKind.EXECUTE,
}
_KIND_ATTRIBUTES = {kind: attribute for attribute, kind in _ATTRIBUTE_KINDS.items()}
_KIND_PERMISSIONS = {kind: permission for permission, kind in _PERMISSION_KINDS.items()}


@dataclass(frozen=True, slots=True)
class FilterInstruction:
    """One flat filter step.

    Parameters
    ----------
    kind:
        What the instruction tests.
    value:
        Polarity of toggle and permission instructions: ``True`` means the
        file must be hidden / a symlink / hold the permission.
    pattern:
        The name mask of a ``NAME_MASK`` instruction.
    case_sensitive:
        Case sensitivity of a ``NAME_MASK`` instruction.
    regex:
        Whether a ``NAME_MASK`` pattern is a regular expression.
    """

    kind: InstructionKind
    value: bool | None = None
    pattern: str | None = None
    case_sensitive: bool = False
    regex: bool = False

    @classmethod
    def mask(cls, pattern: str, case_sensitive: bool = False, regex: bool = False) -> "FilterInstruction":
        return cls(InstructionKind.NAME_MASK, pattern=pattern, case_sensitive=case_sensitive, regex=regex)

    @classmethod
    def toggle(cls, kind: InstructionKind, value: bool) -> "FilterInstruction":
        return cls(kind, value=value)


# ---------------------------------------------------------------------------
# Decomposition (tree -> instructions)
# ---------------------------------------------------------------------------


def decompose(filter: FileFilter) -> list[FilterInstruction]:  # noqa: A002
    """Return the flat instruction list equivalent to ``filter``.

    Raises
    ------
    FormatError
        If the tree contains a filter type that has no flat representation.
    """
    instructions: list[FilterInstruction] = []
    _decompose_into(filter, instructions, depth=0)
    return instructions


def _decompose_into(node: FileFilter, out: list[FilterInstruction], depth: int) -> None:
    if isinstance(node, CompositeFilter):
        if depth > 0:
            logger.debug("Flattening nested composite filter at depth %d", depth)
        for child in node.children:
            _decompose_into(child, out, depth + 1)
    else:
        out.append(_leaf_instruction(node))


def _leaf_instruction(node: FileFilter) -> FilterInstruction:
    if isinstance(node, AttributeFilter):
        return FilterInstruction.toggle(_ATTRIBUTE_KINDS[node.attribute], not node.inverted)
    if isinstance(node, PermissionFilter):
        return FilterInstruction.toggle(_PERMISSION_KINDS[node.permission], node.required)
    if isinstance(node, NameMaskFilter):
        return FilterInstruction.mask(node.pattern, node.case_sensitive, node.regex)
    raise FormatError(f"Filter {node!r} cannot be represented as a flat instruction")


# ---------------------------------------------------------------------------
# Construction (instructions -> tree)
# ---------------------------------------------------------------------------


def build_filter(instructions: Iterable[FilterInstruction]) -> FileFilter:
    """Build the filter described by ``instructions``.

    No instruction yields an empty composite (accepts everything), a single
    instruction yields the bare leaf, several yield a composite that keeps
    their order.

    Raises
    ------
    FormatError
        If an instruction is missing its value or pattern, or its mask is
        not a valid pattern.
    """
    leaves = [_leaf_filter(instruction) for instruction in instructions]
    if len(leaves) == 1:
        return leaves[0]
    return CompositeFilter(tuple(leaves))


def _leaf_filter(instruction: FilterInstruction) -> FileFilter:
    kind = instruction.kind
    if kind is InstructionKind.NAME_MASK:
        if not instruction.pattern:
            raise FormatError("Name mask instruction without a pattern")
        try:
            return NameMaskFilter(
                instruction.pattern,
                case_sensitive=instruction.case_sensitive,
                regex=instruction.regex,
            )
        except ValueError as exc:
            raise FormatError(str(exc)) from exc

    if instruction.value is None:
        raise FormatError(f"{kind.value!r} instruction without a value")
    if kind in _KIND_ATTRIBUTES:
        return AttributeFilter(_KIND_ATTRIBUTES[kind], inverted=not instruction.value)
    return PermissionFilter(_KIND_PERMISSIONS[kind], required=instruction.value)
