"""File filter tree and the file snapshot it is evaluated against.

Every filter is a frozen dataclass with an ``accept`` method.  Leaves test
a single property of a ``FileSnapshot``; ``CompositeFilter`` ANDs its
children.  There is no OR or NOT node: negation lives in the per-leaf
``inverted`` / ``required`` flags.
"""
from __future__ import annotations

import fnmatch
import functools
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

# ---------------------------------------------------------------------------
# File snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileSnapshot:
    """The attributes of a file that filters can inspect.

    Parameters
    ----------
    name:
        Base name of the file, without any directory part.
    hidden:
        Whether the file is hidden on its platform.
    symlink:
        Whether the path is a symbolic link.
    readable, writable, executable:
        Whether the current user holds the matching permission.
    """

    name: str
    hidden: bool = False
    symlink: bool = False
    readable: bool = True
    writable: bool = True
    executable: bool = False


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FileAttribute(Enum):
    """Boolean attributes an ``AttributeFilter`` can test."""

    HIDDEN = auto()
    SYMLINK = auto()


class FilePermission(Enum):
    """Permissions a ``PermissionFilter`` can test."""

    READ = auto()
    WRITE = auto()
    EXECUTE = auto()


_ATTRIBUTE_FIELDS = {
    FileAttribute.HIDDEN: "hidden",
    FileAttribute.SYMLINK: "symlink",
}

_PERMISSION_FIELDS = {
    FilePermission.READ: "readable",
    FilePermission.WRITE: "writable",
    FilePermission.EXECUTE: "executable",
}


# ---------------------------------------------------------------------------
# Leaf filters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AttributeFilter:
    """Accepts files whose attribute is set, or unset when ``inverted``."""

    attribute: FileAttribute
    inverted: bool = False

    def accept(self, file: FileSnapshot) -> bool:
        value = getattr(file, _ATTRIBUTE_FIELDS[self.attribute])
        return value != self.inverted


@dataclass(frozen=True, slots=True)
class PermissionFilter:
    """Accepts files whose permission bit equals ``required``."""

    permission: FilePermission
    required: bool = True

    def accept(self, file: FileSnapshot) -> bool:
        return getattr(file, _PERMISSION_FIELDS[self.permission]) == self.required


@functools.lru_cache(maxsize=256)
def compile_mask(pattern: str, case_sensitive: bool, regex: bool) -> re.Pattern[str]:
    """Compile a name mask to an anchored regular expression.

    Glob masks go through ``fnmatch.translate``, which already anchors the
    expression; regular expressions must match the whole name.

    Raises
    ------
    ValueError
        If ``pattern`` is not a valid regular expression.
    """
    source = pattern if regex else fnmatch.translate(pattern)
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(source, flags)
    except re.error as exc:
        raise ValueError(f"Invalid name mask {pattern!r}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class NameMaskFilter:
    """Accepts files whose whole name matches ``pattern``.

    Parameters
    ----------
    pattern:
        A shell glob such as ``*.txt``, or a regular expression when
        ``regex`` is true.
    case_sensitive:
        Whether letter case must match.
    regex:
        Interpret ``pattern`` as a regular expression.
    """

    pattern: str
    case_sensitive: bool = False
    regex: bool = False

    def __post_init__(self) -> None:
        compile_mask(self.pattern, self.case_sensitive, self.regex)

    def accept(self, file: FileSnapshot) -> bool:
        mask = compile_mask(self.pattern, self.case_sensitive, self.regex)
        return mask.fullmatch(file.name) is not None


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CompositeFilter:
    """Logical AND of ``children``; an empty composite accepts every file."""

    children: tuple["FileFilter", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def accept(self, file: FileSnapshot) -> bool:
        return all(child.accept(file) for child in self.children)


FileFilter = Union[AttributeFilter, PermissionFilter, NameMaskFilter, CompositeFilter]

LEAF_FILTER_TYPES: tuple[type, ...] = (AttributeFilter, PermissionFilter, NameMaskFilter)
