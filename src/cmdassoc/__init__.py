"""cmdassoc — decide which command line opens a file, and remember the user's choices.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import cmdassoc
    from cmdassoc.filters import NameMaskFilter

    # Registries for this process, bootstrapped and loaded from disk
    context = cmdassoc.open_context()

    # A custom command and the rule that routes files to it
    context.add_command("view", "less $f", display_name="Pager")
    context.associate("view", NameMaskFilter("*.log"))

    # Which command opens this file?
    command = context.resolve_path("server.log", allow_executable_fallback=True)

    # Persist whatever changed
    context.save()

    cmdassoc.__version__
    '0.1.0'
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING

from cmdassoc.context import CommandContext
from cmdassoc.errors import (
    CommandError,
    DuplicateAliasError,
    FormatError,
    InvalidTargetError,
    UnknownAliasError,
)
from cmdassoc.shutdown import ShutdownHook

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from cmdassoc.filters.nodes import FileSnapshot


def open_context(
    prefs_dir: str | os.PathLike[str] | None = None,
    *,
    bootstrap: bool = True,
    load: bool = True,
) -> CommandContext:
    """Create a ``CommandContext`` with platform defaults and the user's stores.

    Parameters
    ----------
    prefs_dir:
        Directory holding the stores; defaults to the platform preferences
        directory.
    bootstrap:
        Register the platform's system commands and associations.
    load:
        Load the commands and associations stores.

    Raises
    ------
    FormatError
        If a store is malformed.
    OSError
        If a store cannot be read.
    """
    return CommandContext.create(prefs_dir, bootstrap=bootstrap, load=load)


def snapshot(path: str | os.PathLike[str]) -> "FileSnapshot":
    """Return the filterable attributes of ``path``."""
    from cmdassoc.filters.snapshot import snapshot as _snapshot

    return _snapshot(path)


__all__ = [
    "__version__",
    "open_context",
    "snapshot",
    "CommandContext",
    "ShutdownHook",
    # Errors
    "CommandError",
    "DuplicateAliasError",
    "UnknownAliasError",
    "InvalidTargetError",
    "FormatError",
]
