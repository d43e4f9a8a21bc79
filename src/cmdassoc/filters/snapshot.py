"""Snapshot provider: reads the filterable attributes of a real path."""
from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

from cmdassoc.filters.nodes import FileSnapshot

# Not exposed by the stat module on every platform.
_FILE_ATTRIBUTE_HIDDEN = 0x2


def snapshot(path: str | os.PathLike[str]) -> FileSnapshot:
    """Return a ``FileSnapshot`` describing ``path``.

    Symbolic links are not followed when reading attributes, but the
    permission checks apply to the link target, as ``os.access`` does.

    Raises
    ------
    OSError
        If ``path`` cannot be inspected.
    """
    target = Path(path)
    info = target.lstat()
    return FileSnapshot(
        name=target.name,
        hidden=_is_hidden(target, info),
        symlink=stat.S_ISLNK(info.st_mode),
        readable=os.access(target, os.R_OK),
        writable=os.access(target, os.W_OK),
        executable=os.access(target, os.X_OK) and not target.is_dir(),
    )


def _is_hidden(path: Path, info: os.stat_result) -> bool:
    if path.name.startswith("."):
        return True
    if sys.platform == "win32":
        return bool(getattr(info, "st_file_attributes", 0) & _FILE_ATTRIBUTE_HIDDEN)
    return False
