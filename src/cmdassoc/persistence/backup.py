"""Backup-safe reading and writing of store files.

Writes go to a temporary file next to the target.  Only once the new
content is complete and flushed to disk is the previous file copied to
``<name>.bak`` and the temporary file moved over the target with
``os.replace``.  An interrupted or failing write leaves the previous file
untouched.
"""
from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Final, TextIO

from cmdassoc.errors import FormatError

logger = logging.getLogger(__name__)

BACKUP_SUFFIX: Final[str] = ".bak"
ENCODING: Final[str] = "utf-8"


def backup_path(path: Path) -> Path:
    """Return where the previous version of ``path`` is kept."""
    return path.with_name(path.name + BACKUP_SUFFIX)


@contextlib.contextmanager
def backup_output(path: str | os.PathLike[str]) -> Iterator[TextIO]:
    """Open ``path`` for a backup-safe text write.

    Usage::

        with backup_output(store) as stream:
            stream.write(text)

    The target is only replaced when the ``with`` block exits normally.

    Raises
    ------
    OSError
        If the temporary file cannot be written or moved into place.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=ENCODING, newline="\n") as stream:
            yield stream
            stream.flush()
            os.fsync(stream.fileno())
        if target.exists():
            shutil.copy2(target, backup_path(target))
        os.replace(temp_name, target)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.remove(temp_name)
        raise
    logger.debug("Wrote %s", target)


def read_text(path: str | os.PathLike[str]) -> str:
    """Read a store file written by ``backup_output``.

    Raises
    ------
    FormatError
        If the file is not valid UTF-8.
    FileNotFoundError
        If ``path`` does not exist.
    OSError
        If ``path`` cannot be read.
    """
    try:
        return Path(path).read_text(encoding=ENCODING)
    except UnicodeDecodeError as exc:
        raise FormatError(f"Invalid UTF-8: {exc}", path) from exc
