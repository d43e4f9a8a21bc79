"""Persistence of commands and associations across the legacy and current formats."""
from __future__ import annotations

from cmdassoc.persistence.backup import backup_output, backup_path, read_text
from cmdassoc.persistence.engine import (
    DEFAULT_ASSOCIATIONS_FILE_NAME,
    DEFAULT_COMMANDS_FILE_NAME,
    LoadOutcome,
    PersistenceEngine,
    legacy_path,
)

__all__ = [
    "PersistenceEngine",
    "LoadOutcome",
    "DEFAULT_COMMANDS_FILE_NAME",
    "DEFAULT_ASSOCIATIONS_FILE_NAME",
    "legacy_path",
    "backup_output",
    "backup_path",
    "read_text",
]
