"""Platform integration: preferences location and system defaults."""
from __future__ import annotations

from cmdassoc.platform.bootstrap import platform_commands, register_platform_defaults
from cmdassoc.platform.preferences import (
    APP_DIR_NAME,
    PREFS_DIR_ENV,
    default_preferences_dir,
    preferences_dir,
)

__all__ = [
    "APP_DIR_NAME",
    "PREFS_DIR_ENV",
    "default_preferences_dir",
    "preferences_dir",
    "platform_commands",
    "register_platform_defaults",
]
