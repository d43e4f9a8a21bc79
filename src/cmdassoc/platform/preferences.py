"""Location of the per-user preferences directory."""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "cmdassoc"
PREFS_DIR_ENV: Final[str] = "CMDASSOC_PREFS_DIR"


def default_preferences_dir(platform: str | None = None) -> Path:
    """Return the platform's preferences directory for this application.

    ``CMDASSOC_PREFS_DIR`` overrides the platform default.  The directory
    is not created.
    """
    override = os.environ.get(PREFS_DIR_ENV)
    if override and override.strip():
        return Path(override).expanduser()

    platform = platform or sys.platform
    if platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / APP_DIR_NAME
    if platform == "darwin":
        return Path.home() / "Library" / "Preferences" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and xdg.strip():
        return Path(xdg).expanduser() / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def preferences_dir(explicit: str | os.PathLike[str] | None = None) -> Path:
    """Return the preferences directory, creating it when missing.

    Parameters
    ----------
    explicit:
        Directory to use instead of the default.

    Raises
    ------
    OSError
        If the directory cannot be created.
    """
    directory = Path(explicit).expanduser() if explicit is not None else default_preferences_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory
