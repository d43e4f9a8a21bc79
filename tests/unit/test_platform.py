"""Unit tests for cmdassoc.platform — preferences directory and bootstrap."""
from __future__ import annotations

from pathlib import Path

import pytest

from cmdassoc.associations import AssociationRegistry
from cmdassoc.command import (
    EXE_OPENER_ALIAS,
    FILE_MANAGER_ALIAS,
    FILE_OPENER_ALIAS,
    CommandRegistry,
    CommandType,
)
from cmdassoc.filters import FileSnapshot
from cmdassoc.platform import (
    APP_DIR_NAME,
    PREFS_DIR_ENV,
    default_preferences_dir,
    platform_commands,
    preferences_dir,
    register_platform_defaults,
)

# ===========================================================================
# Preferences directory
# ===========================================================================


class TestPreferencesDir:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (PREFS_DIR_ENV, "XDG_CONFIG_HOME", "APPDATA"):
            monkeypatch.delenv(name, raising=False)

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(PREFS_DIR_ENV, str(tmp_path / "custom"))
        assert default_preferences_dir("linux") == tmp_path / "custom"

    def test_blank_override_is_ignored(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(PREFS_DIR_ENV, "  ")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_preferences_dir("linux") == tmp_path / APP_DIR_NAME

    def test_linux_without_xdg(self) -> None:
        assert default_preferences_dir("linux") == Path.home() / ".config" / APP_DIR_NAME

    def test_macos(self) -> None:
        assert default_preferences_dir("darwin") == Path.home() / "Library" / "Preferences" / APP_DIR_NAME

    def test_windows_appdata(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("APPDATA", str(tmp_path))
        assert default_preferences_dir("win32") == tmp_path / APP_DIR_NAME

    def test_explicit_directory_is_created(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        assert preferences_dir(target) == target
        assert target.is_dir()


# ===========================================================================
# Bootstrap
# ===========================================================================


class TestPlatformCommands:
    @pytest.mark.parametrize("platform", ["linux", "darwin", "win32", "freebsd13"])
    def test_every_platform_has_an_opener(self, platform: str) -> None:
        commands = {c.alias: c for c in platform_commands(platform)}
        assert FILE_OPENER_ALIAS in commands
        assert all(c.kind is CommandType.SYSTEM for c in commands.values())

    def test_file_manager_display_names(self) -> None:
        names = {
            platform: next(c for c in platform_commands(platform) if c.alias == FILE_MANAGER_ALIAS).display_name
            for platform in ("linux", "darwin", "win32")
        }
        assert names == {"linux": "File Manager", "darwin": "Finder", "win32": "Explorer"}

    def test_unknown_platform_uses_linux_templates(self) -> None:
        assert platform_commands("freebsd13") == platform_commands("linux")


class TestRegisterPlatformDefaults:
    def test_registration_is_untracked(
        self, commands: CommandRegistry, associations: AssociationRegistry
    ) -> None:
        register_platform_defaults(associations, "linux")
        assert not commands.modified
        assert not associations.modified
        assert commands.default_command is commands.get(FILE_OPENER_ALIAS)
        assert associations.system_count == 0

    def test_windows_executables(self, associations: AssociationRegistry) -> None:
        register_platform_defaults(associations, "win32")
        (association,) = associations.iter_system()
        assert association.command.alias == EXE_OPENER_ALIAS
        assert association.accept(FileSnapshot("setup.EXE"))
        assert association.accept(FileSnapshot("build.bat"))
        assert not association.accept(FileSnapshot("notes.txt"))

    def test_macos_applications(self, associations: AssociationRegistry) -> None:
        register_platform_defaults(associations, "darwin")
        (association,) = associations.iter_system()
        assert association.command.alias == FILE_OPENER_ALIAS
        assert association.accept(FileSnapshot("Safari.app"))
