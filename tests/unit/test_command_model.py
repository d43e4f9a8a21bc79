"""Unit tests for cmdassoc.command.model — Command, CommandType and aliases."""
from __future__ import annotations

import pytest

from cmdassoc.command.model import (
    FILE_OPENER_ALIAS,
    RUN_AS_EXECUTABLE_ALIAS,
    RUN_AS_EXECUTABLE_COMMAND,
    Command,
    CommandType,
)


# ===========================================================================
# CommandType
# ===========================================================================


class TestCommandTypeParse:
    def test_none_is_other(self) -> None:
        assert CommandType.parse(None) is CommandType.OTHER

    def test_system(self) -> None:
        assert CommandType.parse("system") is CommandType.SYSTEM

    def test_case_and_whitespace_insensitive(self) -> None:
        assert CommandType.parse("  SYSTEM ") is CommandType.SYSTEM

    @pytest.mark.parametrize("legacy", ["normal", "invisible", "Normal"])
    def test_legacy_spellings_map_to_other(self, legacy: str) -> None:
        assert CommandType.parse(legacy) is CommandType.OTHER

    def test_unknown_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown command type"):
            CommandType.parse("daemon")

    @pytest.mark.parametrize("value", [5, True, ["system"]])
    def test_non_string_raises_value_error(self, value: object) -> None:
        with pytest.raises(ValueError, match="must be a string"):
            CommandType.parse(value)


# ===========================================================================
# Command
# ===========================================================================


class TestCommand:
    def test_defaults(self) -> None:
        command = Command("edit", "vim $f")
        assert command.kind is CommandType.OTHER
        assert command.display_name is None

    def test_frozen(self) -> None:
        command = Command("edit", "vim $f")
        with pytest.raises((AttributeError, TypeError)):
            command.alias = "view"  # type: ignore[misc]

    def test_equality_uses_every_field(self) -> None:
        assert Command("edit", "vim $f") == Command("edit", "vim $f")
        assert Command("edit", "vim $f") != Command("edit", "nano $f")
        assert Command("edit", "vim $f") != Command("edit", "vim $f", CommandType.SYSTEM)
        assert Command("edit", "vim $f") != Command("edit", "vim $f", display_name="Vim")

    def test_hashable(self) -> None:
        assert len({Command("edit", "vim $f"), Command("edit", "vim $f")}) == 1

    def test_sorted_by_alias(self) -> None:
        commands = [Command("view", "less $f"), Command("edit", "vim $f"), Command("open", "xdg-open $f")]
        assert [c.alias for c in sorted(commands)] == ["edit", "open", "view"]

    def test_natural_string_order_is_case_sensitive(self) -> None:
        commands = [Command("open", "a"), Command("openURL", "b"), Command("Zed", "c")]
        assert [c.alias for c in sorted(commands)] == ["Zed", "open", "openURL"]

    def test_label_prefers_display_name(self) -> None:
        assert Command("edit", "vim $f", display_name="Vim").label == "Vim"
        assert Command("edit", "vim $f").label == "edit"

    @pytest.mark.parametrize("alias", ["", "   "])
    def test_empty_alias_rejected(self, alias: str) -> None:
        with pytest.raises(ValueError, match="alias"):
            Command(alias, "vim $f")

    def test_empty_template_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty template"):
            Command("edit", "")

    def test_lt_with_other_type_is_not_implemented(self) -> None:
        with pytest.raises(TypeError):
            _ = Command("edit", "vim $f") < "edit"  # type: ignore[operator]


class TestBuiltins:
    def test_file_opener_alias(self) -> None:
        assert FILE_OPENER_ALIAS == "open"

    def test_run_as_executable_command(self) -> None:
        assert RUN_AS_EXECUTABLE_COMMAND.alias == RUN_AS_EXECUTABLE_ALIAS == "execute"
        assert RUN_AS_EXECUTABLE_COMMAND.template == "$f"
        assert RUN_AS_EXECUTABLE_COMMAND.is_system
