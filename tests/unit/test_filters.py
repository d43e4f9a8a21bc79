"""Unit tests for cmdassoc.filters.nodes — leaf and composite filters."""
from __future__ import annotations

import pytest

from cmdassoc.filters.nodes import (
    AttributeFilter,
    CompositeFilter,
    FileAttribute,
    FilePermission,
    FileSnapshot,
    NameMaskFilter,
    PermissionFilter,
)


# ===========================================================================
# AttributeFilter
# ===========================================================================


class TestAttributeFilter:
    def test_hidden_accepts_hidden_file(self) -> None:
        assert AttributeFilter(FileAttribute.HIDDEN).accept(FileSnapshot(".profile", hidden=True))

    def test_hidden_rejects_visible_file(self) -> None:
        assert not AttributeFilter(FileAttribute.HIDDEN).accept(FileSnapshot("profile"))

    def test_inverted_hidden_accepts_visible_file(self) -> None:
        flt = AttributeFilter(FileAttribute.HIDDEN, inverted=True)
        assert flt.accept(FileSnapshot("profile"))
        assert not flt.accept(FileSnapshot(".profile", hidden=True))

    def test_symlink(self) -> None:
        flt = AttributeFilter(FileAttribute.SYMLINK)
        assert flt.accept(FileSnapshot("link", symlink=True))
        assert not flt.accept(FileSnapshot("file"))


# ===========================================================================
# PermissionFilter
# ===========================================================================


class TestPermissionFilter:
    @pytest.mark.parametrize(
        ("permission", "field"),
        [
            (FilePermission.READ, "readable"),
            (FilePermission.WRITE, "writable"),
            (FilePermission.EXECUTE, "executable"),
        ],
    )
    def test_required_permission(self, permission: FilePermission, field: str) -> None:
        flt = PermissionFilter(permission, required=True)
        assert flt.accept(FileSnapshot("f", **{field: True}))
        assert not flt.accept(FileSnapshot("f", **{field: False}))

    def test_permission_required_absent(self) -> None:
        flt = PermissionFilter(FilePermission.WRITE, required=False)
        assert flt.accept(FileSnapshot("f", writable=False))
        assert not flt.accept(FileSnapshot("f", writable=True))


# ===========================================================================
# NameMaskFilter
# ===========================================================================


class TestNameMaskFilter:
    def test_glob_matches_whole_name(self) -> None:
        flt = NameMaskFilter("*.txt")
        assert flt.accept(FileSnapshot("notes.txt"))
        assert not flt.accept(FileSnapshot("notes.txt.bak"))

    def test_case_insensitive_by_default(self) -> None:
        assert NameMaskFilter("*.sh").accept(FileSnapshot("Script.SH"))

    def test_case_sensitive(self) -> None:
        flt = NameMaskFilter("*.sh", case_sensitive=True)
        assert flt.accept(FileSnapshot("script.sh"))
        assert not flt.accept(FileSnapshot("Script.SH"))

    def test_regex(self) -> None:
        flt = NameMaskFilter(r".*\.(jpe?g|png)", regex=True)
        assert flt.accept(FileSnapshot("photo.JPEG"))
        assert not flt.accept(FileSnapshot("photo.gif"))

    def test_regex_must_match_whole_name(self) -> None:
        assert not NameMaskFilter(r"abc", regex=True).accept(FileSnapshot("abcd"))

    def test_invalid_regex_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid name mask"):
            NameMaskFilter("(", regex=True)

    def test_glob_special_characters_are_literal_in_glob(self) -> None:
        assert NameMaskFilter("(draft).txt").accept(FileSnapshot("(draft).txt"))


# ===========================================================================
# CompositeFilter
# ===========================================================================


class TestCompositeFilter:
    def test_empty_accepts_everything(self) -> None:
        assert CompositeFilter().accept(FileSnapshot("anything"))

    def test_ands_children(self) -> None:
        flt = CompositeFilter(
            (NameMaskFilter("*.sh"), PermissionFilter(FilePermission.EXECUTE, required=True))
        )
        assert flt.accept(FileSnapshot("Script.SH", executable=True))
        assert not flt.accept(FileSnapshot("Script.SH", executable=False))
        assert not flt.accept(FileSnapshot("Script.py", executable=True))

    def test_children_list_is_stored_as_tuple(self) -> None:
        flt = CompositeFilter([NameMaskFilter("*.sh")])  # type: ignore[arg-type]
        assert isinstance(flt.children, tuple)

    def test_nested_composites(self) -> None:
        inner = CompositeFilter((AttributeFilter(FileAttribute.HIDDEN, inverted=True),))
        outer = CompositeFilter((NameMaskFilter("*.txt"), inner))
        assert outer.accept(FileSnapshot("a.txt"))
        assert not outer.accept(FileSnapshot(".a.txt", hidden=True))

    def test_composites_are_hashable_and_comparable(self) -> None:
        a = CompositeFilter((NameMaskFilter("*.txt"),))
        b = CompositeFilter((NameMaskFilter("*.txt"),))
        assert a == b
        assert hash(a) == hash(b)
