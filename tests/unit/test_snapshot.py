"""Unit tests for cmdassoc.filters.snapshot — reading attributes of real paths."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from cmdassoc.filters.snapshot import snapshot


class TestSnapshot:
    def test_plain_file(self, tmp_path: Path) -> None:
        target = tmp_path / "report.pdf"
        target.write_bytes(b"%PDF")
        snap = snapshot(target)
        assert snap.name == "report.pdf"
        assert not snap.hidden
        assert not snap.symlink
        assert snap.readable

    def test_dot_file_is_hidden(self, tmp_path: Path) -> None:
        target = tmp_path / ".bashrc"
        target.write_text("", encoding="utf-8")
        assert snapshot(target).hidden

    def test_accepts_string_paths(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("", encoding="utf-8")
        assert snapshot(str(target)).name == "a.txt"

    def test_missing_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            snapshot(tmp_path / "missing")

    def test_directory_is_not_executable(self, tmp_path: Path) -> None:
        assert not snapshot(tmp_path).executable

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_executable_bit(self, tmp_path: Path) -> None:
        target = tmp_path / "run.sh"
        target.write_text("#!/bin/sh\n", encoding="utf-8")
        target.chmod(0o755)
        assert snapshot(target).executable
        target.chmod(0o644)
        assert not snapshot(target).executable

    @pytest.mark.skipif(not hasattr(os, "symlink") or sys.platform == "win32", reason="symlinks")
    def test_symlink(self, tmp_path: Path) -> None:
        target = tmp_path / "real.txt"
        target.write_text("", encoding="utf-8")
        link = tmp_path / "link.txt"
        link.symlink_to(target)
        assert snapshot(link).symlink
        assert not snapshot(target).symlink
