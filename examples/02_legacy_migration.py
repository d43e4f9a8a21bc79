#!/usr/bin/env python3
"""Example: Legacy migration — cmdassoc

Stores written by older releases are XML files.  Loading one registers
its content and schedules a save in the current YAML format; the XML file
is left as it was.

Usage:
    python examples/02_legacy_migration.py

Requirements:
    pip install cmdassoc
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import cmdassoc
from cmdassoc.filters import FileSnapshot

LEGACY_COMMANDS = """<?xml version="1.0" encoding="UTF-8"?>
<commands>
  <command alias="edit" value="vim $f" display="Vim"/>
</commands>
"""

LEGACY_ASSOCIATIONS = """<?xml version="1.0" encoding="UTF-8"?>
<associations>
  <association command="edit">
    <mask value=".*\\.(txt|md)" case_sensitive="false"/>
    <is_writable value="true"/>
  </association>
</associations>
"""


def main() -> None:
    with tempfile.TemporaryDirectory() as name:
        prefs = Path(name)
        (prefs / "commands.xml").write_text(LEGACY_COMMANDS, encoding="utf-8")
        (prefs / "associations.xml").write_text(LEGACY_ASSOCIATIONS, encoding="utf-8")

        context = cmdassoc.open_context(prefs, load=False)
        outcomes = context.persistence.load()
        print(f"Load outcomes: {[outcome.value for outcome in outcomes]}")

        command = context.resolve(FileSnapshot("README.md"))
        print(f"README.md -> {command.label if command else '-'}")

        print(f"Saved: {context.save()}")
        print((prefs / "associations.yaml").read_text(encoding="utf-8"))


if __name__ == "__main__":
    main()
