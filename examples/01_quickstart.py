#!/usr/bin/env python3
"""Example: Quickstart — cmdassoc

Minimal working example: register a custom command, route log files to
it, resolve a few files, and save the result.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install cmdassoc
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import cmdassoc
from cmdassoc.filters import CompositeFilter, FilePermission, FileSnapshot, NameMaskFilter, PermissionFilter


def main() -> None:
    print(f"cmdassoc version: {cmdassoc.__version__}")

    with tempfile.TemporaryDirectory() as prefs:
        # Step 1: Platform defaults, plus whatever is stored in prefs
        context = cmdassoc.open_context(prefs)
        print(f"Bootstrapped {len(context.commands)} command(s), "
              f"default: {context.commands.default_command}")

        # Step 2: A custom command and two rules that route files to it
        context.add_command("view", "less $f", display_name="Pager")
        context.associate("view", NameMaskFilter("*.log"))
        context.associate(
            "view",
            CompositeFilter((NameMaskFilter("*.txt"), PermissionFilter(FilePermission.WRITE, required=False))),
        )

        # Step 3: Resolve some files
        probes = [
            FileSnapshot("server.log"),
            FileSnapshot("notes.txt", writable=False),
            FileSnapshot("notes.txt"),
            FileSnapshot("install.sh", executable=True),
        ]
        for probe in probes:
            command = context.resolve(probe, allow_executable_fallback=True)
            label = command.label if command else "-"
            print(f"  {probe.name:<12} -> {label}")

        # Step 4: Persist what changed
        saved = context.save()
        print(f"Saved (commands, associations): {saved}")
        for name in sorted(p.name for p in Path(prefs).iterdir()):
            print(f"  {name}")


if __name__ == "__main__":
    main()
