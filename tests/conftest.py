"""Shared test fixtures for cmdassoc.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from cmdassoc.associations import AssociationRegistry
from cmdassoc.command import CommandRegistry
from cmdassoc.persistence import PersistenceEngine
from cmdassoc.resolver import Resolver


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "cmdassoc"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def commands() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture()
def associations(commands: CommandRegistry) -> AssociationRegistry:
    return AssociationRegistry(commands)


@pytest.fixture()
def resolver(commands: CommandRegistry, associations: AssociationRegistry) -> Resolver:
    return Resolver(commands, associations)


@pytest.fixture()
def prefs_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "prefs"
    directory.mkdir()
    return directory


@pytest.fixture()
def engine(
    commands: CommandRegistry, associations: AssociationRegistry, prefs_dir: Path
) -> PersistenceEngine:
    return PersistenceEngine(commands, associations, lambda: prefs_dir)
