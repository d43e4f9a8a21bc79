"""Current commands store format (YAML).

Example document::

    commands:
    - alias: open
      type: system
      value: xdg-open $f
    - alias: edit
      type: other
      value: vim $f
      display: Vim
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, TextIO

import yaml

from cmdassoc.command.builder import CommandBuilder, building
from cmdassoc.command.model import Command, CommandType
from cmdassoc.errors import FormatError

ROOT_KEY = "commands"


def command_to_dict(command: Command) -> dict[str, object]:
    """Serialize a command to its store record."""
    record: dict[str, object] = {
        "alias": command.alias,
        "type": command.kind.value,
        "value": command.template,
    }
    if command.display_name is not None:
        record["display"] = command.display_name
    return record


def command_from_dict(record: Any) -> Command:
    """Deserialize a store record.

    Raises
    ------
    FormatError
        If the record is not a mapping, lacks ``alias`` or ``value``, or
        names an unknown type.
    """
    if not isinstance(record, dict):
        raise FormatError(f"Command record must be a mapping, got {type(record).__name__}")
    alias = record.get("alias")
    value = record.get("value")
    if not isinstance(alias, str) or not isinstance(value, str):
        raise FormatError(f"Command record needs string 'alias' and 'value': {record!r}")
    display = record.get("display")
    try:
        return Command(
            alias=alias,
            template=value,
            kind=CommandType.parse(record.get("type")),
            display_name=str(display) if display is not None else None,
        )
    except ValueError as exc:
        raise FormatError(str(exc)) from exc


class CommandsYamlWriter(CommandBuilder):
    """Collects commands and dumps them to ``stream`` as one document."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._records: list[dict[str, object]] = []

    def start_building(self) -> None:
        self._records = []

    def add_command(self, command: Command) -> None:
        self._records.append(command_to_dict(command))

    def end_building(self) -> None:
        yaml.safe_dump(
            {ROOT_KEY: self._records},
            self._stream,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def read_commands(text: str, builder: CommandBuilder, path: Path | None = None) -> None:
    """Parse a commands document and pass each command to ``builder``.

    Records are handed over one by one: when a record is malformed, the
    ones before it have already reached ``builder``.

    Raises
    ------
    FormatError
        If the document is not valid YAML, has the wrong shape, or holds a
        malformed record.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FormatError(f"Invalid YAML: {exc}", path) from exc

    records = _records(document, path)
    with building(builder):
        for record in records:
            try:
                command = command_from_dict(record)
            except FormatError as exc:
                raise exc.with_path(path) if path is not None else exc
            builder.add_command(command)


def _records(document: Any, path: Path | None) -> list[Any]:
    if document is None:
        return []
    if not isinstance(document, dict):
        raise FormatError("Commands document must be a mapping", path)
    records = document.get(ROOT_KEY) or []
    if not isinstance(records, list):
        raise FormatError(f"'{ROOT_KEY}' must be a list", path)
    return records
