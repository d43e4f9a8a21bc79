"""Legacy commands store format (XML), read-only.

Example document::

    <?xml version="1.0" encoding="UTF-8"?>
    <commands>
        <command alias="open" value="xdg-open $f" type="system"/>
        <command alias="edit" value="vim $f" display="Vim"/>
    </commands>

There is deliberately no writer: legacy files are only migrated from.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from cmdassoc.command.builder import CommandBuilder, building
from cmdassoc.command.model import Command, CommandType
from cmdassoc.errors import FormatError

ROOT_ELEMENT = "commands"
COMMAND_ELEMENT = "command"


def read_legacy_commands(text: str, builder: CommandBuilder, path: Path | None = None) -> None:
    """Parse a legacy commands document and pass each command to ``builder``.

    Raises
    ------
    FormatError
        If the document is not well-formed XML or a ``command`` element is
        malformed.  Commands before the faulty element are kept.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FormatError(f"Invalid XML: {exc}", path) from exc
    if root.tag != ROOT_ELEMENT:
        raise FormatError(f"Expected <{ROOT_ELEMENT}> root element, found <{root.tag}>", path)

    with building(builder):
        for element in root.iter(COMMAND_ELEMENT):
            builder.add_command(_command(element, path))


def _command(element: ET.Element, path: Path | None) -> Command:
    alias = element.get("alias")
    value = element.get("value")
    if not alias or not value:
        raise FormatError("<command> needs 'alias' and 'value' attributes", path)
    try:
        return Command(
            alias=alias,
            template=value,
            kind=CommandType.parse(element.get("type")),
            display_name=element.get("display"),
        )
    except ValueError as exc:
        raise FormatError(str(exc), path) from exc
