"""Legacy associations store format (XML), read-only.

Example document::

    <associations>
        <association command="view">
            <mask value=".*\\.txt" case_sensitive="false"/>
            <is_hidden value="false"/>
        </association>
    </associations>

Legacy masks are regular expressions.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from cmdassoc.associations.builder import AssociationBuilder, building
from cmdassoc.errors import FormatError
from cmdassoc.filters.instructions import FilterInstruction, InstructionKind

ROOT_ELEMENT = "associations"
ASSOCIATION_ELEMENT = "association"

_TOGGLE_ELEMENTS = {
    "is_hidden": InstructionKind.HIDDEN,
    "is_symlink": InstructionKind.SYMLINK,
    "is_readable": InstructionKind.READ,
    "is_writable": InstructionKind.WRITE,
    "is_executable": InstructionKind.EXECUTE,
}


def read_legacy_associations(text: str, builder: AssociationBuilder, path: Path | None = None) -> None:
    """Parse a legacy associations document and replay it into ``builder``.

    Raises
    ------
    FormatError
        If the document is not well-formed XML or an element is malformed.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FormatError(f"Invalid XML: {exc}", path) from exc
    if root.tag != ROOT_ELEMENT:
        raise FormatError(f"Expected <{ROOT_ELEMENT}> root element, found <{root.tag}>", path)

    with building(builder):
        for element in root.iter(ASSOCIATION_ELEMENT):
            alias = element.get("command")
            if not alias:
                raise FormatError("<association> needs a 'command' attribute", path)
            instructions = [_instruction(child, path) for child in element]
            builder.start_association(alias)
            for instruction in instructions:
                builder.add_filter(instruction)
            builder.end_association()


def _instruction(element: ET.Element, path: Path | None) -> FilterInstruction:
    if element.tag == "mask":
        pattern = element.get("value")
        if not pattern:
            raise FormatError("<mask> needs a 'value' attribute", path)
        return FilterInstruction.mask(
            pattern,
            case_sensitive=_boolean(element, "case_sensitive", path, default=False),
            regex=True,
        )
    kind = _TOGGLE_ELEMENTS.get(element.tag)
    if kind is None:
        raise FormatError(f"Unknown association element <{element.tag}>", path)
    return FilterInstruction.toggle(kind, _boolean(element, "value", path))


def _boolean(element: ET.Element, name: str, path: Path | None, default: bool | None = None) -> bool:
    raw = element.get(name)
    if raw is None:
        if default is None:
            raise FormatError(f"<{element.tag}> needs a '{name}' attribute", path)
        return default
    lowered = raw.strip().lower()
    if lowered not in ("true", "false"):
        raise FormatError(f"<{element.tag} {name}={raw!r}> is not a boolean", path)
    return lowered == "true"
