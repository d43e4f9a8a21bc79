"""Current associations store format (YAML).

Each association names a command alias and lists its flat filter
instructions, in order::

    associations:
    - alias: view
      filters:
      - kind: name_mask
        pattern: '*.txt'
        case_sensitive: false
        regex: false
      - kind: hidden
        value: false
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, TextIO

import yaml

from cmdassoc.associations.builder import AssociationBuilder, building
from cmdassoc.errors import FormatError
from cmdassoc.filters.instructions import FilterInstruction, InstructionKind

ROOT_KEY = "associations"


def instruction_to_dict(instruction: FilterInstruction) -> dict[str, object]:
    """Serialize one filter instruction."""
    if instruction.kind is InstructionKind.NAME_MASK:
        return {
            "kind": instruction.kind.value,
            "pattern": instruction.pattern,
            "case_sensitive": instruction.case_sensitive,
            "regex": instruction.regex,
        }
    return {"kind": instruction.kind.value, "value": instruction.value}


def instruction_from_dict(record: Any) -> FilterInstruction:
    """Deserialize one filter instruction.

    Raises
    ------
    FormatError
        If the record is malformed.
    """
    if not isinstance(record, dict):
        raise FormatError(f"Filter record must be a mapping, got {type(record).__name__}")
    try:
        kind = InstructionKind(record.get("kind"))
    except ValueError:
        raise FormatError(f"Unknown filter kind: {record.get('kind')!r}") from None

    if kind is InstructionKind.NAME_MASK:
        pattern = record.get("pattern")
        if not isinstance(pattern, str) or not pattern:
            raise FormatError(f"Name mask filter needs a string 'pattern': {record!r}")
        return FilterInstruction.mask(
            pattern,
            case_sensitive=_flag(record, "case_sensitive"),
            regex=_flag(record, "regex"),
        )

    value = record.get("value")
    if not isinstance(value, bool):
        raise FormatError(f"{kind.value!r} filter needs a boolean 'value': {record!r}")
    return FilterInstruction.toggle(kind, value)


def _flag(record: dict[str, Any], key: str) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        raise FormatError(f"{key!r} must be a boolean: {record!r}")
    return value


class AssociationsYamlWriter(AssociationBuilder):
    """Collects associations and dumps them to ``stream`` as one document."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._records: list[dict[str, object]] = []
        self._current: dict[str, Any] | None = None

    def start_building(self) -> None:
        self._records = []

    def start_association(self, alias: str) -> None:
        self._current = {"alias": alias, "filters": []}

    def add_filter(self, instruction: FilterInstruction) -> None:
        if self._current is None:
            raise RuntimeError("add_filter() called outside an association")
        self._current["filters"].append(instruction_to_dict(instruction))

    def end_association(self) -> None:
        if self._current is None:
            raise RuntimeError("end_association() called outside an association")
        self._records.append(self._current)
        self._current = None

    def end_building(self) -> None:
        yaml.safe_dump(
            {ROOT_KEY: self._records},
            self._stream,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def read_associations(text: str, builder: AssociationBuilder, path: Path | None = None) -> None:
    """Parse an associations document and replay it into ``builder``.

    Raises
    ------
    FormatError
        If the document is not valid YAML or a record is malformed.
        Associations before the faulty record have already been replayed.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FormatError(f"Invalid YAML: {exc}", path) from exc

    records = _records(document, path)
    with building(builder):
        for record in records:
            alias, instructions = _association(record, path)
            builder.start_association(alias)
            for instruction in instructions:
                builder.add_filter(instruction)
            builder.end_association()


def _records(document: Any, path: Path | None) -> list[Any]:
    if document is None:
        return []
    if not isinstance(document, dict):
        raise FormatError("Associations document must be a mapping", path)
    records = document.get(ROOT_KEY) or []
    if not isinstance(records, list):
        raise FormatError(f"'{ROOT_KEY}' must be a list", path)
    return records


def _association(record: Any, path: Path | None) -> tuple[str, list[FilterInstruction]]:
    if not isinstance(record, dict):
        raise FormatError("Association record must be a mapping", path)
    alias = record.get("alias")
    if not isinstance(alias, str) or not alias:
        raise FormatError(f"Association record needs a string 'alias': {record!r}", path)
    filters = record.get("filters") or []
    if not isinstance(filters, list):
        raise FormatError(f"'filters' of association {alias!r} must be a list", path)
    try:
        return alias, [instruction_from_dict(item) for item in filters]
    except FormatError as exc:
        raise exc.with_path(path) if path is not None else exc
