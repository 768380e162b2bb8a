"""Relation schemas: the comma form of single-schema files and the '#' catalogue."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

_WHITESPACE = " \t\r\n"


@dataclass
class Attribute:
    name: str
    type: str


@dataclass
class RelationSchema:
    relation_name: str = ""
    attributes: list[Attribute] = field(default_factory=list)


def _fields(text: str, sep: str) -> list[str]:
    """Split like repeated getline: a trailing empty field is not produced."""
    parts = text.split(sep)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_schema_file(path) -> RelationSchema:
    """Read 'name,attr:type,...' from the first line of a schema file."""
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        first = handle.readline().rstrip("\n")
    schema = RelationSchema()
    parts = _fields(first, ",")
    if not parts:
        return schema
    schema.relation_name = parts[0]
    for attr in parts[1:]:
        name, colon, type_name = attr.partition(":")
        if colon:
            schema.attributes.append(Attribute(name, type_name))
    return schema


def save_schema(schema, path) -> None:
    """Write a schema in the 'name,attr:type,...' form, replacing the file."""
    line = schema.relation_name + "".join(
        f",{attr.name}:{attr.type}" for attr in schema.attributes
    )
    with Path(path).open("w", encoding="utf-8", newline="") as handle:
        handle.write(line + "\n")


def load_schema(schema_path, relation_name) -> list[str]:
    """Alternating attribute names and types of a relation in the catalogue.

    Blank lines and lines starting with '#' are skipped. An empty list is
    returned when the relation or the catalogue is missing.
    """
    try:
        with Path(schema_path).open("r", encoding="utf-8", newline="") as handle:
            lines = handle.read().split("\n")
    except FileNotFoundError:
        return []
    for raw in lines:
        line = raw.strip(_WHITESPACE)
        if not line or line.startswith("#"):
            continue
        table, *columns = _fields(line, "#")
        if table.strip(_WHITESPACE) == relation_name:
            return [column.strip(_WHITESPACE) for column in columns]
    return []


def save_schema_entry(schema_path, table, columns) -> bool:
    """Append 'table#col#...' to the catalogue unless the table is already there."""
    path = Path(schema_path)
    prefix = f"{table}#"
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            if any(line.startswith(prefix) for line in handle):
                return False
    except FileNotFoundError:
        pass
    with path.open("a", encoding="utf-8", newline="") as handle:
        handle.write(table + "".join(f"#{column}" for column in columns) + "\n")
    return True