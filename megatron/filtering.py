"""Filtering stored relations by a condition on one attribute."""

from __future__ import annotations

import re
import struct
from pathlib import Path

_DIGITS = frozenset("0123456789")

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class RelationError(Exception):
    """A relation, its schema or one of its attributes could not be found."""


def is_number(text) -> bool:
    """True for a non-empty string of ASCII digits."""
    return bool(text) and all(char in _DIGITS for char in text)


def _to_float32(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        raise ValueError(f"not a number: {text!r}")
    try:
        return struct.unpack("f", struct.pack("f", float(match.group(1))))[0]
    except OverflowError as error:
        raise ValueError(f"number out of range: {text!r}") from error


_ORDERED = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    ">=": lambda a, b: a >= b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    "<": lambda a, b: a < b,
}


def compare(lhs, rhs, op, type_name) -> bool:
    """Apply op to two field values interpreted as type_name.

    Ints must be plain digit strings, otherwise the result is False. Floats are
    parsed from their leading number with single precision; a value with no
    number raises ValueError. Strings support only '==' and '!='.
    """
    if type_name == "int":
        if not is_number(lhs) or not is_number(rhs):
            return False
        operation = _ORDERED.get(op)
        return bool(operation and operation(int(lhs), int(rhs)))
    if type_name == "float":
        a, b = _to_float32(lhs), _to_float32(rhs)
        operation = _ORDERED.get(op)
        return bool(operation and operation(a, b))
    if op == "==":
        return lhs == rhs
    if op == "!=":
        return lhs != rhs
    return False


def _split_fields(line: str) -> list[str]:
    parts = line.split("#")
    if parts[-1] == "":
        parts.pop()
    return parts


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return parts


def _read_lines(path: Path) -> list[str]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return _lines(handle.read())


def filter_relation(relation_name, attribute, op, value, new_relation_name, root=".") -> Path:
    """Write the rows of a relation satisfying 'attribute op value' as a new relation.

    Relations live in <root>/output/<name>.txt and the catalogue in
    <root>/schema/schema.txt; the new relation's schema is appended to it.
    Returns the path of the new data file.
    """
    base = Path(root)
    schema_path = base / "schema" / "schema.txt"
    data_path = base / "output" / f"{relation_name}.txt"
    if not schema_path.is_file() or not data_path.is_file():
        raise RelationError("Schema or data file not found.")

    for line in _read_lines(schema_path):
        table, *rest = _split_fields(line) or [""]
        if table == relation_name:
            names = rest[0::2]
            types = rest[1::2]
            break
    else:
        raise RelationError(f"Schema for relation '{relation_name}' not found.")

    if attribute not in names:
        raise RelationError("Attribute not found in schema.")
    index = names.index(attribute)
    type_name = types[index] if index < len(types) else "string"

    new_path = base / "output" / f"{new_relation_name}.txt"
    with new_path.open("w", encoding="utf-8", newline="") as out:
        for line in _read_lines(data_path):
            fields = _split_fields(line)
            if len(fields) != len(names):
                continue
            if compare(fields[index], value, op, type_name):
                out.write(line + "\n")

    with schema_path.open("a", encoding="utf-8", newline="") as schema:
        schema.write(
            new_relation_name
            + "".join(f"#{name}#{kind}" for name, kind in zip(names, types))
            + "\n"
        )

    print(f"[INFO] Filtered relation saved as '{new_relation_name}'.")
    return new_path