"""SELECT queries over stored relations and raw CSV tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from megatron.csvload import split_csv_line
from megatron.filtering import _ORDERED, RelationError, _read_lines, _to_float32
from megatron.schema import load_schema, save_schema_entry

_WHITESPACE = " \t\r\n"
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


class QueryError(Exception):
    """A query was malformed or refers to data that cannot be read."""


class Condition(NamedTuple):
    column: str
    op: str
    value: str


@dataclass
class Query:
    """A parsed '& SELECT * FROM table [WHERE col op value] [| output] #' command."""

    table: str
    output: str = ""
    where: Condition | None = None


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if not match:
        raise ValueError(f"not an integer: {text!r}")
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return number


def select_relation(relation_name, root=".") -> list[str]:
    """Print a stored relation and its file size; return its lines.

    Raises RelationError when the catalogue, the relation's schema or its
    data file is missing.
    """
    base = Path(root)
    schema_path = base / "schema" / "schema.txt"
    data_path = base / "output" / f"{relation_name}.txt"

    if not schema_path.is_file():
        raise RelationError("Schema file not found.")
    prefix = f"{relation_name}#"
    if not any(line.startswith(prefix) for line in _read_lines(schema_path)):
        raise RelationError(f"Schema for relation '{relation_name}' not found.")
    if not data_path.exists():
        raise RelationError(f"Data file for relation '{relation_name}' not found.")

    lines = _read_lines(data_path)
    print(f"[INFO] Contents of '{relation_name}':")
    for line in lines:
        print(line)
    print(f"[INFO] File size: {data_path.stat().st_size} bytes")
    return lines


def tokenize(text) -> list[str]:
    """Split on runs of whitespace."""
    return text.split()


def parse_query(command) -> Query:
    """Parse a SELECT command; raises QueryError when it is not one."""
    tokens = tokenize(command)
    if len(tokens) < 6 or tokens[1] != "SELECT" or tokens[3] != "FROM":
        raise QueryError("Invalid SELECT query.")

    query = Query(table=tokens[4])
    index = 5
    while index < len(tokens):
        token = tokens[index]
        if token == "WHERE" and index + 3 < len(tokens):
            query.where = Condition(*tokens[index + 1:index + 4])
            index += 4
            continue
        if token == "|" and index + 1 < len(tokens):
            query.output = tokens[index + 1]
        index += 1
    return query


def evaluate_condition(schema, row, column, op, value) -> bool:
    """Test 'column op value' on a row, with types taken from the schema.

    The schema alternates attribute names and types. Values that do not
    convert to the column's type, missing columns and short rows give False.
    """
    for position, (name, type_name) in enumerate(zip(schema[0::2], schema[1::2])):
        if name.strip(_WHITESPACE) != column:
            continue
        if position >= len(row):
            return False
        actual = row[position]
        try:
            if type_name == "int":
                a, b = _to_int(actual), _to_int(value)
            elif type_name == "float":
                a, b = _to_float32(actual), _to_float32(value)
            else:
                a, b = actual, value
        except ValueError:
            return False
        operation = _ORDERED.get(op)
        if operation is not None:
            return operation(a, b)
    return False


def process_query(command, root=".") -> list[str]:
    """Run a SELECT over <root>/data/<table>.csv and return the matching lines.

    With '| name' the lines go to <root>/output/<name>.txt and the table's
    schema is registered under the new name; otherwise they are printed.
    """
    query = parse_query(command)
    base = Path(root)
    schema_path = base / "schema" / "schema.txt"
    schema = load_schema(schema_path, query.table)

    source = base / "data" / f"{query.table}.csv"
    try:
        lines = _read_lines(source)
    except OSError as error:
        raise QueryError(f"Could not open data/{query.table}.csv") from error

    where = query.where
    selected = [
        line
        for line in lines
        if where is None
        or evaluate_condition(schema, split_csv_line(line), where.column, where.op, where.value)
    ]

    if query.output:
        out_path = base / "output" / f"{query.output}.txt"
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", encoding="utf-8", newline="") as out:
            out.writelines(line + "\n" for line in selected)
        save_schema_entry(schema_path, query.output, schema)
        print(f"New table '{query.output}' created.")
    else:
        for line in selected:
            print(line)
    return selected