"""Loading CSV files into '#'-delimited relation files with an inferred schema."""

from __future__ import annotations

from pathlib import Path

_DIGITS = frozenset("0123456789")


def detect_type(value) -> str:
    """Guess 'int', 'float' or 'string' from a sample value."""
    if not value:
        return "string"
    has_dot = False
    for char in value:
        if char in _DIGITS:
            continue
        if char == "." and not has_dot:
            has_dot = True
            continue
        return "string"
    return "float" if has_dot else "int"


def split_csv_line(line) -> list[str]:
    """Split on commas; a trailing empty field is dropped and an empty line gives []."""
    parts = line.split(",")
    if parts[-1] == "":
        parts.pop()
    return parts


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return parts


def load_csv_and_save(filepath, out_dir, schema_file_path) -> Path:
    """Convert a CSV file into <out_dir>/<stem>.txt and append its schema line.

    The header names the attributes; their types are guessed from the first
    data row. Returns the path of the written data file.
    """
    source = Path(filepath)
    with source.open("r", encoding="utf-8", newline="") as handle:
        lines = _lines(handle.read())

    out_directory = Path(out_dir)
    out_directory.mkdir(parents=True, exist_ok=True)
    schema_path = Path(schema_file_path)
    schema_path.parent.mkdir(parents=True, exist_ok=True)

    name = source.stem
    out_path = out_directory / f"{name}.txt"

    header = lines[0] if lines else ""
    rows = lines[1:] or [""]
    headers = split_csv_line(header)
    sample = split_csv_line(rows[0])

    schema_line = name + "".join(
        f"#{column}#{detect_type(sample[index] if index < len(sample) else '')}"
        for index, column in enumerate(headers)
    )
    with schema_path.open("a", encoding="utf-8", newline="") as schema:
        schema.write(schema_line + "\n")

    with out_path.open("w", encoding="utf-8", newline="") as out:
        out.writelines(row.replace(",", "#") + "\n" for row in rows)

    print(f"Processed: {source}\n→ Data: {out_path}\n→ Schema: {schema_path}")
    return out_path