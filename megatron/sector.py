"""A sector: the smallest storage unit of the simulated disk, backed by a text file."""

from __future__ import annotations

from pathlib import Path

SEPARATOR = "-" * 40 + "\n"
DEFAULT_CAPACITY = 4096


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _header(source_file: str, capacity: int, free: str, used: str) -> str:
    return (
        f"Source File: {source_file}\n"
        "[Sector Metadata]\n"
        f"Capacity: {capacity} bytes\n"
        f"Free Space: {free}\n"
        f"Used Space: {used}\n"
        "Source File: (to be set dynamically or from block if available)\n"
        f"{SEPARATOR}"
    )


def _read(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _write(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


class Sector:
    """Fixed-capacity storage cell that appends records to its file.

    The first successful write puts a metadata header in front of the records;
    the header is refreshed with the current free and used space after every write.
    """

    def __init__(self, path, capacity=DEFAULT_CAPACITY):
        self.path = Path(path)
        self.capacity = capacity
        self.used_space = 0
        self.occupied = False
        self._header = ""
        self._header_written = False

    @property
    def free_space(self) -> int:
        return self.capacity - self.used_space

    def has_space_for(self, record) -> bool:
        """Whether the bare record still fits within the capacity."""
        return self.used_space + _byte_len(record) <= self.capacity

    def write_record(self, record, location_info="", source_file="") -> bool:
        """Append a record, tagged with its location; return False when it does not fit."""
        line = record
        if location_info:
            line += f"|{location_info}"
        line += "\n"

        if not self.occupied:
            self._header = _header(source_file, self.capacity, "(placeholder)", "(placeholder)")
            self.used_space += _byte_len(self._header)
            self.occupied = True

        with self.path.open("a", encoding="utf-8", newline="") as out:
            if self.used_space + _byte_len(line) > self.capacity:
                return False
            if not self._header_written:
                out.write(self._header)
            out.write(line)

        self.used_space += _byte_len(line)
        self._header_written = True

        content = _read(self.path)
        end = content.find(SEPARATOR)
        if end != -1:
            rest = content[end + len(SEPARATOR):]
            header = _header(
                source_file,
                self.capacity,
                f"{self.capacity - self.used_space} bytes",
                f"{self.used_space} bytes",
            )
            _write(self.path, header + rest)
        return True

    def read_data(self) -> str:
        """The whole file content, or an empty string when the file does not exist."""
        try:
            return _read(self.path)
        except FileNotFoundError:
            return ""

    def clear(self) -> None:
        """Empty the sector's file and reset its bookkeeping."""
        _write(self.path, "")
        self.used_space = 0
        self.occupied = False
        self._header = ""
        self._header_written = False

    def __repr__(self) -> str:
        return f"Sector({str(self.path)!r}, capacity={self.capacity}, used={self.used_space})"