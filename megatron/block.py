"""Logical blocks: groups of sectors treated as one storage unit."""

from __future__ import annotations

from pathlib import Path

from megatron.sector import Sector


class Block:
    """A group of sectors with aggregated size accounting."""

    def __init__(self, block_id, sectors, source=""):
        self.block_id = block_id
        self.sectors: list[Sector] = list(sectors)
        self.source = source
        self.record_count = 0
        self.total_size = sum(s.free_space + s.used_space for s in self.sectors)
        self.used_size = sum(s.used_space for s in self.sectors)

    @property
    def free_space(self) -> int:
        return self.total_size - self.used_size

    def can_fit(self, record) -> bool:
        return len(record.encode("utf-8")) <= self.free_space

    def insert_record(self, record) -> bool:
        """Write the record into the first sector that takes it."""
        for sector in self.sectors:
            if sector.has_space_for(record) and sector.write_record(
                record, f"BlockID={self.block_id}"
            ):
                self.used_size += len(record.encode("utf-8"))
                self.record_count += 1
                return True
        return False

    def report(self) -> str:
        lines = [
            f"[Block ID: {self.block_id}]",
            f"Total Size: {self.total_size} bytes",
            f"Used Size: {self.used_size} bytes",
            f"Free Space: {self.free_space} bytes",
            f"Record Count: {self.record_count}",
            f"Source File: {self.source or '<unknown>'}",
            "Sectors:",
        ]
        lines.extend(
            f" - {s.path} (Used: {s.used_space}/{s.free_space + s.used_space})"
            for s in self.sectors
        )
        return "\n".join(lines) + "\n"

    def write_header(self, base_path) -> Path:
        """Write the block report to block_<id>_header.txt under base_path."""
        target = self._target(base_path, "header")
        with target.open("w", encoding="utf-8", newline="") as out:
            out.write(self.report())
        return target

    def write_content(self, base_path) -> Path:
        """Write the concatenated sector contents to block_<id>_data.txt under base_path."""
        target = self._target(base_path, "data")
        with target.open("w", encoding="utf-8", newline="") as out:
            for sector in self.sectors:
                out.write(sector.read_data() + "\n")
        return target

    def _target(self, base_path, kind: str) -> Path:
        directory = Path(base_path)
        directory.mkdir(parents=True, exist_ok=True)
        return directory / f"block_{self.block_id}_{kind}.txt"


def group_sectors(sectors, per_block, source=""):
    """Split sectors into consecutive blocks of per_block sectors, numbered from 0."""
    if per_block <= 0:
        raise ValueError("per_block must be positive")
    sectors = list(sectors)
    return [
        Block(block_id, sectors[start:start + per_block], source)
        for block_id, start in enumerate(range(0, len(sectors), per_block))
    ]