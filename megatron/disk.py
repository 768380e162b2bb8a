"""The simulated disk: plates of two surfaces each, with record placement and reporting."""

from __future__ import annotations

import sys
from pathlib import Path

from megatron.geometry import Plate
from megatron.sector import Sector

_BAR = "=" * 45


class Disk:
    """A stack of plates whose sectors are files below a base directory."""

    def __init__(self, plates, tracks, sectors, sector_size, base_path, csv_name):
        self.num_plates = plates
        self.num_tracks = tracks
        self.num_sectors = sectors
        self.sector_size = sector_size
        self.base_path = Path(base_path)
        self.csv_name = csv_name
        self.total_capacity = plates * 2 * tracks * sectors * sector_size
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.plates = [
            Plate(index, tracks, sectors, sector_size, self.base_path)
            for index in range(plates)
        ]

    def write_record(self, record) -> bool:
        """Store the record in the first sector that accepts it.

        Sectors are tried plate by plate, top surface before bottom, track by
        track. Returns False when no sector has room.
        """
        for plate in self.plates:
            for surface in plate.surfaces():
                for track in surface.tracks:
                    for sector in track.sectors:
                        if not sector.has_space_for(record):
                            continue
                        location = (
                            f"Plate {plate.plate_id} - Surface {surface.label}"
                            f" - Track {track.track_id} - Sector {track.sectors.index(sector)}"
                        )
                        if sector.write_record(record, location, self.csv_name):
                            return True
        print("❌ No space found to write record.", file=sys.stderr)
        return False

    def all_sectors(self) -> list[Sector]:
        """Every sector of the disk in placement order."""
        return [
            sector
            for plate in self.plates
            for surface in plate.surfaces()
            for track in surface.tracks
            for sector in track.sectors
        ]

    def structure_report(self) -> str:
        """A text description of the layout, block counts and capacity."""
        lines = [
            _BAR,
            "         MEGATRONJ3000J DISK REPORT",
            _BAR,
            f"📁 Base path: {self.base_path}",
            f"🔧 Configuration: {self.num_plates} plate(s), "
            f"{self.num_tracks} track(s)/surface, "
            f"{self.num_sectors} sector(s)/track",
            "",
        ]
        for plate in self.plates:
            lines.append(f"🪞 Plate #{plate.plate_id}")
            for surface in plate.surfaces():
                lines.append(f" ├─ Surface [{surface.label}] ID: {surface.surface_id}")
                lines.extend(
                    f" │   ├─ Track #{track.track_id:2d}: {len(track.sectors)} sectors"
                    for track in surface.tracks
                )
            lines.append("")

        total_blocks = 0
        for plate in self.plates:
            plate_blocks = 0
            for surface in plate.surfaces():
                lines.append(f" ├─ Surface [{surface.label}] ID: {surface.surface_id}")
                for track in surface.tracks:
                    blocks = track.count_blocks()
                    plate_blocks += blocks
                    lines.append(
                        f" │   ├─ Track #{track.track_id}: "
                        f"{len(track.sectors)} sectors, {blocks} blocks"
                    )
            lines.append(f" 🎯 Total Blocks in Plate #{plate.plate_id}: {plate_blocks}")
            lines.append("")
            total_blocks += plate_blocks

        capacity = self.total_capacity
        lines.append(f"📦 Total Blocks in Disk: {total_blocks}")
        lines.append(
            f"💾 Total Disk Capacity: {capacity} bytes "
            f"({capacity / 1024:g} KB | {capacity / (1024 * 1024):g} MB)"
        )
        lines.append("========== END OF STRUCTURE REPORT ==========")
        return "\n".join(lines) + "\n"

    def generate_structure_report(self, output_path) -> None:
        """Write the structure report to output_path; raises OSError if it cannot."""
        with Path(output_path).open("w", encoding="utf-8", newline="") as out:
            out.write(self.structure_report())

    def __repr__(self) -> str:
        return (
            f"Disk(plates={self.num_plates}, tracks={self.num_tracks}, "
            f"sectors={self.num_sectors}, sector_size={self.sector_size})"
        )