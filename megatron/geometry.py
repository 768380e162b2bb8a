"""Physical layout of the simulated disk: tracks, surfaces and plates."""

from __future__ import annotations

from pathlib import Path

from megatron.sector import Sector


class Track:
    """A ring of sectors, stored as a folder of sector files."""

    def __init__(self, track_id, num_sectors, sector_size, base_path):
        self.track_id = track_id
        self.path = Path(base_path) / f"track{track_id:03d}"
        self.path.mkdir(parents=True, exist_ok=True)
        self.sectors = [
            Sector(self.path / f"sector{index:03d}.txt", sector_size)
            for index in range(num_sectors)
        ]

    def count_blocks(self) -> int:
        """Number of non-empty lines across the track's sector files."""
        return sum(
            1
            for sector in self.sectors
            for line in sector.read_data().split("\n")
            if line
        )

    def __repr__(self) -> str:
        return f"Track({self.track_id}, sectors={len(self.sectors)})"


class Surface:
    """One side of a plate, holding its tracks."""

    def __init__(self, surface_id, num_tracks, num_sectors, sector_size, base_path):
        self.surface_id = surface_id
        self.path = Path(base_path) / f"surface{surface_id:03d}"
        self.path.mkdir(parents=True, exist_ok=True)
        self.tracks = [
            Track(index, num_sectors, sector_size, self.path) for index in range(num_tracks)
        ]

    @property
    def label(self) -> str:
        return "Top" if self.surface_id % 2 == 0 else "Bottom"

    def __repr__(self) -> str:
        return f"Surface({self.surface_id}, tracks={len(self.tracks)})"


class Plate:
    """A platter with a top and a bottom surface."""

    def __init__(self, plate_id, num_tracks, num_sectors, sector_size, base_path):
        self.plate_id = plate_id
        base = Path(base_path)
        self.top = Surface(0, num_tracks, num_sectors, sector_size, base / f"plate{plate_id}_top")
        self.bottom = Surface(
            1, num_tracks, num_sectors, sector_size, base / f"plate{plate_id}_bottom"
        )

    def surfaces(self) -> tuple[Surface, Surface]:
        """The top and bottom surface, in that order."""
        return (self.top, self.bottom)

    def __repr__(self) -> str:
        return f"Plate({self.plate_id})"