"""Tile records and parsing of the textual tile format."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import numpy as np

from .errors import MalformedInputError

MIN_TILE_SIZE = 3
MAX_TILE_ID = int(np.iinfo(np.int64).max)


@dataclass(frozen=True)
class Tile:
    """A square bitmap with an integer id."""

    tile_id: int
    cells: np.ndarray

    @classmethod
    def from_rows(cls, tile_id: int, rows: List[str]) -> "Tile":
        """Create a tile from `#`/`.` text rows."""
        cells = np.array([[1 if ch == "#" else 0 for ch in row] for row in rows], dtype=np.uint8)
        cells.setflags(write=False)
        return cls(tile_id=tile_id, cells=cells)

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])


class TileParser:
    """Parse blank-line separated tile records."""

    def __init__(self) -> None:
        self.header_re: re.Pattern[str] = re.compile(r"^Tile ([0-9]+):$")
        self.row_re: re.Pattern[str] = re.compile(r"^[#.]+$")

    def parse_record(self, record: str) -> Tile:
        """Parse one `Tile <id>:` header followed by N rows of N cells."""
        lines = [line.rstrip("\r") for line in record.strip().split("\n")]
        if not lines or not lines[0]:
            raise MalformedInputError("tile record is empty")
        match = self.header_re.match(lines[0])
        if match is None:
            raise MalformedInputError(f"tile record has a bad header: {lines[0]!r}")
        tile_id = int(match.group(1))

        rows = lines[1:]
        if not rows:
            raise MalformedInputError(f"tile {tile_id} has no rows")
        for row in rows:
            if self.row_re.match(row) is None:
                raise MalformedInputError(
                    f"tile {tile_id} contains characters other than '#' and '.': {row!r}"
                )
        height = len(rows)
        widths = {len(row) for row in rows}
        if widths != {height}:
            raise MalformedInputError(
                f"tile {tile_id} should be square but has {height} rows of widths {sorted(widths)}"
            )
        if height < MIN_TILE_SIZE:
            raise MalformedInputError(
                f"tile {tile_id} is {height}x{height}; tiles must be at least {MIN_TILE_SIZE}x{MIN_TILE_SIZE}"
            )
        return Tile.from_rows(tile_id, rows)

    def split_records(self, text: str) -> List[str]:
        """Split input text on blank lines, dropping empty chunks."""
        chunks = re.split(r"\n[ \t\r]*\n", text.replace("\r\n", "\n"))
        return [chunk for chunk in (c.strip() for c in chunks) if chunk]


class TileCatalog:
    """Read-only collection of tiles sharing one edge length."""

    def __init__(self, tiles: List[Tile]) -> None:
        if not tiles:
            raise MalformedInputError("no tiles were supplied")
        by_id: Dict[int, Tile] = {}
        size = tiles[0].size
        for tile in tiles:
            if tile.cells.ndim != 2 or tile.cells.shape[0] != tile.cells.shape[1]:
                raise MalformedInputError(f"tile {tile.tile_id} is not square: {tile.cells.shape}")
            if np.any((tile.cells != 0) & (tile.cells != 1)):
                raise MalformedInputError(f"tile {tile.tile_id} contains values other than 0 and 1")
            if tile.size != size:
                raise MalformedInputError(
                    f"tile {tile.tile_id} is {tile.size}x{tile.size} but tile "
                    f"{tiles[0].tile_id} is {size}x{size}"
                )
            if not 0 <= tile.tile_id <= MAX_TILE_ID:
                raise MalformedInputError(f"tile id {tile.tile_id} does not fit in a signed 64-bit integer")
            if tile.tile_id in by_id:
                raise MalformedInputError(f"tile id {tile.tile_id} appears more than once")
            by_id[tile.tile_id] = tile
        self._tiles = {tid: by_id[tid] for tid in sorted(by_id)}
        self.tile_size = size

    @classmethod
    def from_text(cls, text: str, parser: Optional[TileParser] = None) -> "TileCatalog":
        """Parse every record in `text` into a catalog."""
        parser = parser if parser is not None else TileParser()
        return cls([parser.parse_record(record) for record in parser.split_records(text)])

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._tiles

    def __getitem__(self, tile_id: int) -> Tile:
        return self._tiles[tile_id]

    @property
    def ids(self) -> List[int]:
        """Tile ids in ascending order."""
        return list(self._tiles)
