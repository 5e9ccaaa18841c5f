"""Edge fingerprints and the fingerprint index over all tile variants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import AmbiguousTileError, IndexInconsistencyError
from .manipulation import Manipulation, all_manipulations
from .tiles import TileCatalog

logger = logging.getLogger(__name__)

Signature = Tuple[int, int, int, int]


class Direction(IntEnum):
    """Sides of a tile; +y is north and +x is east."""

    N = 0
    E = 1
    S = 2
    W = 3

    def opposite(self) -> "Direction":
        if self == Direction.N:
            return Direction.S
        if self == Direction.E:
            return Direction.W
        if self == Direction.S:
            return Direction.N
        if self == Direction.W:
            return Direction.E
        raise ValueError(f"Unsupported direction: {self}")

    def step(self) -> Tuple[int, int]:
        """Unit (dx, dy) offset towards the neighbour on this side."""
        if self == Direction.N:
            return 0, 1
        if self == Direction.E:
            return 1, 0
        if self == Direction.S:
            return 0, -1
        if self == Direction.W:
            return -1, 0
        raise ValueError(f"Unsupported direction: {self}")


def _edge_cells(matrix: np.ndarray, direction: Direction) -> np.ndarray:
    # N/S read left-to-right, E/W read top-to-bottom.
    if direction == Direction.N:
        return matrix[0, :]
    if direction == Direction.E:
        return matrix[:, -1]
    if direction == Direction.S:
        return matrix[-1, :]
    if direction == Direction.W:
        return matrix[:, 0]
    raise ValueError(f"Unsupported direction: {direction}")


def edge_fingerprint(matrix: np.ndarray, direction: Direction) -> int:
    """Encode one border as an integer, first cell in the most significant bit.

    Both tiles sharing a seam read it in the same order, so two opposing
    edges match exactly when their fingerprints are equal.
    """
    bits = 0
    for cell in _edge_cells(matrix, direction).tolist():
        bits = (bits << 1) | int(cell)
    return bits


def edge_signature(matrix: np.ndarray) -> Signature:
    """Fingerprints of all four sides, indexed by `Direction`."""
    return (
        edge_fingerprint(matrix, Direction.N),
        edge_fingerprint(matrix, Direction.E),
        edge_fingerprint(matrix, Direction.S),
        edge_fingerprint(matrix, Direction.W),
    )


@dataclass(frozen=True)
class IndexEntry:
    """One (tile, manipulation) variant exposing a fingerprint on `direction`."""

    tile_id: int
    manipulation: Manipulation
    direction: Direction


class EdgeIndex:
    """Map every edge fingerprint to the tile variants that expose it."""

    def __init__(
        self,
        entries: Dict[int, List[IndexEntry]],
        signatures: Dict[Tuple[int, Manipulation], Signature],
        aliases: Optional[Dict[Tuple[int, Manipulation], Manipulation]] = None,
    ) -> None:
        self._entries = entries
        self._signatures = signatures
        self._aliases = aliases or {}

    @classmethod
    def build(cls, catalog: TileCatalog, allow_symmetric: bool = False) -> "EdgeIndex":
        """Index the four edges of all eight variants of every tile.

        A tile whose variants are not pairwise distinct is rejected unless
        `allow_symmetric` is set, in which case only the first manipulation
        (in enumeration order) producing each distinct matrix is indexed.
        """
        entries: Dict[int, List[IndexEntry]] = {}
        signatures: Dict[Tuple[int, Manipulation], Signature] = {}
        aliases: Dict[Tuple[int, Manipulation], Manipulation] = {}
        manipulations = all_manipulations()

        for tile in catalog:
            seen: Dict[bytes, Manipulation] = {}
            for manipulation in manipulations:
                variant = manipulation.apply(tile.cells)
                key = variant.tobytes()
                if key in seen:
                    if not allow_symmetric:
                        raise AmbiguousTileError(
                            f"tile {tile.tile_id} is unchanged between manipulations "
                            f"{seen[key]} and {manipulation}"
                        )
                    logger.warning(
                        "tile %d: %s duplicates %s, keeping the former",
                        tile.tile_id, manipulation, seen[key],
                    )
                    aliases[(tile.tile_id, manipulation)] = seen[key]
                    continue
                seen[key] = manipulation

                signature = edge_signature(variant)
                signatures[(tile.tile_id, manipulation)] = signature
                for direction in Direction:
                    entries.setdefault(signature[direction], []).append(
                        IndexEntry(tile.tile_id, manipulation, direction)
                    )

        logger.info(
            "indexed %d tiles: %d variants, %d distinct fingerprints",
            len(catalog), len(signatures), len(entries),
        )
        return cls(entries, signatures, aliases)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries

    def fingerprints(self) -> List[int]:
        return sorted(self._entries)

    def lookup(self, fingerprint: int) -> List[IndexEntry]:
        """Entries exposing `fingerprint` on any side, ordered by tile then manipulation."""
        try:
            return self._entries[fingerprint]
        except KeyError as exc:
            raise IndexInconsistencyError(
                f"edge fingerprint {fingerprint:b} is missing from the edge index"
            ) from exc

    def signature(self, tile_id: int, manipulation: Manipulation) -> Signature:
        """Edge fingerprints (N, E, S, W) of one indexed variant."""
        try:
            return self._signatures[(tile_id, manipulation)]
        except KeyError as exc:
            raise IndexInconsistencyError(
                f"tile {tile_id} with manipulation {manipulation} is not indexed"
            ) from exc

    def variants(self, tile_id: int) -> List[Manipulation]:
        """Indexed manipulations of one tile."""
        return [m for (tid, m) in self._signatures if tid == tile_id]

    def canonical(self, tile_id: int, manipulation: Manipulation) -> Manipulation:
        """The indexed manipulation producing the same matrix as `manipulation`."""
        return self._aliases.get((tile_id, manipulation), manipulation)
