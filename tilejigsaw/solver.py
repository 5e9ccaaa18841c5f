"""Frontier-driven placement of tiles into a single consistent layout."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .edges import Direction, EdgeIndex, Signature
from .errors import PlacementConflictError, SolverDeadlockError
from .manipulation import Manipulation
from .tiles import TileCatalog

logger = logging.getLogger(__name__)

Candidate = Tuple[int, Manipulation]


@dataclass
class SolverConfig:
    """Configuration for the placement solver."""

    seed_manipulation: Manipulation = field(default_factory=Manipulation.identity)
    allow_symmetric_tiles: bool = False


@dataclass(frozen=True, order=True)
class Position:
    """A cell of the unbounded layout plane; +y is north, +x is east."""

    x: int
    y: int

    def neighbour(self, direction: Direction) -> "Position":
        dx, dy = direction.step()
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True)
class ExposedEdge:
    """Side of a placed tile facing an unoccupied cell."""

    position: Position
    direction: Direction
    fingerprint: int
    tile_id: int

    @property
    def target(self) -> Position:
        return self.position.neighbour(self.direction)


class TileLayout:
    """Placed tiles keyed both ways, plus the current frontier.

    `place` is the only mutator, so the two mappings stay mutual inverses
    and the frontier always equals the exposed sides of placed tiles.
    """

    def __init__(self) -> None:
        self._placements: Dict[int, Tuple[Position, Manipulation]] = {}
        self._occupants: Dict[Position, int] = {}
        self._frontier: List[ExposedEdge] = []

    def place(
        self, tile_id: int, manipulation: Manipulation, position: Position, signature: Signature
    ) -> None:
        """Put a tile variant at `position` and refresh the frontier."""
        if tile_id in self._placements:
            raise PlacementConflictError(
                f"tile {tile_id} is already placed at {self._placements[tile_id][0]}"
            )
        if position in self._occupants:
            raise PlacementConflictError(
                f"position {position} is already occupied by tile {self._occupants[position]}"
            )
        self._placements[tile_id] = (position, manipulation)
        self._occupants[position] = tile_id

        self._frontier = [edge for edge in self._frontier if edge.target != position]
        for direction in Direction:
            if position.neighbour(direction) not in self._occupants:
                self._frontier.append(
                    ExposedEdge(position, direction, signature[direction], tile_id)
                )

    def placement_of(self, tile_id: int) -> Optional[Tuple[Position, Manipulation]]:
        return self._placements.get(tile_id)

    def tile_at(self, position: Position) -> Optional[Candidate]:
        tile_id = self._occupants.get(position)
        if tile_id is None:
            return None
        return tile_id, self._placements[tile_id][1]

    @property
    def frontier(self) -> List[ExposedEdge]:
        return list(self._frontier)

    def positions(self) -> List[Position]:
        return list(self._occupants)

    def items(self) -> Iterator[Tuple[int, Position, Manipulation]]:
        for tile_id, (position, manipulation) in self._placements.items():
            yield tile_id, position, manipulation

    def bounds(self) -> Tuple[int, int, int, int]:
        """Return (min_x, max_x, min_y, max_y) of occupied cells."""
        if not self._occupants:
            raise ValueError("layout is empty")
        xs = [p.x for p in self._occupants]
        ys = [p.y for p in self._occupants]
        return min(xs), max(xs), min(ys), max(ys)

    def __len__(self) -> int:
        return len(self._placements)

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._placements


class PlacementSolver:
    """Place every tile by repeatedly committing uniquely determined cells."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config if config is not None else SolverConfig()

    def solve(self, catalog: TileCatalog, index: Optional[EdgeIndex] = None) -> TileLayout:
        """Return a layout holding every tile of `catalog`."""
        if index is None:
            index = EdgeIndex.build(catalog, allow_symmetric=self.config.allow_symmetric_tiles)

        layout = TileLayout()
        unplaced: Set[int] = set(catalog.ids)

        seed_id = catalog.ids[0]
        seed_manipulation = index.canonical(seed_id, self.config.seed_manipulation)
        self._place(layout, index, unplaced, seed_id, seed_manipulation, Position(0, 0))

        while unplaced:
            logger.debug("%d/%d tiles left to place", len(unplaced), len(catalog))
            if not self._scan(layout, index, unplaced):
                pending = {str(edge.target) for edge in layout.frontier}
                raise SolverDeadlockError(
                    f"no cell has a unique candidate; {len(unplaced)} tiles unplaced, "
                    f"{len(pending)} open cells"
                )

        logger.info("placed all %d tiles", len(layout))
        return layout

    def _scan(self, layout: TileLayout, index: EdgeIndex, unplaced: Set[int]) -> bool:
        """Commit the first open cell with exactly one candidate."""
        visited: Set[Position] = set()
        for edge in layout.frontier:
            target = edge.target
            if target in visited:
                continue
            visited.add(target)

            candidates = self.candidates_at(layout, index, target, edge.fingerprint)
            if len(candidates) == 1:
                tile_id, manipulation = candidates[0]
                self._place(layout, index, unplaced, tile_id, manipulation, target)
                return True
            if candidates:
                logger.debug("deferring %s: %d candidates", target, len(candidates))
        return False

    def candidates_at(
        self, layout: TileLayout, index: EdgeIndex, position: Position, fingerprint: int
    ) -> List[Candidate]:
        """Unplaced variants exposing `fingerprint` that fit every placed neighbour of `position`."""
        found: List[Candidate] = []
        for entry in index.lookup(fingerprint):
            if entry.tile_id in layout:
                continue
            candidate = (entry.tile_id, entry.manipulation)
            if candidate in found:
                continue
            if self._fits(layout, index, position, index.signature(*candidate)):
                found.append(candidate)
        return found

    @staticmethod
    def _fits(layout: TileLayout, index: EdgeIndex, position: Position, signature: Signature) -> bool:
        for direction in Direction:
            neighbour = layout.tile_at(position.neighbour(direction))
            if neighbour is None:
                continue
            facing = index.signature(*neighbour)[direction.opposite()]
            if signature[direction] != facing:
                return False
        return True

    @staticmethod
    def _place(
        layout: TileLayout,
        index: EdgeIndex,
        unplaced: Set[int],
        tile_id: int,
        manipulation: Manipulation,
        position: Position,
    ) -> None:
        if tile_id not in unplaced:
            raise PlacementConflictError(f"tile {tile_id} is not waiting to be placed")
        layout.place(tile_id, manipulation, position, index.signature(tile_id, manipulation))
        unplaced.remove(tile_id)
        logger.debug("placed tile %d (%s) at %s", tile_id, manipulation, position)
