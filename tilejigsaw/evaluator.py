"""Consistency checks for finished layouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .assembler import GridAssembler, corner_product
from .edges import Direction, edge_fingerprint
from .solver import Position, TileLayout
from .tiles import TileCatalog


@dataclass
class LayoutReport:
    """Summary of a solved layout."""

    rows: int
    cols: int
    tile_count: int
    corner_product: int
    checked_edges: int
    mismatched_edges: List[Tuple[Position, Direction]] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        return not self.mismatched_edges


class LayoutEvaluator:
    """Verify shared edges directly from manipulated tile matrices."""

    def __init__(self, catalog: TileCatalog) -> None:
        self.catalog = catalog
        self.assembler = GridAssembler(catalog)

    def mismatched_edges(self, layout: TileLayout) -> Tuple[int, List[Tuple[Position, Direction]]]:
        """Count east/north seams and list those whose two sides differ."""
        checked = 0
        mismatched: List[Tuple[Position, Direction]] = []
        for tile_id, position, manipulation in sorted(layout.items(), key=lambda item: item[1]):
            cells = manipulation.apply(self.catalog[tile_id].cells)
            for direction in (Direction.N, Direction.E):
                neighbour = layout.tile_at(position.neighbour(direction))
                if neighbour is None:
                    continue
                other_id, other_manipulation = neighbour
                other = other_manipulation.apply(self.catalog[other_id].cells)
                checked += 1
                if edge_fingerprint(cells, direction) != edge_fingerprint(other, direction.opposite()):
                    mismatched.append((position, direction))
        return checked, mismatched

    def evaluate(self, layout: TileLayout) -> LayoutReport:
        grid = self.assembler.layout_grid(layout)
        checked, mismatched = self.mismatched_edges(layout)
        return LayoutReport(
            rows=int(grid.shape[0]),
            cols=int(grid.shape[1]),
            tile_count=len(layout),
            corner_product=corner_product(grid),
            checked_edges=checked,
            mismatched_edges=mismatched,
        )
