"""Stitch a solved layout into one composite bitmap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .errors import NonRectangularSolutionError
from .manipulation import Manipulation
from .solver import Position, TileLayout
from .tiles import TileCatalog


@dataclass(frozen=True)
class LayoutBounds:
    """Inclusive bounding rectangle of occupied cells."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def cols(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def rows(self) -> int:
        return self.max_y - self.min_y + 1

    def position(self, row: int, col: int) -> Position:
        """Map a top-first grid cell to its layout position."""
        return Position(self.min_x + col, self.max_y - row)


class GridAssembler:
    """Compose tile interiors in layout order, north row first."""

    def __init__(self, catalog: TileCatalog) -> None:
        self.catalog = catalog

    def bounds(self, layout: TileLayout) -> LayoutBounds:
        """Return the bounding rectangle, failing if it has holes."""
        min_x, max_x, min_y, max_y = layout.bounds()
        bounds = LayoutBounds(min_x, max_x, min_y, max_y)
        missing = [
            str(bounds.position(r, c))
            for r in range(bounds.rows)
            for c in range(bounds.cols)
            if layout.tile_at(bounds.position(r, c)) is None
        ]
        if missing:
            raise NonRectangularSolutionError(
                f"layout spans {bounds.cols}x{bounds.rows} cells but {len(missing)} are empty: "
                + ", ".join(missing[:8])
            )
        return bounds

    def layout_grid(self, layout: TileLayout) -> np.ndarray:
        """Tile ids arranged top-first, shape (rows, cols)."""
        bounds = self.bounds(layout)
        grid = np.zeros((bounds.rows, bounds.cols), dtype=np.int64)
        for r in range(bounds.rows):
            for c in range(bounds.cols):
                tile_id, _ = layout.tile_at(bounds.position(r, c))
                grid[r, c] = tile_id
        return grid

    def manipulation_grid(self, layout: TileLayout) -> List[List[Manipulation]]:
        """Manipulations arranged like `layout_grid`."""
        bounds = self.bounds(layout)
        return [
            [layout.tile_at(bounds.position(r, c))[1] for c in range(bounds.cols)]
            for r in range(bounds.rows)
        ]

    def assemble(self, layout: TileLayout) -> np.ndarray:
        """Strip every tile's border and paste the interiors into one bitmap."""
        bounds = self.bounds(layout)
        inner = self.catalog.tile_size - 2
        canvas = np.zeros((bounds.rows * inner, bounds.cols * inner), dtype=np.uint8)
        for r in range(bounds.rows):
            for c in range(bounds.cols):
                tile_id, manipulation = layout.tile_at(bounds.position(r, c))
                cells = manipulation.apply(self.catalog[tile_id].cells)
                y0 = r * inner
                x0 = c * inner
                canvas[y0 : y0 + inner, x0 : x0 + inner] = cells[1:-1, 1:-1]
        return canvas


def corner_product(grid: np.ndarray) -> int:
    """Product of the ids in the four corner cells of a layout grid."""
    corners = [grid[0, 0], grid[0, -1], grid[-1, 0], grid[-1, -1]]
    product = 1
    for tile_id in corners:
        product *= int(tile_id)
    return product
