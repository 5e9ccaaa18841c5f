"""Utility helpers for reproducible tile puzzles and image output."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .manipulation import Manipulation
from .tiles import Tile


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def generate_random_bitmap(rows: int, cols: int, density: float = 0.5, seed: int = 42) -> np.ndarray:
    """Generate a 0/1 bitmap with roughly `density` set pixels."""
    rng = set_random_seed(seed)
    return (rng.random((rows, cols)) < density).astype(np.uint8)


def stamp_mask(image: np.ndarray, mask: np.ndarray, offsets: Sequence[Tuple[int, int]]) -> np.ndarray:
    """Return a copy of `image` with the mask's set pixels written at each offset."""
    out = image.copy()
    h, w = mask.shape
    for r, c in offsets:
        out[r : r + h, c : c + w] |= mask
    return out


def build_puzzle(
    composite: np.ndarray, tile_size: int, seed: int = 42
) -> Tuple[List[Tile], np.ndarray]:
    """Cut `composite` into scrambled tiles with random shared borders.

    Each tile's interior is one block of `composite`; neighbouring tiles share
    a random border row or column. Tiles are given random ids and random
    manipulations. Returns the tiles (shuffled) and the id grid, top-first.
    """
    inner = tile_size - 2
    if inner < 1:
        raise ValueError("tile_size must be at least 3")
    height, width = composite.shape
    if height % inner != 0 or width % inner != 0:
        raise ValueError("composite size must be divisible by tile_size - 2")

    rng = set_random_seed(seed)
    rows, cols = height // inner, width // inner
    step = tile_size - 1
    lattice = rng.integers(0, 2, size=(rows * step + 1, cols * step + 1), dtype=np.uint8)
    keep_rows = [i for i in range(lattice.shape[0]) if i % step != 0]
    keep_cols = [i for i in range(lattice.shape[1]) if i % step != 0]
    lattice[np.ix_(keep_rows, keep_cols)] = composite.astype(np.uint8)

    ids = rng.choice(np.arange(1000, 10000), size=rows * cols, replace=False)
    grid = ids.reshape(rows, cols).astype(np.int64)
    tiles: List[Tile] = []
    for r in range(rows):
        for c in range(cols):
            cells = lattice[r * step : r * step + tile_size, c * step : c * step + tile_size]
            manipulation = Manipulation.from_index(int(rng.integers(0, 8)))
            scrambled = manipulation.apply(cells)
            scrambled.setflags(write=False)
            tiles.append(Tile(tile_id=int(grid[r, c]), cells=scrambled))
    order = rng.permutation(len(tiles))
    return [tiles[i] for i in order], grid


def format_tiles(tiles: Sequence[Tile]) -> str:
    """Render tiles in the `Tile <id>:` text format."""
    records = []
    for tile in tiles:
        rows = ["".join("#" if v else "." for v in row) for row in tile.cells.tolist()]
        records.append("\n".join([f"Tile {tile.tile_id}:"] + rows))
    return "\n\n".join(records) + "\n"


def render_bitmap(
    image: np.ndarray,
    highlight: Optional[np.ndarray] = None,
    foreground: Tuple[int, int, int] = (20, 60, 140),
    background: Tuple[int, int, int] = (235, 240, 250),
    highlight_color: Tuple[int, int, int] = (220, 40, 40),
) -> np.ndarray:
    """Convert a 0/1 bitmap to RGB, optionally colouring highlighted pixels."""
    rgb = np.empty(image.shape + (3,), dtype=np.uint8)
    rgb[:, :] = background
    rgb[image == 1] = foreground
    if highlight is not None:
        rgb[highlight] = highlight_color
    return rgb


def save_image(path: Path, image: np.ndarray) -> None:
    """Save RGB image to disk."""
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, image.astype(np.uint8))
