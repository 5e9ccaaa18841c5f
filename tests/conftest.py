"""Shared fixtures: a hand-built 2x2 puzzle with 5x5 tiles."""

from __future__ import annotations

import pytest

from tilejigsaw.edges import EdgeIndex
from tilejigsaw.tiles import TileCatalog, TileParser

# Tile 1 is north-west, 2 north-east, 3 south-west, 4 south-east. Every
# tile has the same 3x3 interior; the twelve edges fall in distinct
# reversal classes so only the four true seams match.
FOUR_TILE_TEXT = """\
Tile 1:
....#
.##..
....#
#....
###..

Tile 2:
#..##
.##..
#...#
....#
.#..#

Tile 3:
###..
###.#
.....
#...#
#...#

Tile 4:
.#..#
###..
....#
#...#
####.
"""


@pytest.fixture
def four_tile_catalog() -> TileCatalog:
    return TileCatalog.from_text(FOUR_TILE_TEXT, TileParser())


@pytest.fixture
def four_tile_index(four_tile_catalog: TileCatalog) -> EdgeIndex:
    return EdgeIndex.build(four_tile_catalog)
