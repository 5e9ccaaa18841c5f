"""Placement solver tests."""

from __future__ import annotations

from typing import Set, Tuple

import numpy as np
import pytest

from tilejigsaw.assembler import GridAssembler
from tilejigsaw.edges import Direction, EdgeIndex
from tilejigsaw.errors import PlacementConflictError, SolverDeadlockError
from tilejigsaw.evaluator import LayoutEvaluator
from tilejigsaw.manipulation import Manipulation, all_manipulations
from tilejigsaw.solver import PlacementSolver, Position, SolverConfig, TileLayout
from tilejigsaw.tiles import Tile, TileCatalog
from tilejigsaw.utils import build_puzzle, generate_random_bitmap

TRUTH = np.array([[1, 2], [3, 4]])


def _expected_frontier(layout: TileLayout) -> Set[Tuple[Position, Direction]]:
    occupied = set(layout.positions())
    return {
        (position, direction)
        for _, position, _ in layout.items()
        for direction in Direction
        if position.neighbour(direction) not in occupied
    }


def test_solves_four_tile_fixture(four_tile_catalog: TileCatalog) -> None:
    """Tile 1 sits beside 2 and above 3, with 4 diagonally opposite."""
    layout = PlacementSolver().solve(four_tile_catalog)
    assert len(layout) == 4
    assert layout.placement_of(1) == (Position(0, 0), Manipulation.identity())
    assert layout.placement_of(2) == (Position(1, 0), Manipulation.identity())
    assert layout.placement_of(3) == (Position(0, -1), Manipulation.identity())
    assert layout.placement_of(4) == (Position(1, -1), Manipulation.identity())
    report = LayoutEvaluator(four_tile_catalog).evaluate(layout)
    assert report.consistent
    assert report.checked_edges == 4
    assert report.corner_product == 1 * 2 * 3 * 4


@pytest.mark.parametrize("seed", all_manipulations(), ids=str)
def test_seed_manipulation_transforms_whole_layout(four_tile_catalog: TileCatalog, seed: Manipulation) -> None:
    """Any seed orientation yields the same tiling, globally transformed."""
    layout = PlacementSolver(SolverConfig(seed_manipulation=seed)).solve(four_tile_catalog)
    grid = GridAssembler(four_tile_catalog).layout_grid(layout)
    np.testing.assert_array_equal(grid, seed.apply(TRUTH))
    report = LayoutEvaluator(four_tile_catalog).evaluate(layout)
    assert report.consistent
    assert report.corner_product == 24


def test_frontier_matches_exposed_sides(four_tile_catalog: TileCatalog, four_tile_index: EdgeIndex) -> None:
    """The frontier is exactly the sides facing empty cells, with their fingerprints."""
    layout = TileLayout()
    placements = [(1, Position(0, 0)), (2, Position(1, 0)), (4, Position(1, -1))]
    for tile_id, position in placements:
        layout.place(tile_id, Manipulation.identity(), position, four_tile_index.signature(tile_id, Manipulation.identity()))
        frontier = layout.frontier
        assert {(e.position, e.direction) for e in frontier} == _expected_frontier(layout)
        assert len(frontier) == len(_expected_frontier(layout))
        for edge in frontier:
            tile_id_at, manipulation = layout.tile_at(edge.position)
            assert edge.tile_id == tile_id_at
            assert edge.fingerprint == four_tile_index.signature(tile_id_at, manipulation)[edge.direction]
            assert layout.tile_at(edge.target) is None


def test_finished_layout_frontier_is_outer_boundary(four_tile_catalog: TileCatalog) -> None:
    """A solved 2x2 exposes two sides per tile."""
    layout = PlacementSolver().solve(four_tile_catalog)
    assert len(layout.frontier) == 8
    assert {(e.position, e.direction) for e in layout.frontier} == _expected_frontier(layout)


def test_place_rejects_conflicts(four_tile_index: EdgeIndex) -> None:
    """A tile cannot be placed twice and a cell cannot hold two tiles."""
    identity = Manipulation.identity()
    layout = TileLayout()
    layout.place(1, identity, Position(0, 0), four_tile_index.signature(1, identity))
    with pytest.raises(PlacementConflictError, match="already placed"):
        layout.place(1, identity, Position(5, 5), four_tile_index.signature(1, identity))
    with pytest.raises(PlacementConflictError, match="already occupied"):
        layout.place(2, identity, Position(0, 0), four_tile_index.signature(2, identity))
    assert len(layout) == 1
    assert layout.tile_at(Position(0, 0)) == (1, identity)


def test_candidates_check_every_placed_neighbour(four_tile_catalog: TileCatalog, four_tile_index: EdgeIndex) -> None:
    """A candidate must fit all neighbours, not only the one used for lookup."""
    identity = Manipulation.identity()
    layout = TileLayout()
    for tile_id, position in [(1, Position(0, 0)), (4, Position(1, -1))]:
        layout.place(tile_id, identity, position, four_tile_index.signature(tile_id, identity))
    solver = PlacementSolver()
    east_of_1 = four_tile_index.signature(1, identity)[Direction.E]
    assert solver.candidates_at(layout, four_tile_index, Position(1, 0), east_of_1) == [(2, identity)]
    # Tile 3 does not fit at (1, 0) with any orientation.
    south_of_3 = four_tile_index.signature(3, identity)[Direction.S]
    assert solver.candidates_at(layout, four_tile_index, Position(1, 0), south_of_3) == []


def test_duplicate_tile_deadlocks(four_tile_catalog: TileCatalog) -> None:
    """Two interchangeable tiles break uniqueness and must not be guessed."""
    tiles = list(four_tile_catalog) + [Tile(tile_id=5, cells=four_tile_catalog[2].cells)]
    with pytest.raises(SolverDeadlockError, match="unique candidate"):
        PlacementSolver().solve(TileCatalog(tiles))


def test_single_tile_is_trivially_solved() -> None:
    """The seed alone is a complete layout."""
    cells = np.array([[1, 1, 0], [0, 0, 0], [0, 0, 0]], dtype=np.uint8)
    catalog = TileCatalog([Tile(tile_id=17, cells=cells)])
    layout = PlacementSolver().solve(catalog)
    assert layout.placement_of(17) == (Position(0, 0), Manipulation.identity())
    assert len(layout.frontier) == 4


def test_reconstructs_scrambled_3x3_puzzle() -> None:
    """Randomly oriented tiles cut from an image are put back together."""
    composite = generate_random_bitmap(54, 54, seed=7)
    tiles, truth = build_puzzle(composite, tile_size=20, seed=11)
    catalog = TileCatalog(tiles)

    layout = PlacementSolver().solve(catalog)
    assembler = GridAssembler(catalog)
    grid = assembler.layout_grid(layout)
    image = assembler.assemble(layout)

    matches = [m for m in all_manipulations() if np.array_equal(grid, m.apply(truth))]
    assert len(matches) == 1
    np.testing.assert_array_equal(image, matches[0].apply(composite))
    assert LayoutEvaluator(catalog).evaluate(layout).consistent


def test_corner_ids_do_not_depend_on_seed() -> None:
    """Re-solving from another seed orientation keeps the same corner tiles."""
    composite = generate_random_bitmap(36, 54, seed=3)
    tiles, truth = build_puzzle(composite, tile_size=20, seed=5)
    catalog = TileCatalog(tiles)
    expected = {int(truth[0, 0]), int(truth[0, -1]), int(truth[-1, 0]), int(truth[-1, -1])}
    for seed in (Manipulation.identity(), Manipulation.from_string("R3FY")):
        layout = PlacementSolver(SolverConfig(seed_manipulation=seed)).solve(catalog)
        grid = GridAssembler(catalog).layout_grid(layout)
        assert {int(grid[0, 0]), int(grid[0, -1]), int(grid[-1, 0]), int(grid[-1, -1])} == expected
