"""Benchmark solver runtime and exactness across puzzle sizes."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

import sys
import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tilejigsaw.assembler import GridAssembler
from tilejigsaw.edges import EdgeIndex
from tilejigsaw.errors import JigsawError
from tilejigsaw.manipulation import all_manipulations
from tilejigsaw.solver import PlacementSolver
from tilejigsaw.tiles import TileCatalog
from tilejigsaw.utils import build_puzzle, generate_random_bitmap


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    solved: int
    exact: int
    index_mean_sec: float
    solve_mean_sec: float
    solve_max_sec: float


@dataclass
class CaseResult:
    solved: bool
    exact: bool
    index_sec: float
    solve_sec: float


def run_case(grid_size: int, tile_size: int, seed: int) -> CaseResult:
    side = grid_size * (tile_size - 2)
    composite = generate_random_bitmap(side, side, seed=seed)
    tiles, truth = build_puzzle(composite, tile_size=tile_size, seed=seed)
    catalog = TileCatalog(tiles)

    t0 = time.perf_counter()
    index = EdgeIndex.build(catalog)
    index_sec = time.perf_counter() - t0

    t0 = time.perf_counter()
    try:
        layout = PlacementSolver().solve(catalog, index=index)
        image = GridAssembler(catalog).assemble(layout)
    except JigsawError as exc:
        print(f"{grid_size}x{grid_size} seed={seed}: {type(exc).__name__}: {exc}")
        return CaseResult(False, False, index_sec, time.perf_counter() - t0)
    solve_sec = time.perf_counter() - t0

    exact = any(np.array_equal(image, m.apply(composite)) for m in all_manipulations())
    return CaseResult(True, exact, index_sec, solve_sec)


def run_case_multi_seed(grid_size: int, tile_size: int, seeds: List[int]) -> BenchmarkRow:
    results = [run_case(grid_size, tile_size, seed) for seed in seeds]
    index_times = np.array([r.index_sec for r in results], dtype=np.float64)
    solve_times = np.array([r.solve_sec for r in results], dtype=np.float64)
    return BenchmarkRow(
        grid=f"{grid_size}x{grid_size}",
        seeds=len(seeds),
        solved=sum(r.solved for r in results),
        exact=sum(r.exact for r in results),
        index_mean_sec=float(np.mean(index_times)),
        solve_mean_sec=float(np.mean(solve_times)),
        solve_max_sec=float(np.max(solve_times)),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run tile reassembly benchmark on multiple grid sizes.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[4, 8, 12],
        help="Grid sizes to benchmark (default: 4 8 12)",
    )
    parser.add_argument("--tile-size", type=int, default=24, help="Tile edge length (default: 24)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=3,
        help="Number of seeds to evaluate per grid (default: 3)",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'Solved':>8}{'Exact':>7}"
        f"{'Index(s)':>11}{'Solve(s)':>11}{'SolveMax(s)':>13}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.solved:>8d}"
            f"{row.exact:>7d}"
            f"{row.index_mean_sec:>11.4f}"
            f"{row.solve_mean_sec:>11.4f}"
            f"{row.solve_max_sec:>13.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [run_case_multi_seed(size, args.tile_size, seeds) for size in args.sizes]
    print_table(rows)


if __name__ == "__main__":
    main()
