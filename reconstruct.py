"""Reassemble tiles read from text and report corner product and roughness."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tilejigsaw.assembler import GridAssembler, corner_product
from tilejigsaw.edges import EdgeIndex
from tilejigsaw.errors import JigsawError, MalformedInputError
from tilejigsaw.evaluator import LayoutEvaluator
from tilejigsaw.manipulation import Manipulation
from tilejigsaw.monster import MotifScanner
from tilejigsaw.solver import PlacementSolver, SolverConfig
from tilejigsaw.tiles import TileCatalog, TileParser
from tilejigsaw.utils import render_bitmap, save_image

logger = logging.getLogger("reconstruct")


def parse_manipulation(value: str) -> Manipulation:
    """Parse manipulation value in format R<0-3>F<Y|N>, e.g. R1FN."""
    try:
        return Manipulation.from_string(value.strip().upper())
    except MalformedInputError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Reassemble square bit tiles and measure roughness.")
    parser.add_argument(
        "--input",
        default="-",
        help="Path to tile text, or '-' for standard input (default: -)",
    )
    parser.add_argument(
        "--seed-manipulation",
        type=parse_manipulation,
        default=Manipulation.identity(),
        help="Manipulation applied to the lowest-id tile before solving (default: R0FN)",
    )
    parser.add_argument(
        "--allow-symmetric",
        action="store_true",
        help="Accept tiles that are unchanged by some manipulation instead of rejecting them",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Optional output path for the composite image with motifs highlighted",
    )
    parser.add_argument("--show", action="store_true", help="Display the composite image")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser.parse_args(argv)


def read_text(source: str) -> str:
    """Read tile text from a path or standard input."""
    try:
        if source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"input is not valid UTF-8 text: {exc}") from exc


def run(args: argparse.Namespace) -> None:
    """Run the full pipeline and print the report."""
    catalog = TileCatalog.from_text(read_text(args.input), TileParser())
    config = SolverConfig(
        seed_manipulation=args.seed_manipulation,
        allow_symmetric_tiles=args.allow_symmetric,
    )
    index = EdgeIndex.build(catalog, allow_symmetric=config.allow_symmetric_tiles)
    layout = PlacementSolver(config).solve(catalog, index=index)

    assembler = GridAssembler(catalog)
    grid = assembler.layout_grid(layout)
    manipulations = assembler.manipulation_grid(layout)
    report = LayoutEvaluator(catalog).evaluate(layout)
    if not report.consistent:
        raise JigsawError(f"solved layout has {len(report.mismatched_edges)} mismatched edges")

    composite = assembler.assemble(layout)
    scanner = MotifScanner()
    result = scanner.scan(composite)

    print(f"Tiles: {len(catalog)} ({catalog.tile_size}x{catalog.tile_size})")
    print(f"Grid: {grid.shape[0]}x{grid.shape[1]}")
    print("Solved grid (tile id / manipulation):")
    for ids, manips in zip(grid.tolist(), manipulations):
        print("  " + " ".join(f"{tid}/{m}" for tid, m in zip(ids, manips)))
    print(f"Corner product: {corner_product(grid)}")
    print(f"Composite image: {composite.shape[0]}x{composite.shape[1]}")
    print(f"Motif orientation: {result.manipulation}")
    print(f"Motif occurrences: {result.occurrence_count}")
    print(f"Roughness: {result.roughness}")

    if args.output is None and not args.show:
        return
    image = render_bitmap(result.image, highlight=scanner.motif_pixels(result.image, result.occurrences))
    if args.output is not None:
        output_path = Path(args.output)
        save_image(output_path, image)
        print(f"Output image: {output_path.resolve()}")
    if args.show:
        import matplotlib.pyplot as plt

        plt.imshow(image)
        plt.title(f"{result.occurrence_count} motifs, roughness {result.roughness}")
        plt.axis("off")
        plt.tight_layout()
        plt.show()


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit status."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except (JigsawError, OSError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
