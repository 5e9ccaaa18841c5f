"""Reassemble square bit tiles and search the image for a motif."""

from .assembler import GridAssembler, LayoutBounds, corner_product
from .edges import Direction, EdgeIndex, IndexEntry, edge_fingerprint, edge_signature
from .errors import (
    AmbiguousTileError,
    IndexInconsistencyError,
    JigsawError,
    MalformedInputError,
    NoMotifOrientationError,
    NonRectangularSolutionError,
    PlacementConflictError,
    SolverDeadlockError,
)
from .evaluator import LayoutEvaluator, LayoutReport
from .manipulation import Manipulation, Rotation, all_manipulations, apply_manipulation
from .monster import SEA_MONSTER, MotifScanner, ScanResult, parse_mask
from .solver import ExposedEdge, PlacementSolver, Position, SolverConfig, TileLayout
from .tiles import Tile, TileCatalog, TileParser

__all__ = [
    "Tile",
    "TileParser",
    "TileCatalog",
    "Rotation",
    "Manipulation",
    "all_manipulations",
    "apply_manipulation",
    "Direction",
    "IndexEntry",
    "EdgeIndex",
    "edge_fingerprint",
    "edge_signature",
    "Position",
    "ExposedEdge",
    "TileLayout",
    "SolverConfig",
    "PlacementSolver",
    "LayoutBounds",
    "GridAssembler",
    "corner_product",
    "SEA_MONSTER",
    "parse_mask",
    "ScanResult",
    "MotifScanner",
    "LayoutReport",
    "LayoutEvaluator",
    "JigsawError",
    "MalformedInputError",
    "AmbiguousTileError",
    "SolverDeadlockError",
    "IndexInconsistencyError",
    "PlacementConflictError",
    "NonRectangularSolutionError",
    "NoMotifOrientationError",
]
