"""Exception hierarchy for tile reconstruction failures."""

from __future__ import annotations


class JigsawError(Exception):
    """Base class for every fatal reconstruction condition."""


class MalformedInputError(JigsawError, ValueError):
    """Tile text or tile matrices do not satisfy the input format."""


class AmbiguousTileError(MalformedInputError):
    """A tile maps onto itself under a non-identity manipulation."""


class SolverDeadlockError(JigsawError, RuntimeError):
    """A full frontier scan could not commit any placement."""


class IndexInconsistencyError(JigsawError, RuntimeError):
    """An exposed edge fingerprint is missing from the edge index."""


class PlacementConflictError(JigsawError, RuntimeError):
    """A placement would put a tile twice or stack two tiles on one cell."""


class NonRectangularSolutionError(JigsawError, RuntimeError):
    """The finished layout leaves holes inside its bounding rectangle."""


class NoMotifOrientationError(JigsawError, RuntimeError):
    """No orientation of the composite image contains the motif."""
