"""Motif search over every orientation of the composite image."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import NoMotifOrientationError
from .manipulation import Manipulation, all_manipulations

logger = logging.getLogger(__name__)

SEA_MONSTER_ROWS = (
    "                  # ",
    "#    ##    ##    ###",
    " #  #  #  #  #  #   ",
)


def parse_mask(rows: Sequence[str]) -> np.ndarray:
    """Build a mask from text rows: `#` is required, anything else is don't-care."""
    if not rows:
        raise ValueError("mask must have at least one row")
    width = max(len(row) for row in rows)
    mask = np.zeros((len(rows), width), dtype=np.uint8)
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            if ch == "#":
                mask[r, c] = 1
    return mask


SEA_MONSTER = parse_mask(SEA_MONSTER_ROWS)


@dataclass
class ScanResult:
    """Outcome of scanning all orientations of a composite image."""

    manipulation: Manipulation
    image: np.ndarray
    occurrences: List[Tuple[int, int]]
    counts: Dict[Manipulation, int]
    roughness: int

    @property
    def occurrence_count(self) -> int:
        return len(self.occurrences)


class MotifScanner:
    """Find a fixed mask in a bitmap under the eight dihedral orientations."""

    def __init__(self, mask: Optional[np.ndarray] = None) -> None:
        mask = SEA_MONSTER if mask is None else np.asarray(mask, dtype=np.uint8)
        if mask.ndim != 2:
            raise ValueError(f"mask must be 2-D, got shape {mask.shape}")
        self.mask = mask
        self.required = mask == 1
        self.weight = int(np.count_nonzero(self.required))
        if self.weight == 0:
            raise ValueError("mask must have at least one required pixel")

    def find(self, image: np.ndarray) -> List[Tuple[int, int]]:
        """Top-left offsets of every (possibly overlapping) occurrence, row-major."""
        h, w = self.mask.shape
        if image.shape[0] < h or image.shape[1] < w:
            return []
        windows = sliding_window_view(image, (h, w))
        hits = np.all(windows[:, :, self.required] == 1, axis=-1)
        return [(int(r), int(c)) for r, c in np.argwhere(hits)]

    def count(self, image: np.ndarray) -> int:
        return len(self.find(image))

    def roughness(self, image: np.ndarray, occurrences: int) -> int:
        """Set pixels not attributed to motif occurrences."""
        return int(np.count_nonzero(image)) - occurrences * self.weight

    def motif_pixels(self, image: np.ndarray, occurrences: List[Tuple[int, int]]) -> np.ndarray:
        """Boolean map of pixels covered by any occurrence."""
        covered = np.zeros(image.shape, dtype=bool)
        h, w = self.mask.shape
        for r, c in occurrences:
            covered[r : r + h, c : c + w] |= self.required
        return covered

    def scan(self, image: np.ndarray) -> ScanResult:
        """Try all orientations and score the one that contains the motif."""
        counts: Dict[Manipulation, int] = {}
        best: Optional[Tuple[Manipulation, np.ndarray, List[Tuple[int, int]]]] = None
        for manipulation in all_manipulations():
            oriented = manipulation.apply(image)
            occurrences = self.find(oriented)
            counts[manipulation] = len(occurrences)
            logger.debug("orientation %s: %d occurrences", manipulation, len(occurrences))
            if occurrences and (best is None or len(occurrences) > len(best[2])):
                best = (manipulation, oriented, occurrences)

        if best is None:
            raise NoMotifOrientationError(
                f"no orientation of the {image.shape[0]}x{image.shape[1]} image contains the motif"
            )
        matching = [str(m) for m, n in counts.items() if n]
        if len(matching) > 1:
            logger.warning("motif found in %d orientations: %s", len(matching), ", ".join(matching))

        manipulation, oriented, occurrences = best
        roughness = self.roughness(oriented, len(occurrences))
        logger.info(
            "orientation %s has %d occurrences, roughness %d",
            manipulation, len(occurrences), roughness,
        )
        return ScanResult(
            manipulation=manipulation,
            image=oriented,
            occurrences=occurrences,
            counts=counts,
            roughness=roughness,
        )
