"""The eight dihedral manipulations of a square tile."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List

import numpy as np

from .errors import MalformedInputError


class Rotation(IntEnum):
    """Counter-clockwise quarter turns."""

    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3


@dataclass(frozen=True, order=True)
class Manipulation:
    """Mirror (left-right) first, then rotate counter-clockwise.

    Ordering follows the enumeration index, so sorted candidates are
    reproducible.
    """

    mirror: bool = False
    rotation: Rotation = Rotation.R0

    @classmethod
    def from_index(cls, index: int) -> "Manipulation":
        """Decode 0..7: low two bits are the rotation, bit 2 is the mirror."""
        if not 0 <= index < 8:
            raise ValueError(f"manipulation index must be in 0..7, got {index}")
        return cls(mirror=bool(index & 0x04), rotation=Rotation(index & 0x03))

    @classmethod
    def identity(cls) -> "Manipulation":
        return cls()

    @classmethod
    def from_string(cls, text: str) -> "Manipulation":
        """Parse the compact `R<0-3>F<Y|N>` notation, e.g. `R1FY`."""
        if len(text) != 4 or text[0] != "R" or text[2] != "F":
            raise MalformedInputError(f"manipulation must look like R1FN, got {text!r}")
        if text[1] not in "0123":
            raise MalformedInputError(f"invalid rotation {text[1]!r} in {text!r}")
        if text[3] not in "YN":
            raise MalformedInputError(f"flip must be Y or N in {text!r}")
        return cls(mirror=text[3] == "Y", rotation=Rotation(int(text[1])))

    @property
    def index(self) -> int:
        return int(self.rotation) | (0x04 if self.mirror else 0)

    def inverse(self) -> "Manipulation":
        """Return the manipulation that undoes this one."""
        if self.mirror:
            # mirror-then-rotate is an involution.
            return self
        return Manipulation(mirror=False, rotation=Rotation((4 - int(self.rotation)) % 4))

    def apply(self, matrix: np.ndarray) -> np.ndarray:
        """Return a new matrix with this manipulation applied."""
        return apply_manipulation(self, matrix)

    def __str__(self) -> str:
        return f"R{int(self.rotation)}F{'Y' if self.mirror else 'N'}"


def all_manipulations() -> List[Manipulation]:
    """All eight manipulations in index order; identity first."""
    return [Manipulation.from_index(i) for i in range(8)]


def _rotate(matrix: np.ndarray, rotation: Rotation) -> np.ndarray:
    if rotation == Rotation.R0:
        return matrix
    if rotation == Rotation.R90:
        return np.rot90(matrix, 1)
    if rotation == Rotation.R180:
        return np.rot90(matrix, 2)
    if rotation == Rotation.R270:
        return np.rot90(matrix, 3)
    raise ValueError(f"Unsupported rotation: {rotation}")


def apply_manipulation(manipulation: Manipulation, matrix: np.ndarray) -> np.ndarray:
    """Mirror `matrix` left-right if requested, then rotate it counter-clockwise.

    Tiles are square; the assembled image may be any 2-D rectangle.
    """
    if matrix.ndim != 2:
        raise ValueError(f"manipulations apply to 2-D matrices, got shape {matrix.shape}")
    out = np.fliplr(matrix) if manipulation.mirror else matrix
    return _rotate(out, manipulation.rotation).copy()
