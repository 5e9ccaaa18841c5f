"""Tests for the eight tile manipulations."""

from __future__ import annotations

import numpy as np
import pytest

from tilejigsaw.errors import MalformedInputError
from tilejigsaw.manipulation import (
    Manipulation,
    Rotation,
    all_manipulations,
    apply_manipulation,
)


def _matrix() -> np.ndarray:
    return np.arange(16, dtype=np.int64).reshape(4, 4)


def test_all_manipulations_order() -> None:
    """Enumeration is fixed: rotations without mirror first, identity leading."""
    manipulations = all_manipulations()
    assert len(manipulations) == 8
    assert manipulations[0] == Manipulation.identity()
    assert [m.index for m in manipulations] == list(range(8))
    assert [str(m) for m in manipulations[:5]] == ["R0FN", "R1FN", "R2FN", "R3FN", "R0FY"]
    assert manipulations == sorted(manipulations)


def test_rotation_is_counter_clockwise() -> None:
    """A quarter turn moves the top-right cell to the top-left."""
    m = np.array([[1, 2], [3, 4]])
    out = apply_manipulation(Manipulation(rotation=Rotation.R90), m)
    np.testing.assert_array_equal(out, [[2, 4], [1, 3]])


def test_mirror_applies_before_rotation() -> None:
    """Mirror then a quarter turn counter-clockwise is a transpose."""
    m = np.array([[1, 2], [3, 4]])
    out = Manipulation(mirror=True, rotation=Rotation.R90).apply(m)
    np.testing.assert_array_equal(out, m.T)


def test_manipulations_produce_distinct_matrices() -> None:
    """An asymmetric matrix has eight different images."""
    images = {m.apply(_matrix()).tobytes() for m in all_manipulations()}
    assert len(images) == 8


@pytest.mark.parametrize("manipulation", all_manipulations(), ids=str)
def test_inverse_undoes_manipulation(manipulation: Manipulation) -> None:
    """apply(inverse(m), apply(m, M)) == M."""
    m = _matrix()
    restored = manipulation.inverse().apply(manipulation.apply(m))
    np.testing.assert_array_equal(restored, m)


def test_apply_returns_new_matrix() -> None:
    """The input matrix is never modified."""
    m = _matrix()
    out = Manipulation(mirror=True).apply(m)
    out[0, 0] = -1
    assert m[0, 0] == 0


def test_rectangular_matrices_are_supported() -> None:
    """The composite image need not be square."""
    m = np.zeros((2, 5))
    assert Manipulation(rotation=Rotation.R270).apply(m).shape == (5, 2)


def test_string_form_round_trips() -> None:
    """R<k>F<Y|N> parses back to the same manipulation."""
    for manipulation in all_manipulations():
        assert Manipulation.from_string(str(manipulation)) == manipulation


@pytest.mark.parametrize("text", ["", "R4FN", "X1FN", "R1FX", "R1F", "R1FNN", "R1GN"])
def test_bad_string_form_raises(text: str) -> None:
    """Malformed manipulation strings are rejected."""
    with pytest.raises(MalformedInputError):
        Manipulation.from_string(text)


def test_from_index_range() -> None:
    """Only indices 0..7 name a manipulation."""
    with pytest.raises(ValueError):
        Manipulation.from_index(8)
