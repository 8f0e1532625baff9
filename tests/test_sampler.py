from __future__ import annotations

import numpy as np
import pytest

from cv_edges.errors import InvalidArgument
from cv_edges.features.sampler import (
    matrix_windows,
    mirror_indices,
    sample_matrix,
    sample_vector,
    vector_windows,
)
from cv_edges.types import Axis, GrayImage


def _row() -> GrayImage:
    return GrayImage(np.array([[10, 20, 30, 40, 50]], dtype=np.uint8))


def test_mirror_indices_reflect_by_overflow_distance() -> None:
    got = mirror_indices([-2, -1, 0, 4, 5, 6], 5)
    assert got.tolist() == [2, 1, 0, 4, 3, 2]


def test_mirror_indices_single_element_axis() -> None:
    assert mirror_indices([-3, -1, 0, 1, 2], 1).tolist() == [0, 0, 0, 0, 0]


def test_column_left_of_border_reads_column_one() -> None:
    got = sample_vector(_row(), 0, 0, 3, Axis.HORIZONTAL)
    # Not column 0 (clamp) and not column 4 (wrap).
    assert got.tolist() == [20.0, 10.0, 20.0]


def test_vector_reflects_two_deep_on_both_edges() -> None:
    image = _row()
    assert sample_vector(image, 0, 0, 5, Axis.HORIZONTAL).tolist() == [30.0, 20.0, 10.0, 20.0, 30.0]
    assert sample_vector(image, 4, 0, 5, Axis.HORIZONTAL).tolist() == [30.0, 40.0, 50.0, 40.0, 30.0]


def test_vertical_vector() -> None:
    image = GrayImage(np.array([[1], [2], [3]], dtype=np.uint8))
    assert sample_vector(image, 0, 2, 3, Axis.VERTICAL).tolist() == [2.0, 3.0, 2.0]


def test_matrix_at_corner() -> None:
    values = np.arange(9, dtype=np.uint8).reshape(3, 3)
    got = sample_matrix(GrayImage(values), 0, 0, 3)
    expected = np.array([[4, 3, 4], [1, 0, 1], [4, 3, 4]], dtype=np.float64)
    assert np.array_equal(got, expected)


@pytest.mark.parametrize("length", [0, 2, 4, -1])
def test_even_or_non_positive_length_rejected(length: int) -> None:
    with pytest.raises(InvalidArgument):
        sample_vector(_row(), 0, 0, length, Axis.HORIZONTAL)
    with pytest.raises(ValueError):
        sample_matrix(_row(), 0, 0, length)


def test_windows_match_per_pixel_sampling() -> None:
    rng = np.random.default_rng(7)
    image = GrayImage(rng.integers(0, 256, size=(6, 4), dtype=np.uint8))
    horizontal = vector_windows(image.intensity, 5, Axis.HORIZONTAL)
    vertical = vector_windows(image.intensity, 5, Axis.VERTICAL)
    squares = matrix_windows(image.intensity, 3)
    assert horizontal.shape == (6, 4, 5)
    assert squares.shape == (6, 4, 3, 3)
    for y in range(image.height):
        for x in range(image.width):
            assert np.array_equal(horizontal[y, x], sample_vector(image, x, y, 5, Axis.HORIZONTAL))
            assert np.array_equal(vertical[y, x], sample_vector(image, x, y, 5, Axis.VERTICAL))
            assert np.array_equal(squares[y, x], sample_matrix(image, x, y, 3))
