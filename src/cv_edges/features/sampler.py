"""Neighbourhood sampling with mirrored borders.

Every convolution stage reads pixels through this module, so the border
policy lives in one place. An index that overflows an edge by ``d`` is
reflected back by ``d`` around that edge: column -1 reads column 1,
column -2 reads column 2, column W reads column W-2. The edge pixel itself is
not repeated and nothing wraps around.
"""

from __future__ import annotations

import numpy as np

from cv_edges.errors import InvalidArgument
from cv_edges.types import Axis, GrayImage


def _check_length(length: int) -> int:
    if length < 1 or length % 2 == 0:
        raise InvalidArgument(f"Sample length must be a positive odd number, got {length}.")
    return length // 2


def mirror_indices(indices, size: int) -> np.ndarray:
    """Reflect indices into ``[0, size)`` around the first and last element."""
    idx = np.asarray(indices, dtype=np.intp)
    if size == 1:
        return np.zeros_like(idx)
    period = 2 * (size - 1)
    idx = np.abs(idx) % period
    return np.where(idx >= size, period - idx, idx)


def _offsets(length: int) -> np.ndarray:
    radius = _check_length(length)
    return np.arange(-radius, radius + 1, dtype=np.intp)


def sample_vector(image: GrayImage, x: int, y: int, length: int, axis: Axis) -> np.ndarray:
    """The ``length`` intensities centred on (x, y) along ``axis``."""
    offsets = _offsets(length)
    values = image.intensity.astype(np.float64)
    if axis is Axis.HORIZONTAL:
        cols = mirror_indices(x + offsets, image.width)
        return values[y, cols]
    rows = mirror_indices(y + offsets, image.height)
    return values[rows, x]


def sample_matrix(image: GrayImage, x: int, y: int, length: int) -> np.ndarray:
    """The ``length`` x ``length`` neighbourhood centred on (x, y)."""
    offsets = _offsets(length)
    rows = mirror_indices(y + offsets, image.height)
    cols = mirror_indices(x + offsets, image.width)
    return image.intensity.astype(np.float64)[np.ix_(rows, cols)]


def vector_windows(values: np.ndarray, length: int, axis: Axis) -> np.ndarray:
    """Every pixel's 1-D neighbourhood at once, shape (H, W, length).

    ``windows[y, x]`` equals ``sample_vector(image, x, y, length, axis)``.
    """
    offsets = _offsets(length)
    values = np.asarray(values, dtype=np.float64)
    h, w = values.shape
    if axis is Axis.HORIZONTAL:
        cols = mirror_indices(np.arange(w)[:, None] + offsets, w)  # (W, N)
        return values[:, cols]
    rows = mirror_indices(np.arange(h)[:, None] + offsets, h)  # (H, N)
    return values[rows, :].transpose(0, 2, 1)


def matrix_windows(values: np.ndarray, length: int) -> np.ndarray:
    """Every pixel's square neighbourhood at once, shape (H, W, length, length)."""
    offsets = _offsets(length)
    values = np.asarray(values, dtype=np.float64)
    h, w = values.shape
    rows = mirror_indices(np.arange(h)[:, None] + offsets, h)  # (H, N)
    cols = mirror_indices(np.arange(w)[:, None] + offsets, w)  # (W, N)
    return values[rows[:, None, :, None], cols[None, :, None, :]]
