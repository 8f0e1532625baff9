"""Non-maximum suppression along the quantised gradient direction."""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from cv_edges.errors import InvalidArgument
from cv_edges.types import GrayImage

log = logging.getLogger(__name__)


class GradientBin(Enum):
    """Angle range [lower, upper) in degrees and the two neighbour offsets (dx, dy).

    Members are ordered by angle; the last range also includes 90.
    """

    STEEP_NEGATIVE = (-90.0, -67.5, ((0, -1), (0, 1)))
    DIAGONAL_NEGATIVE = (-67.5, -22.5, ((1, -1), (-1, 1)))
    FLAT = (-22.5, 22.5, ((1, 0), (-1, 0)))
    DIAGONAL_POSITIVE = (22.5, 67.5, ((1, 1), (-1, -1)))
    STEEP_POSITIVE = (67.5, 90.0, ((0, 1), (0, -1)))

    def __init__(self, lower: float, upper: float, offsets: tuple[tuple[int, int], ...]) -> None:
        self.lower = lower
        self.upper = upper
        self.offsets = offsets

    @classmethod
    def classify(cls, angle: float) -> GradientBin:
        _check_angles(np.asarray(angle, dtype=np.float64))
        return _BINS[int(np.searchsorted(_LOWER_EDGES, angle, side="right"))]


_BINS = tuple(GradientBin)
# Lower bounds of every bin but the first; searchsorted then yields the bin index.
_LOWER_EDGES = np.array([b.lower for b in _BINS[1:]])
# (bin, neighbour, dx/dy)
_OFFSETS = np.array([b.offsets for b in _BINS], dtype=np.intp)


def _check_angles(directions: np.ndarray) -> None:
    lo, hi = _BINS[0].lower, _BINS[-1].upper
    in_range = (directions >= lo) & (directions <= hi)
    if not np.all(in_range):
        bad = directions[~in_range].ravel()[0]
        raise InvalidArgument(f"Gradient direction {bad} is out of range [{lo}, {hi}].")


def classify_bins(directions: np.ndarray) -> np.ndarray:
    """Bin index (position in ``GradientBin``) for every angle."""
    directions = np.asarray(directions, dtype=np.float64)
    _check_angles(directions)
    return np.searchsorted(_LOWER_EDGES, directions, side="right")


def _neighbour_values(magnitude: np.ndarray, bins: np.ndarray, which: int) -> np.ndarray:
    h, w = magnitude.shape
    ys, xs = np.indices((h, w))
    nx = xs + _OFFSETS[bins, which, 0]
    ny = ys + _OFFSETS[bins, which, 1]
    inside = (nx >= 0) & (nx < w) & (ny >= 0) & (ny < h)
    # A neighbour outside the image is replaced by the centre pixel.
    nx = np.where(inside, nx, xs)
    ny = np.where(inside, ny, ys)
    return magnitude[ny, nx]


def non_maximum_suppression(image: GrayImage, directions: np.ndarray) -> GrayImage:
    """Zero every pixel that is smaller than either neighbour along its gradient."""
    directions = np.asarray(directions)
    if directions.shape != image.shape:
        raise InvalidArgument(
            f"Direction field shape {directions.shape} does not match image shape {image.shape}."
        )
    bins = classify_bins(directions)
    magnitude = image.intensity
    p = _neighbour_values(magnitude, bins, 0)
    q = _neighbour_values(magnitude, bins, 1)
    suppressed = (p > magnitude) | (q > magnitude)
    log.debug("nms: suppressed %d of %d pixels", int(suppressed.sum()), magnitude.size)
    return image.with_intensity(np.where(suppressed, 0, magnitude))
