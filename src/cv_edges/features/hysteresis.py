from __future__ import annotations

import logging

import numpy as np

from cv_edges.types import EdgeClassification, HysteresisResult, Point

log = logging.getLogger(__name__)

_NEIGHBOUR_OFFSETS = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def adjacent_points(x: int, y: int, width: int, height: int) -> frozenset[Point]:
    """8-connected neighbours of (x, y) that lie inside the image.

    Unlike sampling there is no mirroring: a corner pixel has three neighbours.
    """
    return frozenset(
        (x + dx, y + dy)
        for dx, dy in _NEIGHBOUR_OFFSETS
        if 0 <= x + dx < width and 0 <= y + dy < height
    )


def _points_mask(points: frozenset[Point], shape: tuple[int, int]) -> np.ndarray:
    mask = np.zeros(shape, dtype=bool)
    if points:
        xs, ys = zip(*points)
        mask[list(ys), list(xs)] = True
    return mask


def track_edges(classification: EdgeClassification) -> HysteresisResult:
    """Promote weak pixels that touch a strong pixel; erase the other weak pixels.

    A single pass: every weak pixel is checked against the strong set as it
    came out of thresholding, so a chain of weak pixels only survives up to
    the first link next to a strong pixel. Promoted pixels keep their
    intensity.
    """
    image = classification.image
    strong = classification.strong
    promoted = frozenset(
        (x, y)
        for x, y in classification.weak
        if not adjacent_points(x, y, image.width, image.height).isdisjoint(strong)
    )
    erased = _points_mask(classification.weak - promoted, image.shape)
    edges = np.where(erased, 0, image.intensity)

    log.debug("hysteresis: promoted=%d erased=%d", len(promoted), int(erased.sum()))
    return HysteresisResult(
        image=image.with_intensity(edges),
        strong=strong | promoted,
        promoted=promoted,
    )
