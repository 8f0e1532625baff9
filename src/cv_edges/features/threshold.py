from __future__ import annotations

import logging

import numpy as np

from cv_edges.errors import InvalidArgument
from cv_edges.types import EdgeClassification, GrayImage, Point

log = logging.getLogger(__name__)


def validate_ratios(min_ratio: float, max_ratio: float) -> None:
    for name, value in (("min_ratio", min_ratio), ("max_ratio", max_ratio)):
        if not 0.0 < value < 1.0:
            raise InvalidArgument(f"{name} must lie in (0, 1), got {value}.")
    if min_ratio >= max_ratio:
        raise InvalidArgument(f"min_ratio ({min_ratio}) must be below max_ratio ({max_ratio}).")


def threshold_bounds(image: GrayImage, min_ratio: float, max_ratio: float) -> tuple[float, float]:
    """(low, high) thresholds as fractions of the brightest pixel."""
    validate_ratios(min_ratio, max_ratio)
    peak = float(image.intensity.max())
    return min_ratio * peak, max_ratio * peak


def mask_points(mask: np.ndarray) -> frozenset[Point]:
    ys, xs = np.nonzero(mask)
    return frozenset(zip(xs.tolist(), ys.tolist()))


def double_threshold(image: GrayImage, min_ratio: float, max_ratio: float) -> EdgeClassification:
    """Split pixels into strong (> high) and weak (low, high]; zero the rest."""
    low, high = threshold_bounds(image, min_ratio, max_ratio)
    values = image.intensity.astype(np.float64)
    strong = values > high
    weak = (values > low) & ~strong
    kept = np.where(strong | weak, image.intensity, 0)
    log.debug(
        "threshold: low=%.2f high=%.2f strong=%d weak=%d",
        low,
        high,
        int(strong.sum()),
        int(weak.sum()),
    )
    return EdgeClassification(
        image=image.with_intensity(kept),
        strong=mask_points(strong),
        weak=mask_points(weak),
        low=low,
        high=high,
    )
