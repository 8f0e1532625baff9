from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from cv_edges.config import CannyConfig
from cv_edges.features.blur import gaussian_blur
from cv_edges.features.gradient import sobel
from cv_edges.features.hysteresis import track_edges
from cv_edges.features.suppression import non_maximum_suppression
from cv_edges.features.threshold import double_threshold
from cv_edges.types import EdgeClassification, GrayImage, Point

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CannyStages:
    source: GrayImage
    blurred: GrayImage
    magnitude: GrayImage
    directions: np.ndarray
    suppressed: GrayImage
    classification: EdgeClassification
    edges: GrayImage
    strong: frozenset[Point]


def run_canny(image: GrayImage, cfg: CannyConfig | None = None) -> CannyStages:
    if cfg is None:
        cfg = CannyConfig()
    cfg.validate()

    if cfg.blur:
        blurred = gaussian_blur(image, cfg.kernel_size, cfg.blur_combine)
    else:
        blurred = image
    magnitude, directions = sobel(blurred)
    suppressed = non_maximum_suppression(magnitude, directions)
    classification = double_threshold(suppressed, cfg.min_ratio, cfg.max_ratio)
    linked = track_edges(classification)

    log.info(
        "canny %dx%d: strong=%d (promoted %d), weak erased=%d",
        image.width,
        image.height,
        len(linked.strong),
        len(linked.promoted),
        len(classification.weak) - len(linked.promoted),
    )
    return CannyStages(
        source=image,
        blurred=blurred,
        magnitude=magnitude,
        directions=directions,
        suppressed=suppressed,
        classification=classification,
        edges=linked.image,
        strong=linked.strong,
    )


def canny_edge_detect(
    image: GrayImage,
    blur: bool = True,
    min_ratio: float = 0.2,
    max_ratio: float = 0.6,
) -> GrayImage:
    """Edge map of ``image``; see ``run_canny`` for the intermediate stages."""
    cfg = CannyConfig(blur=blur, min_ratio=min_ratio, max_ratio=max_ratio)
    return run_canny(image, cfg).edges
