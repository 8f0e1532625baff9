from __future__ import annotations

import numpy as np

from cv_edges.config import CannyConfig
from cv_edges.errors import InvalidArgument
from cv_edges.pipelines.canny import run_canny
from cv_edges.types import GrayImage


def canny(
    gray: np.ndarray,
    min_ratio: float = 0.2,
    max_ratio: float = 0.6,
    blur: bool = True,
) -> np.ndarray:
    """Canny edge detector. Expects grayscale uint8."""
    if gray.ndim != 2:
        raise InvalidArgument("Expected grayscale image with shape (H, W).")
    if gray.dtype != np.uint8:
        raise InvalidArgument("Expected uint8 grayscale image.")
    cfg = CannyConfig(blur=blur, min_ratio=min_ratio, max_ratio=max_ratio)
    stages = run_canny(GrayImage(gray), cfg)
    return np.array(stages.edges.intensity)
