from __future__ import annotations

import logging

import numpy as np

from cv_edges.features.blur import to_uint8
from cv_edges.features.kernels import SOBEL_X, SOBEL_Y
from cv_edges.features.sampler import matrix_windows
from cv_edges.types import GrayImage

log = logging.getLogger(__name__)


def gradient_components(image: GrayImage) -> tuple[np.ndarray, np.ndarray]:
    """Per-pixel (Gx, Gy): each 3x3 mirrored neighbourhood times the Sobel kernels."""
    windows = matrix_windows(image.intensity, 3)
    gx = np.einsum("hwij,ij->hw", windows, SOBEL_X)
    gy = np.einsum("hwij,ij->hw", windows, SOBEL_Y)
    return gx, gy


def gradient_directions(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """atan(Gy / Gx) in degrees, within [-90, 90].

    Defined as 0 wherever either component is exactly 0, so a purely vertical
    gradient (Gx == 0) lands in the horizontal bin. This is not atan2.
    """
    defined = (gx != 0) & (gy != 0)
    ratio = np.divide(gy, gx, out=np.zeros_like(gy, dtype=np.float64), where=defined)
    angles = np.degrees(np.arctan(ratio))
    angles = np.clip(angles, -90.0, 90.0)
    angles.setflags(write=False)
    return angles


def sobel(image: GrayImage) -> tuple[GrayImage, np.ndarray]:
    """Gradient magnitude image and the matching direction field."""
    gx, gy = gradient_components(image)
    magnitude = to_uint8(np.sqrt(gx**2 + gy**2))
    directions = gradient_directions(gx, gy)
    log.debug("sobel: max magnitude=%d", int(magnitude.max()))
    return image.with_intensity(magnitude), directions
