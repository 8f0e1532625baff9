from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from cv_edges.errors import InvalidArgument
from cv_edges.features.kernels import binomial_kernel
from cv_edges.features.sampler import vector_windows
from cv_edges.types import Axis, GrayImage

log = logging.getLogger(__name__)


class BlurCombine(str, Enum):
    """How the horizontal and vertical kernel passes are joined."""

    # Horizontal pass, then vertical pass over its unrounded result.
    SEPARABLE = "separable"
    # Both passes over the input, joined as sqrt(h**2 + v**2). Brightens
    # flat regions by up to sqrt(2).
    MAGNITUDE = "magnitude"


def parse_combine(value: BlurCombine | str) -> BlurCombine:
    try:
        return BlurCombine(value)
    except ValueError as exc:
        choices = ", ".join(c.value for c in BlurCombine)
        raise InvalidArgument(f"Unknown blur combine {value!r}; expected one of: {choices}.") from exc


def to_uint8(values: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] and truncate toward zero."""
    return np.clip(values, 0.0, 255.0).astype(np.uint8)


def gaussian_blur(
    image: GrayImage,
    kernel_size: int = 5,
    combine: BlurCombine | str = BlurCombine.SEPARABLE,
) -> GrayImage:
    combine = parse_combine(combine)
    kernel = binomial_kernel(kernel_size)
    values = image.intensity.astype(np.float64)

    horizontal = vector_windows(values, kernel.size, Axis.HORIZONTAL) @ kernel
    if combine is BlurCombine.SEPARABLE:
        blurred = vector_windows(horizontal, kernel.size, Axis.VERTICAL) @ kernel
    else:
        vertical = vector_windows(values, kernel.size, Axis.VERTICAL) @ kernel
        blurred = np.sqrt(horizontal**2 + vertical**2)

    log.debug("blur: kernel=%d combine=%s shape=%s", kernel_size, combine.value, image.shape)
    return image.with_intensity(to_uint8(blurred))
