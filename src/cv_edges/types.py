from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

import numpy as np

from cv_edges.errors import EmptyImage, InvalidArgument

# (x, y): column first, like image coordinates.
Point: TypeAlias = tuple[int, int]


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _frozen(values: np.ndarray, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class GrayImage:
    """Row-major grid of (intensity, opacity) pixels.

    Both planes are (H, W) uint8 arrays, copied and made read-only on
    construction, so a stage can never alter the image it was given.
    """

    intensity: np.ndarray
    opacity: np.ndarray | None = field(default=None)

    def __post_init__(self) -> None:
        intensity = np.asarray(self.intensity)
        if intensity.ndim != 2:
            raise InvalidArgument(f"Expected intensity with shape (H, W), got {intensity.shape}.")
        if intensity.shape[0] == 0 or intensity.shape[1] == 0:
            raise EmptyImage(f"Image must be at least 1x1, got {intensity.shape}.")
        if self.opacity is None:
            opacity = np.full(intensity.shape, 255, dtype=np.uint8)
        else:
            opacity = np.asarray(self.opacity)
            if opacity.shape != intensity.shape:
                raise InvalidArgument(
                    f"Opacity shape {opacity.shape} does not match intensity shape {intensity.shape}."
                )
        object.__setattr__(self, "intensity", _frozen(intensity, np.uint8))
        object.__setattr__(self, "opacity", _frozen(opacity, np.uint8))

    @property
    def shape(self) -> tuple[int, int]:
        return self.intensity.shape  # type: ignore[return-value]

    @property
    def height(self) -> int:
        return self.intensity.shape[0]

    @property
    def width(self) -> int:
        return self.intensity.shape[1]

    def with_intensity(self, intensity: np.ndarray) -> GrayImage:
        """New image with the given intensities and this image's opacity."""
        return GrayImage(intensity, self.opacity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrayImage):
            return NotImplemented
        return np.array_equal(self.intensity, other.intensity) and np.array_equal(
            self.opacity, other.opacity
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, slots=True)
class EdgeClassification:
    image: GrayImage
    strong: frozenset[Point]
    weak: frozenset[Point]
    low: float
    high: float


@dataclass(frozen=True, slots=True)
class HysteresisResult:
    image: GrayImage
    strong: frozenset[Point]
    promoted: frozenset[Point]
