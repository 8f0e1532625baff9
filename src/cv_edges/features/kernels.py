from __future__ import annotations

from math import comb

import numpy as np

from cv_edges.errors import InvalidArgument

SOBEL_X = np.array(
    [
        [1.0, 0.0, -1.0],
        [2.0, 0.0, -2.0],
        [1.0, 0.0, -1.0],
    ]
)
SOBEL_Y = np.array(
    [
        [1.0, 2.0, 1.0],
        [0.0, 0.0, 0.0],
        [-1.0, -2.0, -1.0],
    ]
)
SOBEL_X.setflags(write=False)
SOBEL_Y.setflags(write=False)


def pascal_row(index: int) -> np.ndarray:
    """Row ``index`` of Pascal's triangle (row 0 is [1])."""
    if index < 0:
        raise InvalidArgument(f"Pascal row index must be >= 0, got {index}.")
    return np.array([comb(index, i) for i in range(index + 1)], dtype=np.float64)


def binomial_kernel(length: int) -> np.ndarray:
    """Discrete Gaussian of odd ``length``: Pascal row ``length - 1`` scaled to sum 1."""
    if length < 1 or length % 2 == 0:
        raise InvalidArgument(f"Kernel length must be a positive odd number, got {length}.")
    row = pascal_row(length - 1)
    kernel = row / row.sum()
    kernel.setflags(write=False)
    return kernel
