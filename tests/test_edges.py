import numpy as np
import pytest

from cv_edges.features.edges import canny


def test_canny_output_shape():
    gray = np.zeros((64, 64), dtype=np.uint8)
    edges = canny(gray)
    assert edges.shape == gray.shape
    assert edges.dtype == np.uint8
    assert edges.max() == 0


def test_canny_finds_vertical_edge():
    gray = np.zeros((16, 16), dtype=np.uint8)
    gray[:, 8:] = 220
    edges = canny(gray, blur=False)
    assert edges[:, 7:9].max() > 0
    assert edges[:, :5].max() == 0
    assert edges[:, 12:].max() == 0
    edges[0, 0] = 1  # caller owns a writable copy


def test_canny_rejects_color_and_float():
    with pytest.raises(ValueError):
        canny(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        canny(np.zeros((4, 4), dtype=np.float32))
