from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from cv_edges.errors import InvalidArgument
from cv_edges.types import GrayImage

log = logging.getLogger(__name__)

JPEG_QUALITY = 95


def read_bgr(path: str | Path) -> np.ndarray:
    """Read an image as stored (gray, BGR or BGRA). Raises if not found/unreadable."""
    path = Path(path)
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    return img


def to_gray(bgr: np.ndarray) -> np.ndarray:
    """Convert BGR uint8 image to grayscale uint8."""
    if bgr.ndim != 3 or bgr.shape[2] != 3:
        raise ValueError("Expected BGR image with shape (H, W, 3).")
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2GRAY)


def _to_uint8(img: np.ndarray) -> np.ndarray:
    if img.dtype == np.uint8:
        return img
    if img.dtype == np.uint16:
        return (img >> 8).astype(np.uint8)
    raise InvalidArgument(f"Unsupported image depth: {img.dtype}")


def split_gray_alpha(img: np.ndarray) -> GrayImage:
    """Luma and opacity planes from a decoded gray, BGR or BGRA array."""
    img = _to_uint8(img)
    if img.ndim == 2:
        return GrayImage(img)
    channels = img.shape[2]
    if channels == 1:
        return GrayImage(img[:, :, 0])
    if channels == 3:
        return GrayImage(to_gray(img))
    if channels == 4:
        gray = cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
        return GrayImage(gray, img[:, :, 3])
    raise InvalidArgument(f"Unsupported channel count: {channels}")


def read_gray(path: str | Path) -> GrayImage:
    image = split_gray_alpha(read_bgr(path))
    log.debug("read %s (%dx%d)", path, image.width, image.height)
    return image


def write_gray(image: GrayImage, path: str | Path) -> None:
    """Save to disk. PNG keeps opacity as alpha; other formats store gray only."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".png":
        gray = image.intensity
        payload = np.dstack([gray, gray, gray, image.opacity])
        ok = cv2.imwrite(str(path), payload)
    else:
        ok = cv2.imwrite(str(path), image.intensity, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
    if not ok:
        raise RuntimeError(f"Failed to write image to {path}")
    log.debug("wrote %s", path)
