# pencildraw/pyramid.py
from typing import NamedTuple

import cv2
import numpy as np

from .utils.image_utils import resize_image, scaled_size


class PyramidLevel(NamedTuple):
    level: int
    scale: float
    image: np.ndarray
    anchors: np.ndarray


def level_scale(level: int) -> float:
    """Level 1 is full resolution; each level above halves it."""
    if level < 1:
        raise ValueError(f"Pyramid level must be >= 1, got {level}")
    return 1.0 / (2.0 ** (level - 1))


def scale_anchors(anchors: np.ndarray, scale: float, width: int, height: int) -> np.ndarray:
    """
    Scales (x, y) anchors and clips them into a width x height grid.
    Clipping only matters at the last row/column after rounding.
    """
    if len(anchors) == 0:
        return anchors.reshape(0, 2).astype(np.float32)
    zero = np.float32(0.0)
    scaled = anchors.astype(np.float32) * np.float32(scale)
    scaled[:, 0] = np.clip(scaled[:, 0], zero, np.nextafter(np.float32(width), zero))
    scaled[:, 1] = np.clip(scaled[:, 1], zero, np.nextafter(np.float32(height), zero))
    return scaled


def build_level(image: np.ndarray, anchors: np.ndarray, level: int) -> PyramidLevel:
    """Downsamples an image (cubic) and its anchors to the given pyramid level."""
    scale = level_scale(level)
    height, width = image.shape[:2]
    if level == 1:
        return PyramidLevel(level, scale, image, anchors)

    new_w, new_h = scaled_size(width, height, scale)
    resized = resize_image(image, (new_w, new_h), interpolation=cv2.INTER_CUBIC)
    return PyramidLevel(level, scale, resized, scale_anchors(anchors, scale, new_w, new_h))


def upsample_to(result: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resizes a level result back to the full-resolution extent (cubic)."""
    return resize_image(result, (width, height), interpolation=cv2.INTER_CUBIC)
