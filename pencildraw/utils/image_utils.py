# pencildraw/utils/image_utils.py
from typing import Tuple

import cv2
import numpy as np


def validate_image(image: np.ndarray, name: str = "image") -> None:
    """Raises ValueError unless `image` is a non-empty, finite (H, W) or (H, W, C) array."""
    if not isinstance(image, np.ndarray):
        raise ValueError(f"{name} must be a numpy array, got {type(image).__name__}")
    if image.ndim not in (2, 3):
        raise ValueError(f"{name} must be 2D or 3D, got shape {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"{name} is empty: shape {image.shape}")
    if image.ndim == 3 and image.shape[2] == 0:
        raise ValueError(f"{name} has zero channels")
    if np.issubdtype(image.dtype, np.inexact) and not np.isfinite(image).all():
        raise ValueError(f"{name} contains NaN or Inf values")


def num_channels(image: np.ndarray) -> int:
    return 1 if image.ndim == 2 else image.shape[2]


def to_float_image(image: np.ndarray) -> np.ndarray:
    """8-bit images are scaled to [0, 1]; anything else is cast to float32 as-is."""
    validate_image(image)
    if image.dtype == np.uint8:
        return image.astype(np.float32) / 255.0
    return image.astype(np.float32)


def to_uint8(image: np.ndarray) -> np.ndarray:
    if image.dtype == np.uint8:
        return image
    return np.clip(image * 255.0 + 0.5, 0, 255).astype(np.uint8)


def to_gray(image: np.ndarray) -> np.ndarray:
    """BGR (or BGRA) float image -> single channel. Gray input is returned as a copy."""
    c = num_channels(image)
    if c == 1:
        return image.reshape(image.shape[:2]).astype(np.float32)
    if c == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if c == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    # Arbitrary channel counts: plain mean
    return image.mean(axis=2).astype(np.float32)


def bilateral_smooth(
    image: np.ndarray, diameter: int, sigma_color: float, sigma_space: float
) -> np.ndarray:
    """
    Edge-preserving smoothing of a float image, channel layout preserved.

    cv2.bilateralFilter only accepts 1 or 3 channels, so other channel counts
    are filtered one plane at a time.
    """
    image = image.astype(np.float32)
    c = num_channels(image)
    if c in (1, 3):
        out = cv2.bilateralFilter(image, diameter, sigma_color, sigma_space)
        return out.reshape(image.shape)
    planes = [
        cv2.bilateralFilter(
            np.ascontiguousarray(image[..., i]), diameter, sigma_color, sigma_space
        )
        for i in range(c)
    ]
    return np.stack(planes, axis=-1)


def scaled_size(width: int, height: int, scale: float) -> Tuple[int, int]:
    """(width, height) after scaling, never smaller than 1x1."""
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def resize_image(
    image: np.ndarray, size: Tuple[int, int], interpolation: int = cv2.INTER_CUBIC
) -> np.ndarray:
    """
    Resizes to `size` = (width, height), keeping a trailing channel axis when
    the input had one (cv2 drops it for single-channel images).
    """
    width, height = size
    if image.shape[1] == width and image.shape[0] == height:
        return image
    out = cv2.resize(image, (width, height), interpolation=interpolation)
    if image.ndim == 3 and out.ndim == 2:
        out = out[..., np.newaxis]
    return out
