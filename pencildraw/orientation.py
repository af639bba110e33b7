# pencildraw/orientation.py
import cv2
import numpy as np

from . import consts


def edge_distance_field(
    edge: np.ndarray, threshold: float = consts.EDGE_THRESHOLD
) -> np.ndarray:
    """
    Distance of every pixel to the nearest edge pixel.

    Edge strength is converted to 8 bits and pixels at or above
    `threshold * 255` (192 by default) count as edge. The mask handed to the
    distance transform is 0 on edges and 1 elsewhere.

    Returns:
        np.ndarray: (H, W) float32 L2 distances; +inf everywhere if there is no
        edge pixel at all.
    """
    uedge = np.clip(np.rint(edge * 255.0), 0, 255).astype(np.uint8)
    cutoff = int(np.ceil(threshold * 255.0))
    mask = (uedge < cutoff).astype(np.uint8)

    if mask.all():
        return np.full(edge.shape, np.inf, dtype=np.float32)
    return cv2.distanceTransform(mask, cv2.DIST_L2, 3)


def quantize_orientation(
    flow: np.ndarray,
    edge: np.ndarray,
    threshold: float = consts.EDGE_THRESHOLD,
    band_divisor: float = consts.EDGE_BAND_DIVISOR,
) -> np.ndarray:
    """
    Snaps flow angles far from edges to a fixed hatching diagonal.

    Pixels farther than max(width, height) / band_divisor from any edge get
    ceil(theta / pi) * pi - pi / 4; pixels inside the band keep their angle so
    strokes still follow contours.

    Args:
        flow (np.ndarray): (H, W) angle field in radians. Not modified.
        edge (np.ndarray): (H, W) edge strength in [0, 1].

    Returns:
        np.ndarray: The quantized (H, W) float32 angle field.
    """
    if flow.ndim != 2 or edge.ndim != 2:
        raise ValueError(
            f"Flow and edge fields must be single-channel, got {flow.shape} and {edge.shape}"
        )
    if flow.shape != edge.shape:
        raise ValueError(
            f"Flow field {flow.shape} and edge map {edge.shape} must share extent"
        )

    height, width = flow.shape
    band = max(width, height) / band_divisor

    distance = edge_distance_field(edge, threshold)
    far = distance > band

    quantized = flow.astype(np.float32, copy=True)
    theta = quantized[far].astype(np.float64)
    quantized[far] = (
        np.ceil(theta / consts.QUANTIZE_STEP) * consts.QUANTIZE_STEP
        + consts.QUANTIZE_SHIFT
    )
    return quantized
