# pencildraw/engines/flow_engine.py
import cv2
import numpy as np

from ..config import FlowConfig
from .base import BaseEngine


def compute_flow_field(gray: np.ndarray, ksize: int = 11) -> np.ndarray:
    """
    Edge tangent flow of a grayscale image from its smoothed structure tensor.

    The dominant gradient orientation is
    0.5 * atan2(2 * J_xy, J_xx - J_yy); the flow runs perpendicular to it,
    along iso-tone lines.

    Args:
        gray (np.ndarray): (H, W) float image.
        ksize (int): Odd size of the box over which the tensor is averaged.

    Returns:
        np.ndarray: (H, W) float32 angle field in radians.
    """
    if gray.ndim != 2:
        raise ValueError(f"Flow field expects a single-channel image, got {gray.shape}")
    if ksize < 1 or ksize % 2 == 0:
        raise ValueError("ksize must be a positive odd integer")

    gray = gray.astype(np.float32)
    gx = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=3)
    gy = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=3)

    # sigma 0 lets OpenCV derive it from the window size
    j_xx = cv2.GaussianBlur(gx * gx, (ksize, ksize), 0)
    j_xy = cv2.GaussianBlur(gx * gy, (ksize, ksize), 0)
    j_yy = cv2.GaussianBlur(gy * gy, (ksize, ksize), 0)

    gradient_angle = 0.5 * np.arctan2(2.0 * j_xy, j_xx - j_yy)
    return (gradient_angle + np.pi / 2.0).astype(np.float32)


class FlowEngine(BaseEngine):
    """
    An engine for computing the orientation flow field of a frame.
    """

    def __init__(self, config: FlowConfig = FlowConfig(), verbose: bool = True):
        self.config = config
        if verbose:
            print(f"Initializing Flow Engine (ksize: {config.ksize})...")

    def compute(self, gray: np.ndarray) -> np.ndarray:
        return compute_flow_field(gray, ksize=self.config.ksize)
