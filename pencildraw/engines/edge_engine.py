# pencildraw/engines/edge_engine.py
import cv2
import numpy as np

from ..config import EdgeConfig
from .base import BaseEngine


def compute_edge_map(
    gray: np.ndarray,
    sigma: float = 1.0,
    k: float = 1.6,
    tau: float = 0.98,
    phi: float = 10.0,
) -> np.ndarray:
    """
    Difference-of-Gaussians edge strength of a grayscale float image.

    The response D = G(sigma) - tau * G(k * sigma) is soft-thresholded with
    tanh on its negative side, so flat regions map to 0 and strong dark-side
    edges approach 1.

    Args:
        gray (np.ndarray): (H, W) float image in [0, 1].

    Returns:
        np.ndarray: (H, W) float32 edge strength in [0, 1].
    """
    if gray.ndim != 2:
        raise ValueError(f"Edge map expects a single-channel image, got {gray.shape}")

    gray = gray.astype(np.float32)
    g1 = cv2.GaussianBlur(gray, (0, 0), sigma)
    g2 = cv2.GaussianBlur(gray, (0, 0), k * sigma)
    dog = g1 - tau * g2

    edge = np.where(dog < 0.0, -np.tanh(phi * dog), 0.0)
    return np.clip(edge, 0.0, 1.0).astype(np.float32)


class EdgeEngine(BaseEngine):
    """
    An engine responsible for computing the edge strength map of a frame.
    Wraps the DoG implementation with its configuration.
    """

    def __init__(self, config: EdgeConfig = EdgeConfig(), verbose: bool = True):
        self.config = config
        if verbose:
            print(
                f"Initializing Edge Engine (DoG sigma={config.sigma}, k={config.k})..."
            )

    def compute(self, gray: np.ndarray) -> np.ndarray:
        """
        Computes the edge strength for a grayscale frame.

        Args:
            gray (np.ndarray): (H, W) float image in [0, 1].

        Returns:
            np.ndarray: (H, W) float32 edge strength in [0, 1].
        """
        return compute_edge_map(
            gray,
            sigma=self.config.sigma,
            k=self.config.k,
            tau=self.config.tau,
            phi=self.config.phi,
        )
