# pencildraw/noise.py
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .config import NoiseConfig

AnchorLike = Union[np.ndarray, Sequence[Sequence[float]], None]


def as_anchor_array(anchors: AnchorLike) -> np.ndarray:
    """Copies anchors into an (N, 2) float32 array; None means no anchors."""
    if anchors is None:
        return np.zeros((0, 2), dtype=np.float32)
    points = np.array(anchors, dtype=np.float32)
    if points.size == 0:
        return points.reshape(0, 2)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"Anchors must have shape (N, 2), got {points.shape}")
    return points


def validate_anchors(anchors: np.ndarray, width: int, height: int) -> None:
    """Rejects anchors that are non-finite or fall outside the image."""
    if len(anchors) == 0:
        return
    if not np.isfinite(anchors).all():
        raise ValueError("Anchor coordinates must be finite")

    xs, ys = anchors[:, 0], anchors[:, 1]
    outside = (xs < 0) | (ys < 0) | (xs >= width) | (ys >= height)
    if outside.any():
        first = anchors[np.argmax(outside)]
        raise ValueError(
            f"{int(outside.sum())} anchor(s) outside the {width}x{height} image, "
            f"e.g. ({first[0]}, {first[1]})"
        )


def dense_noise(
    width: int,
    height: int,
    tone: np.ndarray,
    count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Tone-driven random impulses.

    `count` pixel positions are drawn uniformly; each one is switched on when a
    uniform draw exceeds the tone there, so darker regions collect more
    impulses. Repeated positions collapse, which is why `count` overshoots the
    intended density.

    Returns:
        np.ndarray: (height, width) float32 field of 0/1 values.
    """
    if tone.shape[:2] != (height, width):
        raise ValueError(
            f"Tone image {tone.shape[:2]} does not match noise extent {(height, width)}"
        )
    noise = np.zeros((height, width), dtype=np.float32)
    if count <= 0:
        return noise

    xs = rng.integers(0, width, size=count)
    ys = rng.integers(0, height, size=count)
    hits = rng.random(count) > tone[ys, xs]
    noise[ys[hits], xs[hits]] = 1.0
    return noise


def compose_noise(
    width: int,
    height: int,
    tone: np.ndarray,
    anchors: AnchorLike = None,
    rng: Optional[np.random.Generator] = None,
    config: NoiseConfig = NoiseConfig(),
) -> Tuple[np.ndarray, float]:
    """
    Builds the noise field to be smeared and its normalisation ratio.

    Without anchors the field is dense tone-driven noise and the ratio is the
    constant dense_ratio_factor * dense_density (0.3 by default). With anchors
    each anchor stamps a unit impulse at its floored pixel and the ratio is
    anchor_ratio_factor * k / (width * height).

    Args:
        width (int): Field width.
        height (int): Field height.
        tone (np.ndarray): (H, W) grayscale tone in [0, 1], drives dense noise.
        anchors: (N, 2) (x, y) points; None or empty for dense noise.
        rng (np.random.Generator): Source for dense noise. Defaults to seed 0.

    Returns:
        Tuple[np.ndarray, float]: The (H, W) float32 noise field and its ratio.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Noise extent must be positive, got {width}x{height}")

    points = as_anchor_array(anchors)
    n_pixels = width * height

    if len(points) == 0:
        if rng is None:
            rng = np.random.default_rng(0)
        budget = int(config.dense_budget * n_pixels)
        noise = dense_noise(width, height, tone, budget, rng)
        ratio = config.dense_ratio_factor * config.dense_density
    else:
        validate_anchors(points, width, height)
        noise = np.zeros((height, width), dtype=np.float32)
        px = np.floor(points[:, 0]).astype(np.int64)
        py = np.floor(points[:, 1]).astype(np.int64)
        noise[py, px] = 1.0
        ratio = config.anchor_ratio_factor * len(points) / n_pixels

    if not np.isfinite(ratio) or ratio <= 0.0:
        raise ValueError(f"Noise ratio must be positive, got {ratio}")
    return noise, float(ratio)
