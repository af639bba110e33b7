# pencildraw/utils/io_utils.py
import re
from pathlib import Path
from typing import Union

import cv2
import imageio.v2 as imageio
import numpy as np

from .image_utils import to_uint8


def read_image(path: Union[str, Path]) -> np.ndarray:
    """Reads an image and converts it to BGR format."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    try:
        img = imageio.imread(path)
        if len(img.shape) == 2:  # Handle Grayscale
            img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
        elif img.shape[-1] == 4:  # Handle RGBA
            img = cv2.cvtColor(img, cv2.COLOR_RGBA2BGR)
        else:  # Handle RGB
            img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
        return img
    except Exception as e:
        raise IOError(f"Error reading image at {path}: {e}")


def write_image(path: Union[str, Path], image: np.ndarray):
    """Writes a BGR (or gray) image to disk; float images are taken as [0, 1]."""
    try:
        image = to_uint8(image)
        if image.ndim == 3 and image.shape[2] == 1:
            image = image[..., 0]
        if image.ndim == 3:
            # Convert back to RGB for standard image viewers
            image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        imageio.imwrite(path, image)
    except Exception as e:
        raise IOError(f"Error writing image to {path}: {e}")


def read_anchor_points(path: Union[str, Path]) -> np.ndarray:
    """
    Reads anchor points from a text file, one `x y` (or `x, y`) pair per line.
    Blank lines and `#` comments are ignored.

    Returns:
        np.ndarray: (N, 2) float32 array of (x, y) coordinates.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Anchor file not found: {path}")

    points = []
    with open(path, "r") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            fields = [v for v in re.split(r"[,\s]+", line) if v]
            if len(fields) != 2:
                raise ValueError(
                    f"{path}:{line_no}: expected 2 coordinates, got {len(fields)}"
                )
            try:
                points.append((float(fields[0]), float(fields[1])))
            except ValueError:
                raise ValueError(f"{path}:{line_no}: invalid coordinate in '{line}'")

    return np.asarray(points, dtype=np.float32).reshape(-1, 2)
