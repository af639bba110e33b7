from pathlib import Path
from typing import Optional

import numpy as np

from .config import ProjectConfig
from .utils import io_utils


class ProjectData:
    """
    Manages data loading and saving for a pencil drawing project.
    Acts as the single source of truth for all file I/O operations.
    """

    def __init__(self, config: ProjectConfig, verbose: bool = True):
        self.config = config

        self.input_path = Path(config.input_path)
        self.output_path = Path(config.output_path)
        self.anchors_path = Path(config.anchors_path) if config.anchors_path else None

        if verbose:
            print("Data Manager Initialized:")
            print(f"  - Input: {self.input_path}")
            print(f"  - Output: {self.output_path}")
            if self.anchors_path:
                print(f"  - Anchors: {self.anchors_path}")

        self._image: Optional[np.ndarray] = None
        self._anchors: Optional[np.ndarray] = None

    def get_image(self, force_reload: bool = False) -> np.ndarray:
        """Loads and caches the input image."""
        if self._image is None or force_reload:
            self._image = io_utils.read_image(self.input_path)
        return self._image

    def get_anchors(self, force_reload: bool = False) -> Optional[np.ndarray]:
        """Loads and caches the anchor points if an anchor file is specified."""
        if self.anchors_path:
            if self._anchors is None or force_reload:
                self._anchors = io_utils.read_anchor_points(self.anchors_path)
            return self._anchors
        return None

    def save_output(self, image: np.ndarray):
        """Writes the drawing to the output path as an 8-bit image."""
        io_utils.write_image(self.output_path, image)
