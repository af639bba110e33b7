# pencildraw/project.py
from pathlib import Path

import numpy as np
import yaml

from .config import MainConfig
from .data import ProjectData
from .pipeline import PencilPipeline


class Project:
    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found at {config_path}")

        self.config = self._load_config()
        verbose = self.config.pipeline.verbose

        # 1. Initialize data manager
        self.data = ProjectData(self.config.project, verbose=verbose)

        # 2. Initialize the rendering pipeline
        self.pipeline = PencilPipeline(self.config.pipeline)

    def _load_config(self) -> MainConfig:
        with open(self.config_path, "r") as f:
            config_data = yaml.safe_load(f)
        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")
        return MainConfig(**config_data)

    def run(self) -> np.ndarray:
        """
        Renders the configured image and saves the drawing.
        This is the main entry point for the command-line run.py script.

        Returns:
            np.ndarray: The float32 drawing.
        """
        print("\n--- Starting Pencil Drawing Pipeline ---")
        image = self.data.get_image()
        anchors = self.data.get_anchors()

        drawing = self.pipeline.render_lod(image, anchors)
        self.data.save_output(drawing)

        print("\n--- Project Execution Complete ---")
        print(f"Output saved to: {self.data.output_path}")

        return drawing
