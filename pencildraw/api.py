from typing import Callable, Optional, Union

import numpy as np

from .config import (
    BilateralConfig,
    EdgeConfig,
    FlowConfig,
    LICConfig,
    NoiseConfig,
    PipelineConfig,
)
from .noise import AnchorLike
from .pipeline import PencilPipeline
from .utils import io_utils

ProgressCallback = Callable[[int, int], None]


def render_pencil_drawing(
    image: np.ndarray,
    anchors: AnchorLike = None,
    config: Optional[PipelineConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """
    Single-scale pencil drawing of `image`.

    Args:
        image (np.ndarray): (H, W) or (H, W, C) BGR image, 8-bit or float.
        anchors: Optional (N, 2) (x, y) points seeding sparse noise.
        config (PipelineConfig): Pipeline settings; defaults are used when None.
        on_progress: Called as on_progress(completed_pixels, total_pixels).

    Returns:
        np.ndarray: float32 drawing with the shape of `image`, values near [0, 1].
    """
    pipeline = PencilPipeline(config or PipelineConfig())
    return pipeline.render(image, anchors, on_progress=on_progress)


def render_pencil_drawing_lod(
    image: np.ndarray,
    anchors: AnchorLike = None,
    levels: int = 2,
    config: Optional[PipelineConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """Multi-scale pencil drawing, averaged over `levels` pyramid scales."""
    pipeline = PencilPipeline(config or PipelineConfig())
    return pipeline.render_lod(image, anchors, levels=levels, on_progress=on_progress)


class RunConfig:
    """
    Bundles the common stylization parameters for ease of use, so callers
    do not have to build the nested pipeline configuration themselves.
    """

    def __init__(
        self,
        levels=1,
        seed=0,
        stroke_length=7.0,
        t_disc=24,
        s_disc=24,
        sigma_1=4.0,
        sigma_2=2.0,
        flow_ksize=11,
        edge_threshold=0.75,
        device="cpu",
        num_workers: Optional[int] = None,
        verbose: bool = True,
        benchmark: bool = False,
    ):
        # LIC params
        self.stroke_length = stroke_length
        self.t_disc = t_disc
        self.s_disc = s_disc
        self.sigma_1 = sigma_1
        self.sigma_2 = sigma_2
        self.device = device
        self.num_workers = num_workers

        # Field params
        self.flow_ksize = flow_ksize
        self.edge_threshold = edge_threshold

        # Pipeline params
        self.levels = levels
        self.seed = seed
        self.verbose = verbose
        self.benchmark = benchmark

    def to_pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            levels=self.levels,
            seed=self.seed,
            verbose=self.verbose,
            benchmark=self.benchmark,
            lic=LICConfig(
                t_disc=self.t_disc,
                s_disc=self.s_disc,
                sigma_1=self.sigma_1,
                sigma_2=self.sigma_2,
                stroke_length=self.stroke_length,
                device=self.device,
                num_workers=self.num_workers,
            ),
            bilateral=BilateralConfig(),
            edge=EdgeConfig(threshold=self.edge_threshold),
            flow=FlowConfig(ksize=self.flow_ksize),
            noise=NoiseConfig(),
        )


class PencilDrawing:
    """
    A high-level API for rendering pencil drawings from paths or arrays.
    This class is a lightweight wrapper around PencilPipeline.
    """

    def __init__(self, config: RunConfig = RunConfig()):
        self.pipeline = PencilPipeline(config.to_pipeline_config())
        if config.verbose:
            print("\nPencilDrawing API initialized successfully.")

    def run(
        self,
        image: Union[str, np.ndarray],
        anchors: Union[str, AnchorLike] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> np.ndarray:
        """
        Renders the drawing, using the configured number of pyramid levels.

        Args:
            image: Path to an image or the image as a NumPy array.
            anchors: Path to an anchor file, an (N, 2) array, or None.

        Returns:
            np.ndarray: float32 drawing with the shape of the input image.
        """
        img = io_utils.read_image(image) if isinstance(image, str) else image
        points = io_utils.read_anchor_points(anchors) if isinstance(anchors, str) else anchors
        return self.pipeline.render_lod(img, points, on_progress=on_progress)
