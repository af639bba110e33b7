# pencildraw/pipeline.py
from typing import Callable, List, Optional, Tuple

import numpy as np

from .config import PipelineConfig
from .engines.edge_engine import EdgeEngine
from .engines.flow_engine import FlowEngine
from .engines.lic_engine import LICEngine
from .noise import AnchorLike, as_anchor_array, compose_noise, validate_anchors
from .orientation import quantize_orientation
from .pyramid import build_level, level_scale, upsample_to
from .utils.image_utils import (
    bilateral_smooth,
    scaled_size,
    to_float_image,
    to_gray,
    validate_image,
)
from .utils.timer import RenderTimer

ProgressCallback = Callable[[int, int], None]


class PencilPipeline:
    """
    Orchestrates the pencil drawing stylization: edge and flow extraction,
    orientation quantization, noise composition and the line integral
    convolution, either at a single scale or averaged over a pyramid.
    """

    def __init__(self, config: PipelineConfig = PipelineConfig()):
        self.config = config
        self.verbose = config.verbose

        self.edge_engine = EdgeEngine(config.edge, verbose=self.verbose)
        self.flow_engine = FlowEngine(config.flow, verbose=self.verbose)
        self.lic_engine = LICEngine(config.lic, verbose=self.verbose)
        self.timer = RenderTimer()

    def _log(self, msg: str):
        if self.verbose:
            print(msg)

    def _stage(self, name: str, level: int = 1):
        return self.timer.stage(name, level)

    def _prepare(self, image: np.ndarray, anchors: AnchorLike) -> Tuple[np.ndarray, np.ndarray]:
        """Validates inputs eagerly; nothing is computed if this raises."""
        validate_image(image)
        img = to_float_image(image)
        points = as_anchor_array(anchors)
        height, width = img.shape[:2]
        validate_anchors(points, width, height)
        return img, points

    def _render_single(
        self,
        img: np.ndarray,
        points: np.ndarray,
        seed: int,
        on_progress: Optional[ProgressCallback] = None,
        level: int = 1,
    ) -> np.ndarray:
        height, width = img.shape[:2]
        rng = np.random.default_rng(seed)

        with self._stage("grayscale", level):
            gray = to_gray(img)

        with self._stage("edge_map", level):
            edge = self.edge_engine.compute(gray)

        with self._stage("flow_field", level):
            flow = self.flow_engine.compute(gray)

        with self._stage("quantize_orientation", level):
            flow = quantize_orientation(
                flow,
                edge,
                threshold=self.config.edge.threshold,
                band_divisor=self.config.edge.band_divisor,
            )

        with self._stage("noise", level):
            noise, ratio = compose_noise(
                width, height, gray, points, rng=rng, config=self.config.noise
            )

        with self._stage("bilateral", level):
            bil = self.config.bilateral
            tone = bilateral_smooth(img, bil.diameter, bil.sigma_color, bil.sigma_space)

        with self._stage("lic", level):
            out = self.lic_engine.compute(
                tone,
                flow,
                noise,
                ratio,
                rng=rng,
                fallback=img,
                on_progress=on_progress,
            )
        self.timer.add_pixels(level, height * width)
        return out

    def render(
        self,
        image: np.ndarray,
        anchors: AnchorLike = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> np.ndarray:
        """
        Renders a single-scale pencil drawing.

        Args:
            image (np.ndarray): (H, W) or (H, W, C) BGR image, 8-bit or float.
            anchors: Optional (N, 2) (x, y) points seeding sparse noise.
            on_progress: Called as on_progress(completed_pixels, total_pixels).

        Returns:
            np.ndarray: float32 drawing with the shape of `image`.
        """
        img, points = self._prepare(image, anchors)
        self.timer.reset()
        self._log(f"\n--- Rendering pencil drawing ({img.shape[1]}x{img.shape[0]}) ---")

        out = self._render_single(img, points, self.config.seed, on_progress)

        if self.config.benchmark:
            self.timer.print_summary()
        return out

    def render_lod(
        self,
        image: np.ndarray,
        anchors: AnchorLike = None,
        levels: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> np.ndarray:
        """
        Renders the drawing at `levels` pyramid scales and averages them.

        Level l runs at scale 1 / 2^(l - 1), coarsest first; each result is
        resized back to full resolution (cubic) before accumulation. With a
        single level this is exactly `render`.

        Args:
            image (np.ndarray): (H, W) or (H, W, C) BGR image, 8-bit or float.
            anchors: Optional (N, 2) (x, y) points, in full-resolution pixels.
            levels (int): Number of scales, >= 1. Defaults to config.levels.
            on_progress: Called with pixels completed over all levels.

        Returns:
            np.ndarray: float32 drawing with the shape of `image`.
        """
        levels = self.config.levels if levels is None else levels
        if levels < 1:
            raise ValueError(f"levels must be >= 1, got {levels}")
        img, points = self._prepare(image, anchors)
        height, width = img.shape[:2]
        self.timer.reset()

        sizes: List[Tuple[int, int]] = [
            scaled_size(width, height, level_scale(l)) if l > 1 else (width, height)
            for l in range(levels, 0, -1)
        ]
        total_pixels = sum(w * h for w, h in sizes)

        try:
            accum = np.zeros(img.shape, dtype=np.float64)
        except MemoryError as e:
            raise MemoryError(
                f"Not enough memory to accumulate a {width}x{height} drawing: {e}"
            ) from e

        done = 0
        for (level_w, level_h), l in zip(sizes, range(levels, 0, -1)):
            self._log(
                f"\n--- LOD level {l}/{levels} (scale {level_scale(l):.4f}, {level_w}x{level_h}) ---"
            )
            with self._stage("resize_down", l):
                lvl = build_level(img, points, l)

            level_progress = None
            if on_progress is not None:

                def level_progress(completed: int, _total: int, offset: int = done):
                    on_progress(offset + completed, total_pixels)

            # Level 1 keeps the run seed so a single level reproduces `render`
            seed = self.config.seed if l == 1 else self.config.seed + l
            result = self._render_single(
                lvl.image, lvl.anchors, seed, level_progress, level=l
            )

            with self._stage("resize_up", l):
                accum += upsample_to(result, width, height)
            done += level_w * level_h

        if self.config.benchmark:
            self.timer.print_summary()
        return (accum / levels).astype(np.float32)
