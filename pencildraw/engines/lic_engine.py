# pencildraw/engines/lic_engine.py
from multiprocessing import cpu_count
from multiprocessing.pool import ThreadPool
from typing import Callable, List, Optional, Tuple

import numpy as np
import torch
from tqdm import tqdm

from ..config import LICConfig
from ..torch_ops import (
    angle_steps,
    jitter_angles,
    lic_accumulate_block,
    line_scales,
    resolve_smear,
)
from ..utils.image_utils import validate_image
from .base import BaseEngine

ProgressCallback = Callable[[int, int], None]


def _as_hwc(image: np.ndarray) -> np.ndarray:
    return image[..., np.newaxis] if image.ndim == 2 else image


def default_num_workers() -> int:
    """Pool size that keeps pool threads times torch threads within the CPU count."""
    return max(1, cpu_count() // max(1, torch.get_num_threads()))


class LICEngine(BaseEngine):
    """
    Anisotropic line integral convolution of a noise field along a flow field.

    Every output pixel integrates the noise over 2 * t_disc + 1 candidate
    lines around its flow angle, each sampled at 2 * s_disc + 1 points. Samples
    are weighted by a Gaussian over the bilateral tone difference to the
    centre, and whole lines by a Gaussian over the distance between a
    per-pixel jitter angle and the line angle. The result per channel is
    1 - sum / (ratio * weight).

    Rows are split into blocks and dispatched to a thread pool; blocks only
    read the shared tensors and write disjoint output rows.
    """

    def __init__(self, config: LICConfig = LICConfig(), verbose: bool = True):
        self.config = config
        self.verbose = verbose
        self.device = torch.device(config.device)
        if self.device.type == "cuda" and not torch.cuda.is_available():
            raise ValueError(f"Device '{config.device}' requested but CUDA is unavailable")
        self.num_workers = config.num_workers or default_num_workers()
        if verbose:
            print(
                f"Initializing LIC Engine (device: {self.device}, workers: {self.num_workers})..."
            )

    def make_jitter(self, height: int, width: int, rng: np.random.Generator) -> np.ndarray:
        """Draws one jitter level k in [0, 2n] per pixel."""
        n = self.config.jitter_n
        return rng.integers(0, 2 * n + 1, size=(height, width))

    def _row_blocks(self, height: int) -> List[Tuple[int, int]]:
        step = self.config.rows_per_block
        return [(y0, min(y0 + step, height)) for y0 in range(0, height, step)]

    def _to_tensor(self, array: np.ndarray) -> torch.Tensor:
        return torch.from_numpy(np.ascontiguousarray(array)).to(
            self.device, dtype=torch.float64
        )

    def compute(
        self,
        tone: np.ndarray,
        flow: np.ndarray,
        noise: np.ndarray,
        ratio: float,
        rng: Optional[np.random.Generator] = None,
        fallback: Optional[np.ndarray] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> np.ndarray:
        """
        Smears `noise` along `flow`, weighted by the bilateral `tone`.

        Args:
            tone (np.ndarray): (H, W) or (H, W, C) bilateral-smoothed tone in [0, 1].
            flow (np.ndarray): (H, W) quantized flow angles.
            noise (np.ndarray): (H, W) noise field.
            ratio (float): Positive noise normalisation ratio.
            rng (np.random.Generator): Source of the per-pixel jitter. Defaults to seed 0.
            fallback (np.ndarray): Values used where the weight degenerates.
                Same shape as `tone`; defaults to `tone` itself.
            on_progress: Called as on_progress(completed_pixels, total_pixels).

        Returns:
            np.ndarray: float32 array with the shape of `tone`.
        """
        validate_image(tone, "tone")
        height, width = tone.shape[:2]
        if flow.shape != (height, width):
            raise ValueError(
                f"Flow field must be single-channel {(height, width)}, got {flow.shape}"
            )
        if noise.shape != (height, width):
            raise ValueError(
                f"Noise field must be single-channel {(height, width)}, got {noise.shape}"
            )
        if not np.isfinite(ratio) or ratio <= 0:
            raise ValueError(f"ratio must be positive, got {ratio}")
        if fallback is None:
            fallback = tone
        elif fallback.shape != tone.shape:
            raise ValueError(
                f"Fallback shape {fallback.shape} does not match tone {tone.shape}"
            )
        if rng is None:
            rng = np.random.default_rng(0)

        cfg = self.config
        try:
            tone_t = self._to_tensor(_as_hwc(tone))
            fallback_t = self._to_tensor(_as_hwc(fallback))
            flow_t = self._to_tensor(flow)
            noise_t = self._to_tensor(noise)
            jitter_t = jitter_angles(
                torch.from_numpy(self.make_jitter(height, width, rng)).to(self.device),
                cfg.tau,
                cfg.jitter_n,
            )
            output = np.empty(_as_hwc(tone).shape, dtype=np.float32)
        except (MemoryError, torch.cuda.OutOfMemoryError) as e:
            raise MemoryError(
                f"Not enough memory to allocate LIC fields for a {width}x{height} image: {e}"
            ) from e

        steps = angle_steps(cfg.tau, cfg.t_disc, device=self.device)
        scales = line_scales(cfg.stroke_length, cfg.s_disc, device=self.device)

        def _run_block(block: Tuple[int, int]) -> Tuple[int, int]:
            y0, y1 = block
            total, weight = lic_accumulate_block(
                tone_t,
                flow_t,
                noise_t,
                jitter_t,
                y0,
                y1,
                steps,
                scales,
                cfg.sigma_1,
                cfg.sigma_2,
            )
            rows = resolve_smear(total, weight, ratio, fallback_t[y0:y1])
            output[y0:y1] = rows.cpu().numpy().astype(np.float32)
            return y0, y1

        blocks = self._row_blocks(height)
        total_pixels = height * width
        completed = 0

        with ThreadPool(processes=min(self.num_workers, len(blocks))) as pool:
            for y0, y1 in tqdm(
                pool.imap_unordered(_run_block, blocks),
                total=len(blocks),
                desc="Line Integral Convolution",
                disable=not self.verbose,
            ):
                completed += (y1 - y0) * width
                if on_progress is not None:
                    on_progress(completed, total_pixels)

        return output.reshape(tone.shape)
