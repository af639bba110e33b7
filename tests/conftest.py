import numpy as np
import pytest

from pencildraw.config import LICConfig, PipelineConfig


@pytest.fixture
def fast_config() -> PipelineConfig:
    """Coarse discretization so pipeline tests finish quickly on CPU."""
    return PipelineConfig(
        verbose=False,
        lic=LICConfig(t_disc=3, s_disc=4, num_workers=2, rows_per_block=4),
    )


@pytest.fixture
def checkerboard() -> np.ndarray:
    ys, xs = np.mgrid[0:24, 0:32]
    board = (((ys // 4) + (xs // 4)) % 2).astype(np.float32)
    return np.stack([board] * 3, axis=-1)


@pytest.fixture
def gradient_image() -> np.ndarray:
    ys, xs = np.mgrid[0:20, 0:28]
    img = np.stack(
        [xs / 27.0, ys / 19.0, 0.5 * (xs / 27.0 + ys / 19.0)], axis=-1
    ).astype(np.float32)
    return img
