import numpy as np
import pytest

from pencildraw.config import NoiseConfig
from pencildraw.noise import as_anchor_array, compose_noise, dense_noise


@pytest.mark.parametrize("size", [(7, 5), (64, 64), (101, 33)])
def test_dense_ratio_is_constant(size):
    width, height = size
    tone = np.full((height, width), 0.5, dtype=np.float32)
    noise, ratio = compose_noise(width, height, tone, [], rng=np.random.default_rng(0))
    assert ratio == pytest.approx(0.3)
    assert noise.shape == (height, width)

    _, ratio_none = compose_noise(width, height, tone, None)
    assert ratio_none == pytest.approx(0.3)


def test_anchor_noise_stamps_one_impulse_per_anchor():
    width, height = 20, 10
    tone = np.zeros((height, width), dtype=np.float32)
    anchors = [(0.0, 0.0), (3.7, 2.2), (19.9, 9.9), (10.5, 4.0)]

    noise, ratio = compose_noise(width, height, tone, anchors)

    assert ratio == pytest.approx(1.2 * 4 / (width * height))
    assert np.count_nonzero(noise) == 4
    assert noise[2, 3] == 1.0
    assert noise[9, 19] == 1.0
    assert noise[4, 10] == 1.0
    assert set(np.unique(noise)) == {0.0, 1.0}


def test_anchor_noise_does_not_touch_caller_array():
    anchors = np.array([[1.5, 1.5]], dtype=np.float32)
    compose_noise(4, 4, np.zeros((4, 4)), anchors)
    np.testing.assert_array_equal(anchors, [[1.5, 1.5]])


@pytest.mark.parametrize(
    "anchors",
    [
        [(20.0, 1.0)],
        [(1.0, 10.0)],
        [(-0.5, 1.0)],
        [(1.0, float("nan"))],
    ],
)
def test_out_of_bounds_anchors_are_rejected(anchors):
    with pytest.raises(ValueError):
        compose_noise(20, 10, np.zeros((10, 20)), anchors)


def test_malformed_anchors_are_rejected():
    with pytest.raises(ValueError):
        as_anchor_array([(1.0, 2.0, 3.0)])


def test_dense_noise_follows_tone():
    rng = np.random.default_rng(1)
    white = dense_noise(30, 20, np.ones((20, 30)), 500, rng)
    assert np.count_nonzero(white) == 0

    black = dense_noise(30, 20, np.zeros((20, 30)), 500, rng)
    assert 0 < np.count_nonzero(black) <= 500


def test_dense_noise_is_reproducible():
    tone = np.full((16, 16), 0.4)
    a = dense_noise(16, 16, tone, 80, np.random.default_rng(11))
    b = dense_noise(16, 16, tone, 80, np.random.default_rng(11))
    np.testing.assert_array_equal(a, b)


def test_custom_ratio_factors():
    config = NoiseConfig(dense_density=0.1, dense_ratio_factor=2.0)
    _, ratio = compose_noise(8, 8, np.zeros((8, 8)), None, config=config)
    assert ratio == pytest.approx(0.2)
