import numpy as np
import pytest

from pencildraw.config import EdgeConfig
from pencildraw.engines import EdgeEngine, FlowEngine, compute_edge_map, compute_flow_field
from pencildraw.utils.image_utils import bilateral_smooth, resize_image, to_gray
from pencildraw.utils.timer import RenderTimer


def test_edge_map_of_flat_image_is_empty():
    edge = compute_edge_map(np.full((20, 20), 0.6, dtype=np.float32))
    assert edge.shape == (20, 20)
    assert edge.max() == 0.0


def test_edge_map_responds_to_a_step():
    gray = np.zeros((20, 30), dtype=np.float32)
    gray[:, 15:] = 1.0
    edge = EdgeEngine(EdgeConfig(), verbose=False).compute(gray)
    assert edge.min() >= 0.0 and edge.max() <= 1.0
    assert edge[:, 12:16].max() > 0.0
    assert edge[:, :5].max() == 0.0


def test_flow_follows_horizontal_stripes():
    ys = np.arange(40, dtype=np.float32)[:, None]
    gray = np.repeat(0.5 + 0.4 * np.sin(0.3 * ys), 40, axis=1)
    flow = FlowEngine(verbose=False).compute(gray)
    assert flow.shape == gray.shape
    assert flow.dtype == np.float32
    # tangent runs along x, up to a half turn
    np.testing.assert_allclose(np.cos(2 * flow[8:-8, 8:-8]), 1.0, atol=1e-3)


@pytest.mark.parametrize("ksize", [0, 4])
def test_flow_rejects_bad_window(ksize):
    with pytest.raises(ValueError):
        compute_flow_field(np.zeros((8, 8), dtype=np.float32), ksize=ksize)


def test_engines_reject_color_input():
    with pytest.raises(ValueError):
        compute_edge_map(np.zeros((8, 8, 3), dtype=np.float32))
    with pytest.raises(ValueError):
        compute_flow_field(np.zeros((8, 8, 3), dtype=np.float32))


def test_bilateral_keeps_layout_for_any_channel_count():
    rng = np.random.default_rng(0)
    for shape in [(12, 14), (12, 14, 1), (12, 14, 3), (12, 14, 5)]:
        img = rng.uniform(size=shape).astype(np.float32)
        out = bilateral_smooth(img, 9, 0.5, 15.0)
        assert out.shape == shape
        assert out.min() >= 0.0 and out.max() <= 1.0 + 1e-6


def test_resize_keeps_channel_axis():
    img = np.zeros((10, 12, 1), dtype=np.float32)
    assert resize_image(img, (6, 5)).shape == (5, 6, 1)
    assert resize_image(np.zeros((10, 12)), (24, 20)).shape == (20, 24)


def test_to_gray_matches_channel_layouts():
    bgr = np.full((4, 4, 3), 0.25, dtype=np.float32)
    np.testing.assert_allclose(to_gray(bgr), 0.25, atol=1e-6)
    assert to_gray(np.zeros((4, 4, 1), dtype=np.float32)).shape == (4, 4)


def test_render_timer_keeps_levels_apart(capsys):
    timer = RenderTimer()
    for _ in range(2):
        with timer.stage("lic", level=2):
            pass
    with timer.stage("noise"):
        pass
    timer.add_pixels(2, 100)

    assert list(timer.levels) == [2, 1]
    assert list(timer.levels[2]["stages"]) == ["lic"]
    assert timer.levels[2]["pixels"] == 100
    assert timer.levels[1]["pixels"] == 0
    assert timer.throughput(1) == 0.0
    assert timer.total_time() >= 0.0

    timer.print_summary()
    printed = capsys.readouterr().out
    assert "level 2" in printed and "Mpx/s" in printed

    timer.reset()
    assert timer.total_time() == 0
