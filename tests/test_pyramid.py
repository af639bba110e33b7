import numpy as np
import pytest

from pencildraw.pyramid import build_level, level_scale, scale_anchors


def test_level_scale_halves_per_level():
    assert [level_scale(l) for l in (1, 2, 3)] == [1.0, 0.5, 0.25]
    with pytest.raises(ValueError):
        level_scale(0)


def test_anchor_on_last_column_is_clipped_into_smaller_grid():
    # 21 px at half scale rounds to 10 px, while 20.99 * 0.5 lands past it
    scaled = scale_anchors(np.array([[20.99, 3.0]], dtype=np.float32), 0.5, 10, 10)
    assert scaled.dtype == np.float32
    assert scaled[0, 0] < 10.0
    assert scaled[0, 0] == np.nextafter(np.float32(10.0), np.float32(0.0))
    assert scaled[0, 1] == pytest.approx(1.5)


def test_anchors_inside_the_grid_are_only_scaled():
    anchors = np.array([[0.0, 0.0], [7.0, 5.5]], dtype=np.float32)
    np.testing.assert_allclose(scale_anchors(anchors, 0.5, 10, 10), [[0.0, 0.0], [3.5, 2.75]])


def test_no_anchors_stays_empty():
    assert scale_anchors(np.zeros((0, 2), dtype=np.float32), 0.25, 4, 4).shape == (0, 2)


def test_build_level_keeps_anchors_inside_odd_sized_image():
    image = np.zeros((21, 21, 3), dtype=np.float32)
    anchors = np.array([[20.99, 20.99], [0.0, 10.0]], dtype=np.float32)

    lvl = build_level(image, anchors, 2)

    height, width = lvl.image.shape[:2]
    assert (width, height) == (10, 10)
    assert lvl.scale == 0.5
    assert (lvl.anchors[:, 0] < width).all() and (lvl.anchors[:, 1] < height).all()
    assert (lvl.anchors >= 0).all()


def test_first_level_is_untouched():
    image = np.ones((5, 7), dtype=np.float32)
    anchors = np.array([[6.5, 4.5]], dtype=np.float32)
    lvl = build_level(image, anchors, 1)
    assert lvl.image is image and lvl.anchors is anchors
