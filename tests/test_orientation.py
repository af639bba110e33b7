import numpy as np
import pytest

from pencildraw.orientation import edge_distance_field, quantize_orientation


def _snapped(theta: np.ndarray) -> np.ndarray:
    return (np.ceil(theta.astype(np.float64) / np.pi) * np.pi - np.pi / 4).astype(
        np.float32
    )


def test_flat_edge_map_quantizes_every_pixel():
    rng = np.random.default_rng(3)
    flow = rng.uniform(-2 * np.pi, 2 * np.pi, size=(30, 40)).astype(np.float32)
    edge = np.zeros_like(flow)

    out = quantize_orientation(flow, edge)

    np.testing.assert_allclose(out, _snapped(flow), atol=1e-6)
    allowed = {round(k * np.pi - np.pi / 4, 5) for k in range(-2, 3)}
    assert set(np.round(out.astype(np.float64), 5).ravel()) <= allowed


def test_fully_edged_map_leaves_flow_unchanged():
    rng = np.random.default_rng(4)
    flow = rng.uniform(-np.pi, np.pi, size=(25, 25)).astype(np.float32)
    edge = np.ones_like(flow)

    out = quantize_orientation(flow, edge)

    np.testing.assert_array_equal(out, flow)


def test_input_flow_is_not_mutated():
    flow = np.full((10, 10), 1.0, dtype=np.float32)
    original = flow.copy()
    quantize_orientation(flow, np.zeros_like(flow))
    np.testing.assert_array_equal(flow, original)


def test_only_pixels_outside_the_edge_band_are_snapped():
    # band = max(100, 100) / 50 = 2 pixels
    flow = np.full((100, 100), 0.3, dtype=np.float32)
    edge = np.zeros_like(flow)
    edge[:, 50] = 1.0

    out = quantize_orientation(flow, edge)

    assert np.all(out[:, 49:52] == np.float32(0.3))
    snapped = np.float32(np.pi - np.pi / 4)
    assert np.allclose(out[:, 60], snapped)
    assert np.allclose(out[:, 10], snapped)


def test_edge_threshold_is_applied_on_8bit_strength():
    edge = np.zeros((5, 5), dtype=np.float32)
    edge[2, 2] = 0.76  # 194 after conversion -> edge
    dist = edge_distance_field(edge)
    assert dist[2, 2] == 0.0

    edge[2, 2] = 0.74  # 189 -> not an edge
    dist = edge_distance_field(edge)
    assert np.isinf(dist).all()


def test_mismatched_extents_are_rejected():
    with pytest.raises(ValueError):
        quantize_orientation(np.zeros((4, 5)), np.zeros((5, 4)))
    with pytest.raises(ValueError):
        quantize_orientation(np.zeros((4, 5, 1)), np.zeros((4, 5, 1)))
