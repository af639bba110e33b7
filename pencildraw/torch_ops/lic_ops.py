# pencildraw/torch_ops/lic_ops.py
"""
Line integral convolution operations for the pencil drawing kernel.

This module contains vectorized PyTorch implementations of the double
Gaussian-weighted line integral. Work is laid out as (samples, pixels) so a
block of rows is processed with one gather per candidate angle.
"""

import math
from typing import Tuple

import torch


def gaussian(x: torch.Tensor, sigma: float) -> torch.Tensor:
    """Normalised 1D Gaussian evaluated elementwise."""
    return torch.exp(-(x * x) / (2.0 * sigma * sigma)) / (math.sqrt(2.0 * math.pi) * sigma)


def angle_steps(tau: float, t_disc: int, device=None) -> torch.Tensor:
    """Angle offsets tau / t_disc * t for t in [-t_disc, t_disc]."""
    t = torch.arange(-t_disc, t_disc + 1, device=device, dtype=torch.float64)
    return tau / t_disc * t


def line_scales(stroke_length: float, s_disc: int, device=None) -> torch.Tensor:
    """Signed sample distances stroke_length / s_disc * s for s in [-s_disc, s_disc]."""
    s = torch.arange(-s_disc, s_disc + 1, device=device, dtype=torch.float64)
    return stroke_length / s_disc * s


def jitter_angles(levels: torch.Tensor, tau: float, n: int) -> torch.Tensor:
    """Maps jitter draws k in [0, 2n] to angles tau / n * (k - n)."""
    return tau / n * (levels.to(torch.float64) - n)


def lic_accumulate_block(
    tone: torch.Tensor,
    flow: torch.Tensor,
    noise: torch.Tensor,
    jitter: torch.Tensor,
    y0: int,
    y1: int,
    steps: torch.Tensor,
    scales: torch.Tensor,
    sigma_1: float,
    sigma_2: float,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Accumulates the weighted smear for rows [y0, y1).

    Args:
        tone: (H, W, C) bilateral-smoothed tone.
        flow: (H, W) flow angle in radians.
        noise: (H, W) noise field.
        jitter: (H, W) per-pixel jitter angle t_i.
        steps: (T,) angle offsets around the flow direction.
        scales: (S,) signed distances along each line.
        sigma_1: Gaussian width over t_i - theta.
        sigma_2: Gaussian width over the tone difference.

    Returns:
        Tuple of (sum, weight), each (y1 - y0, W, C).
    """
    H, W, C = tone.shape
    device = tone.device

    ys = torch.arange(y0, y1, device=device)
    xs = torch.arange(W, device=device)
    grid_y, grid_x = torch.meshgrid(ys, xs, indexing="ij")
    py = grid_y.flatten()
    px = grid_x.flatten()
    P = py.shape[0]

    tone_flat = tone.reshape(H * W, C)
    noise_flat = noise.reshape(H * W)
    center_idx = py * W + px

    center = tone_flat[center_idx]  # (P, C)
    base_theta = flow.reshape(H * W)[center_idx]  # (P,)
    t_i = jitter.reshape(H * W)[center_idx]  # (P,)
    darkness = 1.0 - center

    fx = px.to(torch.float64).unsqueeze(0)
    fy = py.to(torch.float64).unsqueeze(0)
    sc = scales.unsqueeze(1)  # (S, 1)

    total = torch.zeros((P, C), device=device, dtype=torch.float64)
    weight = torch.zeros((P, C), device=device, dtype=torch.float64)

    for dt in steps:
        theta = base_theta + dt  # (P,)

        # Truncation toward zero, as an integer cast would
        xx = torch.trunc(fx + sc * torch.cos(theta).unsqueeze(0)).long()  # (S, P)
        yy = torch.trunc(fy + sc * torch.sin(theta).unsqueeze(0)).long()
        valid = (xx >= 0) & (yy >= 0) & (xx < W) & (yy < H)

        idx = yy.clamp(0, H - 1) * W + xx.clamp(0, W - 1)
        samples = tone_flat[idx]  # (S, P, C)
        g2 = gaussian(samples - center.unsqueeze(0), sigma_2)
        g2 = g2 * valid.unsqueeze(-1)

        n = noise_flat[idx].unsqueeze(-1)  # (S, P, 1)
        s_sum = (g2 * n).sum(dim=0) * darkness
        w_sum = g2.sum(dim=0)

        g1 = gaussian(t_i - theta, sigma_1).unsqueeze(-1)  # (P, 1)
        total += g1 * s_sum
        weight += g1 * w_sum

    return total.view(y1 - y0, W, C), weight.view(y1 - y0, W, C)


def resolve_smear(
    total: torch.Tensor,
    weight: torch.Tensor,
    ratio: float,
    fallback: torch.Tensor,
) -> torch.Tensor:
    """
    Computes 1 - total / (ratio * weight).

    Entries whose weight is not strictly positive, or whose result is not
    finite, take the matching `fallback` value instead.
    """
    denom = ratio * weight
    safe = denom > 0
    out = 1.0 - total / torch.where(safe, denom, torch.ones_like(denom))
    ok = safe & torch.isfinite(out)
    return torch.where(ok, out, fallback.to(out.dtype))
