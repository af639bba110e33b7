# pencildraw/torch_ops/__init__.py
"""
PyTorch operations for the pencil drawing kernel.

This package contains vectorized PyTorch implementations of the line integral
convolution that work across CUDA and CPU backends.
"""

from .lic_ops import (
    angle_steps,
    gaussian,
    jitter_angles,
    lic_accumulate_block,
    line_scales,
    resolve_smear,
)

__all__ = [
    "gaussian",
    "angle_steps",
    "line_scales",
    "jitter_angles",
    "lic_accumulate_block",
    "resolve_smear",
]
