# pencildraw/consts.py
"""
Default constants for the pencil drawing pipeline.
Centralized location so configuration models and helpers share one source.
"""

import math

# --- LIC kernel ---
TAU = math.pi / 6.0  # angular half-range of the flow search
T_DISC = 24  # angle steps on each side of the flow direction
S_DISC = 24  # samples on each side of the pixel along a line
SIGMA_1 = 4.0  # Gaussian over the (jittered) angle
SIGMA_2 = 2.0  # Gaussian over bilateral tone difference
STROKE_LENGTH = 7.0  # half-length of a line, in pixels
JITTER_N = 2  # jitter levels on each side of zero

# --- Orientation field ---
FLOW_KSIZE = 11

# --- Bilateral tone smoothing ---
BILATERAL_DIAMETER = 19
BILATERAL_SIGMA_COLOR = 0.5
BILATERAL_SIGMA_SPACE = 15.0

# --- Orientation quantization ---
EDGE_THRESHOLD = 0.75  # 192 / 255 after 8-bit conversion
EDGE_BAND_DIVISOR = 50.0
QUANTIZE_STEP = math.pi
QUANTIZE_SHIFT = -math.pi / 4.0

# --- Noise ---
DENSE_NOISE_DENSITY = 0.2
DENSE_NOISE_BUDGET = 0.3
DENSE_RATIO_FACTOR = 1.5
ANCHOR_RATIO_FACTOR = 1.2
