"""
Luminance quantizer
Maps RGB triples to indices into an intensity ramp
"""
import math
from typing import Tuple

import numpy as np

from .data_models import LuminanceWeights

DEFAULT_WEIGHTS = LuminanceWeights()

# Weights are applied in fixed point so that white lands exactly on the last
# glyph instead of one below it through float error.
_SCALE = 10_000
_MAX_CHANNEL = 255


def _fixed_weights(weights: LuminanceWeights) -> Tuple[int, int, int]:
    """Scale the normalised weights to integers summing to exactly _SCALE.

    Each weight is floored, then the units lost to flooring go to the weights
    with the largest remainders.
    """
    total = weights.red + weights.green + weights.blue
    raw = [w / total * _SCALE for w in (weights.red, weights.green, weights.blue)]
    fixed = [math.floor(w) for w in raw]
    leftover = _SCALE - sum(fixed)
    by_remainder = sorted(range(3), key=lambda i: raw[i] - fixed[i], reverse=True)
    for i in by_remainder[:leftover]:
        fixed[i] += 1
    return fixed[0], fixed[1], fixed[2]


def luminance(r: int, g: int, b: int,
              weights: LuminanceWeights = DEFAULT_WEIGHTS) -> float:
    """Perceptual grayscale value of one pixel, 0-255."""
    return weights.red * r + weights.green * g + weights.blue * b


def quantize(r: int, g: int, b: int, ramp_size: int,
             weights: LuminanceWeights = DEFAULT_WEIGHTS) -> int:
    """Ramp index for one pixel: floor(luminance / 255 * (N - 1)), clamped."""
    wr, wg, wb = _fixed_weights(weights)
    scaled = wr * int(r) + wg * int(g) + wb * int(b)
    index = scaled * (ramp_size - 1) // (_MAX_CHANNEL * _SCALE)
    return max(0, min(ramp_size - 1, index))


def quantize_buffer(buffer: np.ndarray, ramp_size: int,
                    weights: LuminanceWeights = DEFAULT_WEIGHTS) -> np.ndarray:
    """Vectorised `quantize` over an (H, W, 3) pixel buffer."""
    fixed = np.array(_fixed_weights(weights), dtype=np.int64)
    scaled = buffer[..., :3].astype(np.int64) @ fixed
    indices = scaled * (ramp_size - 1) // (_MAX_CHANNEL * _SCALE)
    return np.clip(indices, 0, ramp_size - 1)
