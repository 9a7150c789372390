import math

import numpy as np
import pytest

from asciivid.data_models import LuminanceWeights
from asciivid.quantizer import luminance, quantize, quantize_buffer
from asciivid.ramp import DEFAULT_RAMP

N = len(DEFAULT_RAMP)


def test_black_and_white_hit_the_ends():
    assert quantize(0, 0, 0, N) == 0
    assert quantize(255, 255, 255, N) == N - 1


@pytest.mark.parametrize("ramp_size", [2, 3, 10, 26, 65, 70])
def test_indices_stay_in_bounds(ramp_size):
    for r, g, b in [(0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0),
                    (0, 0, 255), (17, 200, 99), (254, 255, 255)]:
        index = quantize(r, g, b, ramp_size)
        assert isinstance(index, int)
        assert 0 <= index <= ramp_size - 1


def test_gray_levels_are_monotonic():
    indices = [quantize(v, v, v, N) for v in range(256)]
    assert indices == sorted(indices)


def test_mid_gray_index():
    assert quantize(128, 128, 128, N) == math.floor((128 / 255) * (N - 1))


def test_green_dominates():
    assert quantize(0, 200, 0, N) > quantize(200, 0, 0, N) > quantize(0, 0, 200, N)


def test_luminance_weighting():
    assert luminance(100, 0, 0) == pytest.approx(21.0)
    assert luminance(0, 100, 0) == pytest.approx(72.0)
    assert luminance(0, 0, 100) == pytest.approx(7.0)


def test_custom_weights():
    rec601 = LuminanceWeights(0.299, 0.587, 0.114)
    assert quantize(255, 255, 255, N, rec601) == N - 1
    assert quantize(0, 0, 0, N, rec601) == 0


def test_weights_must_favour_green():
    with pytest.raises(ValueError):
        LuminanceWeights(0.8, 0.1, 0.1)
    with pytest.raises(ValueError):
        LuminanceWeights(-0.1, 0.9, 0.2)


def test_buffer_matches_scalar():
    rng = np.random.default_rng(7)
    buffer = rng.integers(0, 256, size=(12, 20, 3), dtype=np.uint8)
    indices = quantize_buffer(buffer, N)
    assert indices.shape == (12, 20)
    for y in range(12):
        for x in range(20):
            r, g, b = buffer[y, x]
            assert indices[y, x] == quantize(r, g, b, N)


@pytest.mark.parametrize("weights", [
    LuminanceWeights(1 / 3, 1 / 3, 1 / 3),
    LuminanceWeights(0.29891, 0.58661, 0.11448),
    LuminanceWeights(0.2126, 0.7152, 0.0722),
    LuminanceWeights(0.2, 0.6, 0.2005),
])
def test_white_reaches_last_glyph_for_any_valid_weights(weights):
    assert quantize(255, 255, 255, N, weights) == N - 1
    assert quantize(0, 0, 0, N, weights) == 0
    white = np.full((2, 3, 3), 255, dtype=np.uint8)
    assert (quantize_buffer(white, N, weights) == N - 1).all()


def test_equal_weights_follow_the_float_formula():
    thirds = LuminanceWeights(1 / 3, 1 / 3, 1 / 3)
    for v in (0, 1, 64, 127, 128, 200, 254, 255):
        assert quantize(v, v, v, N, thirds) == math.floor(v / 255 * (N - 1))


def test_weights_must_sum_to_one():
    with pytest.raises(ValueError):
        LuminanceWeights(0.1, 0.2, 0.1)
    with pytest.raises(ValueError):
        LuminanceWeights(0.5, 0.7, 0.1)
