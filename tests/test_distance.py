import numpy as np

from palette_quant.constants import MAX_DISTANCE
from palette_quant.core_types import palette_to_array
from palette_quant.distance import axis_channel, colour_distance, colour_distances


def test_distance_zero_for_equal_colours():
    assert colour_distance((12, 34, 56, 255), (12, 34, 56, 255)) == 0


def test_distance_is_symmetric_and_squared():
    a = (16, 16, 16, 255)
    b = (0, 0, 0, 255)
    assert colour_distance(a, b) == colour_distance(b, a) == 3 * 16 * 16


def test_alpha_counts_in_distance():
    assert colour_distance((0, 0, 0, 0), (0, 0, 0, 255)) == 255 * 255


def test_largest_distance_does_not_overflow():
    assert colour_distance((0, 0, 0, 0), (255, 255, 255, 255)) == MAX_DISTANCE == 260100


def test_vectorised_distances_match_scalar(rng):
    palette = [tuple(int(v) for v in row) for row in rng.integers(0, 256, (20, 4))]
    query = (250, 3, 128, 7)
    got = colour_distances(query, palette_to_array(palette))
    assert got.dtype == np.int64
    assert got.tolist() == [colour_distance(query, c) for c in palette]


def test_axis_cycles_through_channels():
    assert [axis_channel(d) for d in range(6)] == [0, 1, 2, 3, 0, 1]


def test_uint8_channels_are_widened():
    black = np.array([0, 0, 0, 255], dtype=np.uint8)
    white = np.array([255, 255, 255, 255], dtype=np.uint8)
    assert colour_distance(black, (255, 255, 255, 255)) == 3 * 255 * 255
    assert colour_distance(white, black) == 3 * 255 * 255
    transparent = tuple(np.uint8(v) for v in (0, 0, 0, 0))
    opaque_white = tuple(np.uint8(v) for v in (255, 255, 255, 255))
    assert colour_distance(transparent, opaque_white) == MAX_DISTANCE
