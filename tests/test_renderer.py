import numpy as np
import pytest

from mandelbrot import (
    ITERATION_LIMIT,
    Bounds,
    BufferSizeError,
    Point,
    escape_counts,
    escape_time,
    intensity,
    pixel_grid,
    render_band,
)


@pytest.mark.parametrize("limit", [1, 10, 255])
def test_origin_never_escapes(limit):
    assert escape_time(complex(0.0, 0.0), limit) is None


@pytest.mark.parametrize("c", [complex(2.5, 0.0), complex(-3.0, 0.0), complex(1.5, 1.5), complex(0.0, -2.01)])
def test_far_points_escape_immediately(c):
    assert escape_time(c, ITERATION_LIMIT) == 0


def test_known_escape_counts():
    # z: 1, 2, 5
    assert escape_time(complex(1.0, 0.0), ITERATION_LIMIT) == 2
    # |2|^2 is not above the horizon, 6 is
    assert escape_time(complex(2.0, 0.0), ITERATION_LIMIT) == 1
    assert escape_time(complex(-1.0, 0.0), ITERATION_LIMIT) is None


def test_limit_bounds_the_search():
    assert escape_time(complex(1.0, 0.0), 2) is None
    assert escape_time(complex(1.0, 0.0), 3) == 2


def test_intensity_polarity():
    assert intensity(None) == 0
    assert intensity(0) == 255
    assert intensity(254) == 1


def test_escape_counts_match_scalar_evaluation():
    bounds = Bounds(40, 30)
    xs, ys = pixel_grid(bounds, Point(-2.2, 1.3), Point(0.75, -1.3))
    counts = escape_counts(xs, ys, ITERATION_LIMIT)
    assert counts.shape == (bounds.size,)
    for x, y, count in zip(xs, ys, counts):
        expected = escape_time(complex(x, y), ITERATION_LIMIT)
        assert count == (-1 if expected is None else expected)


def test_escape_counts_empty():
    empty = np.zeros(0, dtype=np.float64)
    assert escape_counts(empty, empty).shape == (0,)


def test_render_band_writes_intensities():
    bounds = Bounds(12, 9)
    upper_left = Point(-2.0, 1.2)
    lower_right = Point(0.6, -1.2)
    pixels = np.zeros(bounds.size, dtype=np.uint8)
    render_band(pixels, bounds, upper_left, lower_right)

    xs, ys = pixel_grid(bounds, upper_left, lower_right)
    expected = [intensity(escape_time(complex(x, y), ITERATION_LIMIT)) for x, y in zip(xs, ys)]
    assert pixels.tolist() == expected
    assert 0 in expected and 255 in expected


def test_render_band_only_touches_its_slice():
    buffer = np.zeros(20, dtype=np.uint8)
    render_band(buffer[5:10], Bounds(5, 1), Point(3.0, 3.0), Point(4.0, 2.0))
    assert buffer[5:10].tolist() == [255] * 5
    assert not buffer[:5].any()
    assert not buffer[10:].any()


def test_render_band_rejects_mismatched_slice():
    with pytest.raises(BufferSizeError):
        render_band(np.zeros(10, dtype=np.uint8), Bounds(3, 3), Point(-1.0, 1.0), Point(1.0, -1.0))


def test_render_band_empty_bounds():
    render_band(np.zeros(0, dtype=np.uint8), Bounds(0, 4), Point(-1.0, 1.0), Point(1.0, -1.0))
