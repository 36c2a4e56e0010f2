"""Mapping between pixel coordinates and points of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .parsing import parse_float, parse_pair, parse_unsigned


@dataclass(frozen=True)
class Point:
    """A point of the complex plane, ``x`` being the real part."""

    x: float
    y: float

    @classmethod
    def parse(cls, text: str) -> "Point":
        x, y = parse_pair(text, ",", parse_float)
        return cls(x, y)

    def to_complex(self) -> complex:
        return complex(self.x, self.y)


@dataclass(frozen=True)
class Bounds:
    """Width and height in pixels of an image or of one of its bands."""

    width: int
    height: int

    @classmethod
    def parse(cls, text: str) -> "Bounds":
        width, height = parse_pair(text, "x", parse_unsigned)
        return cls(width, height)

    @property
    def size(self) -> int:
        return self.width * self.height


def pixel_to_point(bounds: Bounds, pixel: tuple[int, int], upper_left: Point, lower_right: Point) -> Point:
    """Return the point of the plane at ``pixel`` (column, row).

    Row 0 is the top of the viewport; moving down decreases the imaginary
    part. ``bounds`` must be non-empty.
    """

    column, row = pixel
    width = lower_right.x - upper_left.x
    height = upper_left.y - lower_right.y
    return Point(
        x=upper_left.x + column * width / bounds.width,
        y=upper_left.y - row * height / bounds.height,
    )


def pixel_grid(bounds: Bounds, upper_left: Point, lower_right: Point) -> tuple[np.ndarray, np.ndarray]:
    """Real and imaginary parts of every pixel, each flattened in row-major order.

    Element for element this is :func:`pixel_to_point` evaluated over the
    whole grid, with the same floating point operations.
    """

    width = lower_right.x - upper_left.x
    height = upper_left.y - lower_right.y
    columns = np.arange(bounds.width, dtype=np.float64)
    rows = np.arange(bounds.height, dtype=np.float64)
    x = upper_left.x + columns * width / bounds.width
    y = upper_left.y - rows * height / bounds.height
    X, Y = np.meshgrid(x, y)
    return X.reshape(-1), Y.reshape(-1)
