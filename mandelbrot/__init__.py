"""Public API for banded Mandelbrot rendering."""

from .bands import Band, band_rows, new_pixel_buffer, plan_bands, render
from .errors import BufferSizeError, ElementParseError, NoDelimiterError, ParsePairError
from .geometry import Bounds, Point, pixel_grid, pixel_to_point
from .parsing import parse_float, parse_pair, parse_unsigned
from .renderer import ITERATION_LIMIT, escape_counts, escape_time, intensity, render_band

__all__ = [
    "Band",
    "Bounds",
    "BufferSizeError",
    "ElementParseError",
    "ITERATION_LIMIT",
    "NoDelimiterError",
    "ParsePairError",
    "Point",
    "band_rows",
    "escape_counts",
    "escape_time",
    "intensity",
    "new_pixel_buffer",
    "parse_float",
    "parse_pair",
    "parse_unsigned",
    "pixel_grid",
    "pixel_to_point",
    "plan_bands",
    "render",
    "render_band",
]
