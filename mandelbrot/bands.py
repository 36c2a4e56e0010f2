"""Partitioning of an image into horizontal bands and their dispatch to threads."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Thread
from typing import Callable, Optional

import numpy as np

from .errors import BufferSizeError
from .geometry import Bounds, Point, pixel_to_point
from .renderer import render_band

Log = Callable[[str], None]


@dataclass(frozen=True)
class Band:
    """A run of whole rows of the image, with its own slice of the viewport."""

    index: int
    top: int
    bounds: Bounds
    upper_left: Point
    lower_right: Point
    start: int
    stop: int


def new_pixel_buffer(bounds: Bounds) -> np.ndarray:
    return np.zeros(bounds.size, dtype=np.uint8)


def band_rows(bounds: Bounds, threads: int) -> int:
    # One extra row so that the division never leaves rows uncovered.
    return bounds.height // threads + 1


def plan_bands(bounds: Bounds, upper_left: Point, lower_right: Point, threads: int) -> list[Band]:
    """Split the image into consecutive bands of ``band_rows`` rows each.

    The last band may be shorter. Band corners come from the mapping of the
    whole image so that neighbouring bands meet exactly.
    """

    if bounds.size == 0:
        return []

    rows = band_rows(bounds, threads)
    chunk = rows * bounds.width
    bands = []
    for index, start in enumerate(range(0, bounds.size, chunk)):
        stop = min(start + chunk, bounds.size)
        top = rows * index
        height = (stop - start) // bounds.width
        bands.append(
            Band(
                index=index,
                top=top,
                bounds=Bounds(bounds.width, height),
                upper_left=pixel_to_point(bounds, (0, top), upper_left, lower_right),
                lower_right=pixel_to_point(bounds, (bounds.width, top + height), upper_left, lower_right),
                start=start,
                stop=stop,
            )
        )
    return bands


class _BandWorker(Thread):
    """Render one band into its own view of the pixel buffer."""

    def __init__(self, band: Band, pixels: np.ndarray, log: Optional[Log]) -> None:
        super().__init__(name=f"band-{band.index}")
        self.band = band
        self.pixels = pixels
        self.log = log
        self.error: Optional[Exception] = None

    def run(self) -> None:
        band = self.band
        if self.log is not None:
            self.log(f">>> Thread #{band.index}, {self.pixels.size} pixels")
        try:
            render_band(self.pixels, band.bounds, band.upper_left, band.lower_right)
        except Exception as exc:
            self.error = exc
            return
        if self.log is not None:
            self.log(f"<<< Thread #{band.index}")


def render(
    pixels: np.ndarray,
    bounds: Bounds,
    upper_left: Point,
    lower_right: Point,
    threads: int,
    *,
    log: Optional[Log] = None,
) -> None:
    """Render the whole viewport into ``pixels``, using ``threads`` workers when above one.

    Every worker is joined before this returns. If any band failed, the first
    failure is raised and the buffer must be discarded.
    """

    if pixels.size != bounds.size:
        raise BufferSizeError(f"pixel buffer holds {pixels.size} values, bounds need {bounds.size}")

    if threads <= 1:
        if log is not None:
            log("Sequential.")
        render_band(pixels, bounds, upper_left, lower_right)
        return

    if log is not None:
        log(f"Parallel using {threads} threads.")
    workers = [
        _BandWorker(band, pixels[band.start:band.stop], log)
        for band in plan_bands(bounds, upper_left, lower_right, threads)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    for worker in workers:
        if worker.error is not None:
            raise worker.error
