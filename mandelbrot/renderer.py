"""Escape-time evaluation and rendering of a single band of pixels."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .errors import BufferSizeError
from .geometry import Bounds, Point, pixel_grid

HORIZON = 4.0
ITERATION_LIMIT = 255
BOUNDED = -1


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Return the iteration at which ``z <- z*z + c`` leaves the radius 2 disc.

    ``None`` means the orbit stayed bounded for ``limit`` iterations.
    """

    z = complex(0.0, 0.0)
    for i in range(limit):
        z = z * z + c
        if z.real * z.real + z.imag * z.imag > HORIZON:
            return i
    return None


def intensity(count: Optional[int]) -> int:
    """Gray level for an escape count: fast escapes are bright, the set is black."""

    if count is None:
        return 0
    return 255 - count


@tf.function
def _escape_step(
    i: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    z_re: tf.Tensor,
    z_im: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every orbit that has not escaped by one iteration."""

    # Same operation order as complex multiplication followed by addition.
    next_re = z_re * z_re - z_im * z_im + c_re
    next_im = z_re * z_im + z_im * z_re + c_im
    z_re = tf.where(active, next_re, z_re)
    z_im = tf.where(active, next_im, z_im)
    horizon = tf.constant(HORIZON, dtype=z_re.dtype)
    escaped = tf.logical_and(active, z_re * z_re + z_im * z_im > horizon)
    counts = tf.where(escaped, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped))
    return z_re, z_im, counts, active


@tf.function(
    input_signature=[
        tf.TensorSpec(shape=[None], dtype=tf.float64),
        tf.TensorSpec(shape=[None], dtype=tf.float64),
        tf.TensorSpec(shape=[], dtype=tf.int32),
    ]
)
def _escape_run(c_re: tf.Tensor, c_im: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate all orbits with a TensorFlow while loop, stopping once every point escaped."""

    i = tf.constant(0, dtype=tf.int32)
    z_re = tf.zeros_like(c_re)
    z_im = tf.zeros_like(c_im)
    counts = tf.fill(tf.shape(c_re), tf.constant(BOUNDED, dtype=tf.int32))
    active = tf.ones_like(c_re, dtype=tf.bool)

    def cond(i, z_re, z_im, counts, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, z_re, z_im, counts, active):
        z_re, z_im, counts, active = _escape_step(i, c_re, c_im, z_re, z_im, counts, active)
        return i + 1, z_re, z_im, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, z_re, z_im, counts, active))
    return counts


def escape_counts(c_re: np.ndarray, c_im: np.ndarray, limit: int = ITERATION_LIMIT) -> np.ndarray:
    """Vectorised :func:`escape_time` over flat arrays; bounded points are ``BOUNDED``."""

    with tf.device("/CPU:0"):
        counts = _escape_run(
            tf.convert_to_tensor(c_re, dtype=tf.float64),
            tf.convert_to_tensor(c_im, dtype=tf.float64),
            tf.constant(limit, dtype=tf.int32),
        )
    return counts.numpy()


def render_band(pixels: np.ndarray, bounds: Bounds, upper_left: Point, lower_right: Point) -> None:
    """Fill ``pixels`` with the gray levels of the viewport spanned by the two corners.

    ``pixels`` is a flat row-major ``uint8`` slice holding exactly
    ``bounds.width * bounds.height`` values; nothing outside it is touched.
    """

    if pixels.size != bounds.size:
        raise BufferSizeError(
            f"pixel slice holds {pixels.size} values, bounds {bounds.width}x{bounds.height} need {bounds.size}"
        )
    if bounds.size == 0:
        return

    c_re, c_im = pixel_grid(bounds, upper_left, lower_right)
    counts = escape_counts(c_re, c_im, ITERATION_LIMIT)
    pixels[:] = np.where(counts == BOUNDED, 0, 255 - counts).astype(np.uint8)
