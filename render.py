import os
import sys
import time
import warnings
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_HELP_FLAGS = {"--help", "-h"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import numpy as np
import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

import PIL.Image

from mandelbrot import Bounds, ParsePairError, Point, new_pixel_buffer, parse_unsigned, render

from argparse import ArgumentParser, ArgumentTypeError


class _Parser(ArgumentParser):
    """Argument parser whose usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _pair_argument(parse, what):
    def convert(text):
        try:
            return parse(text)
        except ParsePairError as exc:
            raise ArgumentTypeError(f"error parsing {what}: {exc}") from exc

    return convert


def _bounds_argument(text):
    bounds = _pair_argument(Bounds.parse, "image dimensions")(text)
    if bounds.width == 0 or bounds.height == 0:
        raise ArgumentTypeError(f"error parsing image dimensions: {text!r} has a zero side")
    return bounds


def _threads_argument(text):
    try:
        return parse_unsigned(text)
    except ValueError as exc:
        raise ArgumentTypeError(f"error parsing thread count: {exc}") from exc


def build_parser():
    parser = _Parser(
        prog="mandelbrot-render",
        description="Render the Mandelbrot set to a grayscale image, optionally in parallel bands.",
    )

    parser.add_argument('file', type=Path, metavar='FILE',
                        help='image file to write; the format follows the extension (PNG when unknown)')

    parser.add_argument('bounds', type=_bounds_argument, metavar='PIXELS',
                        help='image size in pixels, as WIDTHxHEIGHT')

    parser.add_argument('upper_left', type=_pair_argument(Point.parse, "upper left corner point"),
                        metavar='UPPERLEFT', help='upper left corner of the viewport, as X,Y')

    parser.add_argument('lower_right', type=_pair_argument(Point.parse, "lower right corner point"),
                        metavar='LOWERRIGHT', help='lower right corner of the viewport, as X,Y')

    parser.add_argument('threads', type=_threads_argument, metavar='THREADS',
                        help='number of bands rendered in parallel; 0 or 1 renders sequentially')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics and timings.')

    return parser


def _separate_positionals(argv):
    # Corners such as "-1.20,0.35" look like options to argparse.
    flags = [arg for arg in argv if arg in _VERBOSE_FLAGS or arg in _HELP_FLAGS]
    positionals = [arg for arg in argv if arg not in _VERBOSE_FLAGS and arg not in _HELP_FLAGS]
    return [*flags, "--", *positionals]


def _pil_format_name(path: Path) -> str:
    pil_format = PIL.Image.registered_extensions().get(path.suffix.lower())
    if pil_format is None or pil_format not in PIL.Image.SAVE:
        return "PNG"
    return pil_format


def write_bitmap(path: Path, pixels: np.ndarray, bounds: Bounds) -> None:
    """Write ``pixels`` as an 8-bit grayscale image of ``bounds`` to ``path``."""

    image = PIL.Image.fromarray(pixels.reshape(bounds.height, bounds.width))
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(path), format=_pil_format_name(path))


def main(argv=None):
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    opt = parser.parse_args(_separate_positionals(argv))

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    log("TensorFlow version: %s" % tf.__version__)

    pixels = new_pixel_buffer(opt.bounds)

    started = time.perf_counter()
    render(pixels, opt.bounds, opt.upper_left, opt.lower_right, opt.threads, log=print)
    log("Rendered %dx%d pixels in %.3fs" % (opt.bounds.width, opt.bounds.height, time.perf_counter() - started))

    try:
        write_bitmap(opt.file, pixels, opt.bounds)
    except OSError as exc:
        parser.exit(1, f"error writing image file {opt.file}: {exc}\n")
    log("Wrote %s" % opt.file)


if __name__ == '__main__':
    main()
