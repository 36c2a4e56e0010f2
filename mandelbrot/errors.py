"""Exception types raised by the Mandelbrot rendering package."""

from __future__ import annotations


class ParsePairError(ValueError):
    """A ``"<left><separator><right>"`` string could not be parsed."""


class NoDelimiterError(ParsePairError):
    """The separator does not occur in the input."""

    def __init__(self, text: str, separator: str) -> None:
        super().__init__(f"no {separator!r} delimiter in {text!r}")
        self.text = text
        self.separator = separator


class ElementParseError(ParsePairError):
    """One side of the pair failed numeric parsing.

    ``error`` holds the underlying parse failure.
    """

    def __init__(self, error: ValueError) -> None:
        super().__init__(str(error))
        self.error = error


class BufferSizeError(AssertionError):
    """A pixel slice does not hold exactly ``width * height`` values."""
