"""Parsing of the delimited number pairs used on the command line."""

from __future__ import annotations

import re
from typing import Callable, TypeVar

from .errors import ElementParseError, NoDelimiterError

T = TypeVar("T")

_UNSIGNED = re.compile(r"\+?[0-9]+\Z")


def parse_unsigned(text: str) -> int:
    """Parse a non-negative integer made of ASCII digits with an optional ``+``."""

    if not _UNSIGNED.match(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal {text!r}")
    return float(text)


def parse_pair(text: str, separator: str, parse: Callable[[str], T]) -> tuple[T, T]:
    """Split ``text`` at the first ``separator`` and parse both sides with ``parse``.

    Raises :class:`NoDelimiterError` when the separator is missing and
    :class:`ElementParseError` when either side is not a valid number.
    """

    index = text.find(separator)
    if index < 0:
        raise NoDelimiterError(text, separator)
    try:
        left = parse(text[:index])
        right = parse(text[index + len(separator):])
    except ValueError as exc:
        raise ElementParseError(exc) from exc
    return left, right
