"""Scalar converters from raw CSV text to nullable typed values."""

from __future__ import annotations

import math
import re
from typing import Optional

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _strip(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    return text or None


def to_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer, returning ``None`` for blank or non-numeric text.

    Integral decimal text such as ``"183.0"`` is accepted; fractional values
    are truncated toward zero.
    """

    text = _strip(value)
    if text is None:
        return None
    if _INT_PATTERN.fullmatch(text):
        return int(text)
    number = to_float(text)
    if number is None:
        return None
    return int(number)


def to_float(value: Optional[str]) -> Optional[float]:
    """Parse a finite float, returning ``None`` for anything else."""

    text = _strip(value)
    if text is None or not _DECIMAL_PATTERN.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def clean_str(value: Optional[str]) -> Optional[str]:
    return _strip(value)


def required_str(value: Optional[str]) -> str:
    """Return trimmed text, using ``""`` to mark a missing required field."""

    return _strip(value) or ""
