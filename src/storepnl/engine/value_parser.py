"""Numeric parsing of spreadsheet cells (currency strings, blanks, numbers)."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

CURRENCY_GLYPHS = ("€",)

_WHITESPACE = re.compile(r"\s+")
_ACCOUNTING_NEGATIVE = re.compile(r"^\((.*)\)$")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_numeric(cell: Any) -> float:
    """Convert arbitrary cell content to a finite float. Never raises.

    ``None``/empty -> 0. Numbers pass through (NaN/inf -> 0). Strings lose
    currency glyphs and thousand-separator commas, then the leading decimal
    number is read with ``.`` as the separator, so ``"12.5%"`` is 12.5;
    ``(1,234.00)`` is read as a negative amount. No leading number -> 0.
    """
    if cell is None or isinstance(cell, bool):
        return 0.0
    if isinstance(cell, (int, float, Decimal)):
        value = float(cell)
        return value if math.isfinite(value) else 0.0
    if not isinstance(cell, str):
        return 0.0

    text = cell
    for glyph in CURRENCY_GLYPHS:
        text = text.replace(glyph, "")
    text = text.replace(",", "")
    text = _WHITESPACE.sub(" ", text).strip()
    if not text:
        return 0.0

    negative = False
    match = _ACCOUNTING_NEGATIVE.match(text)
    if match:
        negative = True
        text = match.group(1).strip()

    number = _LEADING_NUMBER.match(text)
    if number is None:
        return 0.0
    value = float(number.group())
    if not math.isfinite(value):
        return 0.0
    return -value if negative else value
