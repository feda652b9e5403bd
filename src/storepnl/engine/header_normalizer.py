"""Canonical form of raw column names, used only for matching (never display)."""

from __future__ import annotations

import re
from typing import Any

# Latin letters that are visually identical to Greek capitals/lowercase.
LOOKALIKES: dict[str, str] = {
    "O": "Ο", "I": "Ι", "A": "Α", "B": "Β", "E": "Ε", "H": "Η", "K": "Κ",
    "M": "Μ", "N": "Ν", "P": "Ρ", "T": "Τ", "Y": "Υ", "X": "Χ",
    "o": "ο", "i": "ι", "a": "α", "b": "β", "e": "ε", "h": "η", "k": "κ",
    "m": "μ", "n": "ν", "p": "ρ", "t": "τ", "y": "υ", "x": "χ",
}

_FOLD = str.maketrans(LOOKALIKES)
_SPACES = re.compile(r"[\s\u00a0\u2007\u202f]+")


def normalize_header(name: Any) -> str:
    """Fold Latin lookalikes to Greek, collapse whitespace, trim, lower-case.

    The fold runs again after lower-casing so that any Latin letter produced
    by ``str.lower`` is folded too; this keeps the function idempotent.
    """
    if name is None:
        return ""
    text = str(name).translate(_FOLD)
    text = _SPACES.sub(" ", text).strip()
    return text.lower().translate(_FOLD)
