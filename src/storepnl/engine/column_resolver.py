"""Tiered matching of canonical-field aliases against a row's actual headers.

Tiers run strictly in order and the first tier with a hit wins:

1. exact string match
2. match after ``normalize_header`` on both sides
3. keyword match: every significant token of an alias occurs in the header
4. substring match: header contains alias, or alias contains header

Within a tier, aliases are tried in the order given (most specific first),
and headers in their source order.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Sequence

from storepnl.engine.candidates import CandidateTable, load_candidate_table
from storepnl.engine.header_normalizer import normalize_header
from storepnl.models.records import ALL_FIELDS, CanonicalField

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 3

_TOKEN_SPLIT = re.compile(r"[\s()/,]+")

EXACT_TIERS = (1, 2)
FUZZY_TIERS = (3, 4)


def _tokens(text: str) -> list[str]:
    return [t for t in _TOKEN_SPLIT.split(normalize_header(text)) if len(t) >= MIN_KEYWORD_LENGTH]


def keyword_groups(candidate: str) -> list[list[str]]:
    """Token sets an alias can be matched by in the keyword tier.

    A bilingual alias ``"ΠΩΛΗΣΕΙΣ (SALES)"`` yields the full token set plus
    one set per language half, so an English-only or Greek-only header still
    satisfies the keyword tier.
    """
    parts = [candidate]
    open_at = candidate.find("(")
    if open_at > 0:
        parts.append(candidate[:open_at])
        parts.append(candidate[open_at + 1:].rstrip().rstrip(")"))
    groups: list[list[str]] = []
    for part in parts:
        tokens = _tokens(part)
        if tokens and tokens not in groups:
            groups.append(tokens)
    return groups


def _match_tier(tier: int, headers: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    if tier == 1:
        present = set(headers)
        for candidate in candidates:
            if candidate in present:
                return candidate
        return None

    normalized = [(h, normalize_header(h)) for h in headers]

    if tier == 2:
        for candidate in candidates:
            target = normalize_header(candidate)
            for header, norm in normalized:
                if norm == target:
                    return header
        return None

    if tier == 3:
        for candidate in candidates:
            for group in keyword_groups(candidate):
                for header, norm in normalized:
                    if all(token in norm for token in group):
                        return header
        return None

    for candidate in candidates:
        target = normalize_header(candidate)
        if not target:
            continue
        for header, norm in normalized:
            if norm and (target in norm or norm in target):
                return header
    return None


def resolve_column(
    actual_headers: Iterable[str],
    candidates: Sequence[str],
    tiers: Sequence[int] = EXACT_TIERS + FUZZY_TIERS,
) -> Optional[str]:
    """Return the actual header best matching ``candidates``, or None when no tier matches."""
    headers = [h for h in dict.fromkeys(actual_headers) if isinstance(h, str)]
    if not headers or not candidates:
        return None
    for tier in tiers:
        found = _match_tier(tier, headers, candidates)
        if found is not None:
            return found
    return None


class ColumnResolver:
    """Resolves every canonical field for a header set, memoized per header set.

    Exact and normalized matches are assigned first across all fields; the
    headers they claim are withheld from the keyword and substring tiers of
    the remaining fields, so ``"Sales"`` cannot also be read as
    ``"Sales of Services"``.
    """

    def __init__(self, table: CandidateTable | None = None) -> None:
        self._table = table or load_candidate_table()
        self._cache: dict[tuple[str, ...], dict[CanonicalField, Optional[str]]] = {}

    @property
    def table(self) -> CandidateTable:
        return self._table

    def resolve_all(self, headers: Sequence[str]) -> dict[CanonicalField, Optional[str]]:
        key = tuple(headers)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        resolved: dict[CanonicalField, Optional[str]] = {}
        claimed: set[str] = set()

        for field in ALL_FIELDS:
            header = resolve_column(headers, self._table.candidates(field), tiers=EXACT_TIERS)
            resolved[field] = header
            if header is not None:
                claimed.add(header)

        for field in ALL_FIELDS:
            if resolved[field] is not None:
                continue
            remaining = [h for h in headers if h not in claimed]
            header = resolve_column(remaining, self._table.candidates(field), tiers=FUZZY_TIERS)
            resolved[field] = header
            if header is None:
                logger.debug("No column for %s among %d headers", field.value, len(headers))
            else:
                claimed.add(header)

        self._cache[key] = resolved
        return resolved
