"""``Mon-YY`` month tokens: parsing, chronological ordering, YTD windows."""

from __future__ import annotations

from typing import Iterable, Optional

from storepnl.models.records import CanonicalRecord, Period

MONTH_INDEX: dict[str, int] = {
    "Jan": 0, "Feb": 1, "Mar": 2, "Apr": 3, "May": 4, "Jun": 5,
    "Jul": 6, "Aug": 7, "Sep": 8, "Oct": 9, "Nov": 10, "Dec": 11,
}


def parse_period(token: object) -> Optional[Period]:
    """Parse ``"Jan-24"`` into ``Period(month=0, year=2024)``; anything else is None."""
    if not isinstance(token, str):
        return None
    parts = token.strip().split("-")
    if len(parts) != 2:
        return None
    month_name, year_text = parts
    month = MONTH_INDEX.get(month_name)
    if month is None or len(year_text) != 2 or not year_text.isdigit():
        return None
    return Period(month=month, year=2000 + int(year_text))


def sort_months(tokens: Iterable[str]) -> list[str]:
    """Distinct tokens in chronological order; unparseable tokens trail in input order."""
    distinct = list(dict.fromkeys(tokens))
    parsed = [(t, parse_period(t)) for t in distinct]
    dated = sorted(
        ((t, p) for t, p in parsed if p is not None),
        key=lambda tp: (tp[1].year, tp[1].month),
    )
    undated = [t for t, p in parsed if p is None]
    return [t for t, _ in dated] + undated


def months_up_to(months: list[str], target: str) -> list[str]:
    """Prefix of the sorted month list ending at ``target`` (inclusive).

    Position in the list decides, not a date comparison. An unknown target
    yields the whole list.
    """
    if target not in months:
        return list(months)
    return months[: months.index(target) + 1]


def available_years(records: Iterable[CanonicalRecord]) -> list[int]:
    years = {p.year for p in (parse_period(r.month) for r in records) if p is not None}
    return sorted(years)


def in_range(period: Period, start: Period, end: Period) -> bool:
    return start <= period and period <= end
