"""Record filtering by caller role, month/store selection, year, and period range."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from storepnl.core.exceptions import ContractViolationError
from storepnl.engine.period import in_range, parse_period, sort_months
from storepnl.models.kpi import FilterCriteria
from storepnl.models.records import CanonicalRecord, Dataset
from storepnl.models.session import SessionContext

_WHITESPACE = re.compile(r"\s+")


def store_key(name: object) -> str:
    """Store identity for role scoping: lower-case, all whitespace removed."""
    return _WHITESPACE.sub("", str(name or "")).lower()


def as_record_list(records: object) -> list[CanonicalRecord]:
    """Accept a Dataset or list/tuple of records; anything else is a caller bug."""
    if isinstance(records, Dataset):
        return list(records.records)
    if isinstance(records, (list, tuple)):
        return list(records)
    raise ContractViolationError(
        f"expected a Dataset or a list of CanonicalRecord, got {type(records).__name__}"
    )


def scope_to_session(
    records: Iterable[CanonicalRecord], session: SessionContext
) -> list[CanonicalRecord]:
    """Drop records the caller may not see. Clients see only their assigned stores."""
    if not session.is_restricted:
        return list(records)
    allowed = {store_key(s) for s in session.assigned_stores}
    return [r for r in records if store_key(r.store) in allowed]


def filter_records(
    records: Dataset | Sequence[CanonicalRecord],
    criteria: FilterCriteria,
    session: SessionContext,
) -> list[CanonicalRecord]:
    """Apply role scoping and every active predicate of ``criteria`` (logical AND)."""
    result = scope_to_session(as_record_list(records), session)

    if criteria.months:
        months = set(criteria.months)
        result = [r for r in result if r.month in months]

    if criteria.stores:
        stores = set(criteria.stores)
        result = [r for r in result if r.store in stores]

    if criteria.year is not None:
        result = [
            r for r in result
            if (p := parse_period(r.month)) is not None and p.year == criteria.year
        ]

    start = parse_period(criteria.period_start)
    end = parse_period(criteria.period_end)
    if start is not None and end is not None:
        result = [
            r for r in result
            if (p := parse_period(r.month)) is not None and in_range(p, start, end)
        ]

    return result


def validate_period_range(start: str, end: str) -> bool:
    """False when both ends parse and the end precedes the start."""
    start_p, end_p = parse_period(start), parse_period(end)
    if start_p is None or end_p is None:
        return True
    return start_p <= end_p


def visible_stores(
    records: Dataset | Sequence[CanonicalRecord], session: SessionContext
) -> list[str]:
    """Distinct store names the caller may select, in first-appearance order."""
    return list(dict.fromkeys(r.store for r in scope_to_session(as_record_list(records), session)))


def visible_months(
    records: Dataset | Sequence[CanonicalRecord], session: SessionContext
) -> list[str]:
    """Distinct month tokens of the caller's records, chronologically sorted."""
    return sort_months(r.month for r in scope_to_session(as_record_list(records), session))
