"""Maps raw spreadsheet rows onto canonical (store, month) records.

Positional contract: the first column of a source is the month token and the
second is the store name, whatever their header text says. Sources with
fewer than two columns are rejected with ``SourceLayoutError``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from storepnl.core.exceptions import SourceLayoutError
from storepnl.engine.column_resolver import ColumnResolver
from storepnl.engine.value_parser import parse_numeric
from storepnl.models.records import CanonicalRecord, Dataset, RawRow, TabularData

logger = logging.getLogger(__name__)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        return ""
    return str(value).strip()


def map_row(
    raw_row: RawRow,
    columns: Sequence[str],
    resolver: Optional[ColumnResolver] = None,
) -> Optional[CanonicalRecord]:
    """Build a ``CanonicalRecord`` from one raw row, or None if month/store is missing."""
    if len(columns) < 2:
        return None
    month_col, store_col = columns[0], columns[1]
    month = _cell_text(raw_row.get(month_col))
    store = _cell_text(raw_row.get(store_col))
    if not month or not store:
        return None

    resolver = resolver or ColumnResolver()
    headers = [h for h in raw_row if h not in (month_col, store_col)]
    values = {
        field.value: parse_numeric(raw_row.get(header)) if header is not None else 0.0
        for field, header in resolver.resolve_all(headers).items()
    }
    return CanonicalRecord.model_validate({"month": month, "store": store, **values})


def map_dataset(
    table: TabularData,
    source_id: str = "",
    resolver: Optional[ColumnResolver] = None,
) -> Dataset:
    """Map every row of a decoded source. Later rows win for a repeated (store, month)."""
    if len(table.columns) < 2:
        raise SourceLayoutError(source_id, len(table.columns))

    resolver = resolver or ColumnResolver()
    by_key: dict[tuple[str, str], CanonicalRecord] = {}
    dropped = 0
    duplicates = 0

    for raw_row in table.rows:
        record = map_row(raw_row, table.columns, resolver)
        if record is None:
            dropped += 1
            continue
        if record.key in by_key:
            duplicates += 1
            logger.warning(
                "Duplicate row for store=%r month=%r in source %r; keeping the later one",
                record.store, record.month, source_id,
            )
        by_key[record.key] = record

    if dropped:
        logger.debug("Dropped %d row(s) without month/store from source %r", dropped, source_id)

    return Dataset(source_id=source_id, records=list(by_key.values()), duplicates=duplicates)
