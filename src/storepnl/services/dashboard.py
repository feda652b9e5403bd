"""DashboardService: source loading per caller plus the KPI/variance/YTD views.

Every fetch produces a brand-new ``Dataset``; views are pure recomputations
over the caller's current datasets, so no locking is needed. A newer source
selection for a slot supersedes any fetch still in flight for that slot.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from storepnl.core.exceptions import StorePnLError
from storepnl.core.protocols import ILinkRegistry, ITabularSource
from storepnl.engine import aggregator
from storepnl.engine.column_resolver import ColumnResolver
from storepnl.engine.filters import filter_records, scope_to_session, visible_months, visible_stores
from storepnl.engine.row_mapper import map_dataset
from storepnl.models.kpi import AdjustmentFlags, FilterCriteria, KPIBundle, LoadResult, VarianceTable
from storepnl.models.records import ALL_FIELDS, CanonicalField, CanonicalRecord, Dataset
from storepnl.models.session import SessionContext

logger = logging.getLogger(__name__)

ACTUAL = "actual"
BUDGET = "budget"
SLOTS = (ACTUAL, BUDGET)


class SelectionTracker:
    """Generation counter per slot; only the latest selection may publish its result."""

    def __init__(self) -> None:
        self._generations: dict[str, int] = {}

    def begin(self, slot: str) -> int:
        self._generations[slot] = self._generations.get(slot, 0) + 1
        return self._generations[slot]

    def is_current(self, slot: str, generation: int) -> bool:
        return self._generations.get(slot) == generation


class SourceWorkspace:
    """One caller's loaded datasets and load errors, by slot."""

    def __init__(self) -> None:
        self.tracker = SelectionTracker()
        self.datasets: dict[str, Dataset] = {}
        self.errors: dict[str, str] = {}
        self.link_ids: dict[str, str] = {}


class DashboardService:
    def __init__(
        self,
        links: ILinkRegistry,
        source: ITabularSource,
        resolver: ColumnResolver | None = None,
        percent_sentinel: str = aggregator.DEFAULT_SENTINEL,
    ) -> None:
        self._links = links
        self._source = source
        self._resolver = resolver or ColumnResolver()
        self._sentinel = percent_sentinel
        self._workspaces: dict[str, SourceWorkspace] = {}

    # ---- workspace ----

    def workspace(self, session: SessionContext) -> SourceWorkspace:
        return self._workspaces.setdefault(session.user_id, SourceWorkspace())

    def dataset(self, session: SessionContext, slot: str) -> Optional[Dataset]:
        """The caller's dataset for a slot, or None if nothing has been loaded."""
        return self.workspace(session).datasets.get(slot)

    def error(self, session: SessionContext, slot: str) -> str:
        return self.workspace(session).errors.get(slot, "")

    def drop_workspace(self, session: SessionContext) -> None:
        """Forget the caller's loaded datasets (on logout)."""
        self._workspaces.pop(session.user_id, None)

    # ---- loading ----

    async def load(self, session: SessionContext, slot: str, link_id: str) -> LoadResult:
        """Fetch and map the source behind ``link_id`` into ``slot``.

        Registry, fetch, decode and layout failures yield an empty dataset plus
        an error message. A completion overtaken by a newer selection is
        discarded and reported as stale.
        """
        if slot not in SLOTS:
            raise ValueError(f"unknown slot {slot!r}")
        ws = self.workspace(session)
        generation = ws.tracker.begin(slot)

        try:
            link = self._links.get_link(link_id)
            table = await self._source.fetch(link.url)
            result = LoadResult(
                slot=slot,
                link_id=link_id,
                dataset=map_dataset(table, link.id, self._resolver),
            )
        except StorePnLError as exc:
            logger.warning("Loading %s source %s failed: %s", slot, link_id, exc)
            result = LoadResult(slot=slot, link_id=link_id, dataset=Dataset(source_id=link_id), error=str(exc))

        if not ws.tracker.is_current(slot, generation):
            logger.info("Discarding stale %s load of %s", slot, link_id)
            return result.model_copy(update={"stale": True})

        ws.datasets[slot] = result.dataset
        ws.errors[slot] = result.error
        ws.link_ids[slot] = link_id
        return result

    async def load_pair(
        self, session: SessionContext, actual_link_id: str, budget_link_id: str = ""
    ) -> list[LoadResult]:
        """Load actual and budget sources concurrently."""
        jobs = [self.load(session, ACTUAL, actual_link_id)]
        if budget_link_id:
            jobs.append(self.load(session, BUDGET, budget_link_id))
        return list(await asyncio.gather(*jobs))

    # ---- views ----

    def _scoped(self, session: SessionContext, slot: str) -> Optional[list[CanonicalRecord]]:
        dataset = self.dataset(session, slot)
        if dataset is None or dataset.is_empty:
            return None
        return scope_to_session(dataset.records, session)

    def records(self, session: SessionContext, criteria: FilterCriteria | None = None) -> list[CanonicalRecord]:
        dataset = self.dataset(session, ACTUAL) or Dataset()
        return filter_records(dataset, criteria or FilterCriteria(), session)

    def stores(self, session: SessionContext) -> list[str]:
        return visible_stores(self.dataset(session, ACTUAL) or Dataset(), session)

    def months(self, session: SessionContext) -> list[str]:
        return visible_months(self.dataset(session, ACTUAL) or Dataset(), session)

    def kpis(
        self,
        session: SessionContext,
        criteria: FilterCriteria | None = None,
        exclude_severance: bool = False,
    ) -> KPIBundle:
        return aggregator.calculate_kpis(
            self.records(session, criteria), exclude_severance, self._sentinel,
        )

    def actual_vs_budget(
        self,
        session: SessionContext,
        store: str,
        month: str,
        fields: Sequence[CanonicalField | str] = ALL_FIELDS,
        flags: AdjustmentFlags = AdjustmentFlags(),
    ) -> VarianceTable:
        actual = self._scoped(session, ACTUAL)
        budget = self._scoped(session, BUDGET)
        if actual is None or budget is None:
            return VarianceTable.no_data("Actual", "Budget")
        a = _find(actual, store, month)
        b = _find(budget, store, month)
        return aggregator.compare_records(
            aggregator.adjust_record(a, actual, flags) if a else None,
            aggregator.adjust_record(b, budget, flags) if b else None,
            fields,
            label_a="Actual",
            label_b="Budget",
        )

    def store_vs_store(
        self,
        session: SessionContext,
        store_a: str,
        store_b: str,
        month: str,
        fields: Sequence[CanonicalField | str] = ALL_FIELDS,
        flags: AdjustmentFlags = AdjustmentFlags(),
    ) -> VarianceTable:
        actual = self._scoped(session, ACTUAL)
        if actual is None:
            return VarianceTable.no_data(store_a, store_b)
        a = _find(actual, store_a, month)
        b = _find(actual, store_b, month)
        return aggregator.compare_records(
            aggregator.adjust_record(a, actual, flags) if a else None,
            aggregator.adjust_record(b, actual, flags) if b else None,
            fields,
            label_a=store_a,
            label_b=store_b,
        )

    def ytd(
        self,
        session: SessionContext,
        store: str,
        target_month: str,
        fields: Sequence[CanonicalField | str] = ALL_FIELDS,
        flags: AdjustmentFlags = AdjustmentFlags(),
    ) -> VarianceTable:
        actual = self._scoped(session, ACTUAL)
        if actual is None:
            return VarianceTable.no_data("Actual YTD", "Budget YTD")
        return aggregator.ytd_comparison(
            actual, self._scoped(session, BUDGET), store, target_month, fields, flags,
        )


def _find(records: list[CanonicalRecord], store: str, month: str) -> Optional[CanonicalRecord]:
    return next((r for r in records if r.store == store and r.month == month), None)
