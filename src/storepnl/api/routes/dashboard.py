"""Dashboard endpoints: source selection, records, KPIs, variance and YTD views."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from storepnl.api.deps import get_dashboard, get_session
from storepnl.engine.filters import validate_period_range
from storepnl.models.kpi import AdjustmentFlags, FilterCriteria, LoadResult
from storepnl.models.records import ALL_FIELDS, CanonicalField
from storepnl.models.session import SessionContext
from storepnl.services.dashboard import DashboardService

router = APIRouter(tags=["dashboard"])


class SourceSelection(BaseModel):
    actual_link_id: str
    budget_link_id: str = ""


def filter_criteria(
    months: list[str] = Query(default=[]),
    stores: list[str] = Query(default=[]),
    year: Optional[int] = None,
    period_start: str = "",
    period_end: str = "",
) -> FilterCriteria:
    if period_start and period_end and not validate_period_range(period_start, period_end):
        raise HTTPException(status_code=422, detail="period_start must not be after period_end")
    return FilterCriteria(
        months=months, stores=stores, year=year,
        period_start=period_start, period_end=period_end,
    )


def adjustment_flags(
    exclude_sales_of_services: bool = False,
    exclude_blue_expenses: bool = False,
    exclude_pepe_expenses: bool = False,
) -> AdjustmentFlags:
    return AdjustmentFlags(
        exclude_sales_of_services=exclude_sales_of_services,
        exclude_blue_expenses=exclude_blue_expenses,
        exclude_pepe_expenses=exclude_pepe_expenses,
    )


def selected_fields(fields: list[str] = Query(default=[])) -> tuple[CanonicalField, ...]:
    if not fields:
        return ALL_FIELDS
    try:
        return tuple(CanonicalField(f) for f in fields)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _summary(result: LoadResult) -> dict:
    return {
        "slot": result.slot,
        "linkId": result.link_id,
        "ok": result.ok,
        "stale": result.stale,
        "error": result.error,
        "recordCount": len(result.dataset.records),
        "duplicates": result.dataset.duplicates,
    }


@router.post("/sources")
async def select_sources(
    body: SourceSelection,
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> list[dict]:
    results = await service.load_pair(session, body.actual_link_id, body.budget_link_id)
    return [_summary(r) for r in results]


@router.get("/records")
async def records(
    criteria: FilterCriteria = Depends(filter_criteria),
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> list[dict]:
    return [r.model_dump(by_alias=True) for r in service.records(session, criteria)]


@router.get("/stores")
async def stores(
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> list[str]:
    return service.stores(session)


@router.get("/months")
async def months(
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> list[str]:
    return service.months(session)


@router.get("/kpis")
async def kpis(
    exclude_severance: bool = False,
    criteria: FilterCriteria = Depends(filter_criteria),
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> dict:
    return service.kpis(session, criteria, exclude_severance).model_dump(by_alias=True)


@router.get("/compare/actual-budget")
async def actual_vs_budget(
    store: str,
    month: str,
    fields: tuple[CanonicalField, ...] = Depends(selected_fields),
    flags: AdjustmentFlags = Depends(adjustment_flags),
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> dict:
    return service.actual_vs_budget(session, store, month, fields, flags).model_dump(by_alias=True)


@router.get("/compare/stores")
async def store_vs_store(
    store_a: str,
    store_b: str,
    month: str,
    fields: tuple[CanonicalField, ...] = Depends(selected_fields),
    flags: AdjustmentFlags = Depends(adjustment_flags),
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> dict:
    table = service.store_vs_store(session, store_a, store_b, month, fields, flags)
    return table.model_dump(by_alias=True)


@router.get("/ytd")
async def ytd(
    store: str,
    month: str,
    fields: tuple[CanonicalField, ...] = Depends(selected_fields),
    flags: AdjustmentFlags = Depends(adjustment_flags),
    session: SessionContext = Depends(get_session),
    service: DashboardService = Depends(get_dashboard),
) -> dict:
    return service.ytd(session, store, month, fields, flags).model_dump(by_alias=True)
