"""KPI sums, percent-of-revenue, EBITDA adjustment, variance, and YTD aggregation.

Two divide-by-zero policies live here on purpose and must stay distinct:
percent-of-revenue reports a sentinel string when revenue is zero, while
variance percent falls back to ``0`` when the comparison base is zero.
"""

from __future__ import annotations

from typing import Optional, Sequence

from storepnl.engine.filters import as_record_list
from storepnl.engine.period import months_up_to, parse_period, sort_months
from storepnl.models.kpi import AdjustmentFlags, KPIBundle, VarianceRow, VarianceTable
from storepnl.models.records import ALL_FIELDS, CanonicalField, CanonicalRecord, Dataset

DEFAULT_SENTINEL = "—"

PERCENT_OF_REVENUE: dict[str, CanonicalField] = {
    "foodCostPercent": CanonicalField.PURCHASES,
    "payrollPercent": CanonicalField.PAYROLL,
    "utilitiesPercent": CanonicalField.UTILITIES,
    "otherExpensesPercent": CanonicalField.OTHER_EXPENSES,
    "rentPercent": CanonicalField.RENT,
    "feesPercent": CanonicalField.FEES,
    "ebitdaPercent": CanonicalField.EBITDA,
    "contributionMarginPercent": CanonicalField.CONTRIBUTION_MARGIN,
}

RecordsLike = Dataset | Sequence[CanonicalRecord]


# ---------------------------------------------------------------------------
# Sums and percentages
# ---------------------------------------------------------------------------

def sum_field(records: RecordsLike, field: CanonicalField | str) -> float:
    return sum((r.value(field) for r in as_record_list(records)), 0.0)


def total_revenue(records: RecordsLike) -> float:
    """Sales plus sales of services."""
    items = as_record_list(records)
    return sum_field(items, CanonicalField.SALES) + sum_field(items, CanonicalField.SALES_OF_SERVICES)


def percent_of_revenue(value: float, revenue: float, sentinel: str = DEFAULT_SENTINEL) -> str:
    if not revenue:
        return sentinel
    return f"{value / revenue * 100:.2f}%"


def calculate_kpis(
    records: RecordsLike,
    exclude_severance: bool = False,
    sentinel: str = DEFAULT_SENTINEL,
) -> KPIBundle:
    """Sum the P&L lines of a (filtered) record set and express costs against revenue.

    With ``exclude_severance`` the summed severance is added back to EBITDA
    before the EBITDA percentage is taken.
    """
    items = as_record_list(records)
    sums = {f: sum_field(items, f) for f in ALL_FIELDS}
    revenue = sums[CanonicalField.SALES] + sums[CanonicalField.SALES_OF_SERVICES]

    severance = sums[CanonicalField.SEVERANCE]
    if exclude_severance and severance:
        sums[CanonicalField.EBITDA] += severance

    percents = {
        name: percent_of_revenue(sums[field], revenue, sentinel)
        for name, field in PERCENT_OF_REVENUE.items()
    }
    return KPIBundle.model_validate({
        "sales": sums[CanonicalField.SALES],
        "salesOfServices": sums[CanonicalField.SALES_OF_SERVICES],
        "totalRevenue": revenue,
        "purchases": sums[CanonicalField.PURCHASES],
        "payroll": sums[CanonicalField.PAYROLL],
        "utilities": sums[CanonicalField.UTILITIES],
        "otherExpenses": sums[CanonicalField.OTHER_EXPENSES],
        "rent": sums[CanonicalField.RENT],
        "fees": sums[CanonicalField.FEES],
        "severance": severance,
        "contributionMargin": sums[CanonicalField.CONTRIBUTION_MARGIN],
        "ebitda": sums[CanonicalField.EBITDA],
        "recordCount": len(items),
        **percents,
    })


# ---------------------------------------------------------------------------
# EBITDA / net profit adjustment
# ---------------------------------------------------------------------------

def adjust_record(
    record: CanonicalRecord,
    source: RecordsLike,
    flags: AdjustmentFlags,
) -> CanonicalRecord:
    """Re-derive EBITDA and net profit from the untouched source row.

    The original is looked up by (store, month) in ``source`` so that repeated
    calls never compound; ``record`` itself is used only if the source lacks it.
    """
    original = next(
        (r for r in as_record_list(source) if r.key == record.key),
        record,
    )
    if not flags.active:
        return original

    ebitda = original.ebitda
    net_profit = original.net_profit
    if flags.exclude_sales_of_services:
        ebitda -= original.sales_of_services
        net_profit -= original.sales_of_services
    if flags.exclude_blue_expenses:
        ebitda += original.blue_expenses
        net_profit += original.blue_expenses
    if flags.exclude_pepe_expenses:
        ebitda += original.pepe_expenses
        net_profit += original.pepe_expenses
    return original.with_values(ebitda=ebitda, netProfit=net_profit)


# ---------------------------------------------------------------------------
# Variance
# ---------------------------------------------------------------------------

def variance_percent(a: float, b: float) -> float:
    """``(a - b) / b * 100``, or 0 when ``b`` is zero."""
    return (a - b) / b * 100 if b != 0 else 0.0


def _variance_rows(
    a_values: dict[str, float], b_values: dict[str, float], fields: Sequence[CanonicalField | str]
) -> list[VarianceRow]:
    rows = []
    for field in fields:
        name = CanonicalField(field).value
        a = a_values.get(name, 0.0)
        b = b_values.get(name, 0.0)
        rows.append(VarianceRow(
            field=name,
            actualOrA=a,
            budgetOrB=b,
            variance=a - b,
            variancePercent=variance_percent(a, b),
        ))
    return rows


def compare_records(
    a: Optional[CanonicalRecord],
    b: Optional[CanonicalRecord],
    fields: Sequence[CanonicalField | str] = ALL_FIELDS,
    label_a: str = "",
    label_b: str = "",
) -> VarianceTable:
    """Field-by-field variance of two records; "no data" if either side is missing."""
    if a is None or b is None:
        return VarianceTable.no_data(label_a, label_b)
    return VarianceTable(
        label_a=label_a,
        label_b=label_b,
        rows=_variance_rows(a.values(), b.values(), fields),
    )


# ---------------------------------------------------------------------------
# Year to date
# ---------------------------------------------------------------------------

def ytd_months(source: RecordsLike, target_month: str) -> list[str]:
    """Chronological months of ``source`` up to and including ``target_month``."""
    months = sort_months(r.month for r in as_record_list(source))
    dated = [m for m in months if parse_period(m) is not None]
    return months_up_to(dated, target_month)


def ytd_totals(
    source: RecordsLike,
    store: str,
    target_month: str,
    fields: Sequence[CanonicalField | str] = ALL_FIELDS,
    flags: AdjustmentFlags = AdjustmentFlags(),
    months: Optional[Sequence[str]] = None,
) -> dict[str, float]:
    """Per-field sums of one store's adjusted records over the YTD window.

    ``months`` is the ordered month list the window is cut from; it defaults
    to the source's own chronological months.
    """
    items = as_record_list(source)
    window = set(
        months_up_to(list(months), target_month) if months is not None
        else ytd_months(items, target_month)
    )
    totals = {CanonicalField(f).value: 0.0 for f in fields}
    for record in items:
        if record.store != store or record.month not in window:
            continue
        if parse_period(record.month) is None:
            continue
        effective = adjust_record(record, items, flags)
        for name in totals:
            totals[name] += effective.value(name)
    return totals


def ytd_comparison(
    actual: RecordsLike,
    budget: Optional[RecordsLike],
    store: str,
    target_month: str,
    fields: Sequence[CanonicalField | str] = ALL_FIELDS,
    flags: AdjustmentFlags = AdjustmentFlags(),
) -> VarianceTable:
    """Actual vs budget YTD totals, both windowed on the actual source's months."""
    actual_items = as_record_list(actual)
    if budget is None or not actual_items:
        return VarianceTable.no_data("Actual YTD", "Budget YTD")
    budget_items = as_record_list(budget)
    if not budget_items:
        return VarianceTable.no_data("Actual YTD", "Budget YTD")

    months = ytd_months(actual_items, target_month)
    if not months:
        return VarianceTable.no_data("Actual YTD", "Budget YTD")
    actual_totals = ytd_totals(actual_items, store, target_month, fields, flags, months)
    budget_totals = ytd_totals(budget_items, store, target_month, fields, flags, months)
    return VarianceTable(
        label_a="Actual YTD",
        label_b="Budget YTD",
        rows=_variance_rows(actual_totals, budget_totals, fields),
    )
