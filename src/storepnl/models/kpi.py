"""Filter criteria, adjustment toggles, and computed KPI/variance result models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storepnl.models.records import Dataset


class FilterCriteria(BaseModel):
    """Independently optional record predicates, combined with AND."""

    months: list[str] = Field(default_factory=list)
    stores: list[str] = Field(default_factory=list)
    year: Optional[int] = None
    period_start: str = ""
    period_end: str = ""


class AdjustmentFlags(BaseModel):
    """EBITDA / net profit adjustment toggles."""

    model_config = ConfigDict(frozen=True)

    exclude_sales_of_services: bool = False
    exclude_blue_expenses: bool = False
    exclude_pepe_expenses: bool = False

    @property
    def active(self) -> bool:
        return (
            self.exclude_sales_of_services
            or self.exclude_blue_expenses
            or self.exclude_pepe_expenses
        )


class KPIBundle(BaseModel):
    """Sums and percent-of-revenue figures over a filtered record set."""

    model_config = ConfigDict(populate_by_name=True)

    sales: float = 0.0
    sales_of_services: float = Field(0.0, alias="salesOfServices")
    total_revenue: float = Field(0.0, alias="totalRevenue")
    purchases: float = 0.0
    payroll: float = 0.0
    utilities: float = 0.0
    other_expenses: float = Field(0.0, alias="otherExpenses")
    rent: float = 0.0
    fees: float = 0.0
    severance: float = 0.0
    contribution_margin: float = Field(0.0, alias="contributionMargin")
    ebitda: float = 0.0

    food_cost_percent: str = Field("—", alias="foodCostPercent")
    payroll_percent: str = Field("—", alias="payrollPercent")
    utilities_percent: str = Field("—", alias="utilitiesPercent")
    other_expenses_percent: str = Field("—", alias="otherExpensesPercent")
    rent_percent: str = Field("—", alias="rentPercent")
    fees_percent: str = Field("—", alias="feesPercent")
    ebitda_percent: str = Field("—", alias="ebitdaPercent")
    contribution_margin_percent: str = Field("—", alias="contributionMarginPercent")

    record_count: int = Field(0, alias="recordCount")


class VarianceRow(BaseModel):
    """One field of an actual-vs-budget or store-vs-store comparison."""

    field: str
    actual_or_a: float = Field(alias="actualOrA")
    budget_or_b: float = Field(alias="budgetOrB")
    variance: float
    variance_percent: float = Field(alias="variancePercent")

    model_config = ConfigDict(populate_by_name=True)


class VarianceTable(BaseModel):
    """Variance rows keyed by field, or ``available=False`` when a side is missing."""

    available: bool = True
    label_a: str = ""
    label_b: str = ""
    rows: list[VarianceRow] = Field(default_factory=list)
    message: str = ""

    @classmethod
    def no_data(cls, label_a: str = "", label_b: str = "") -> "VarianceTable":
        return cls(available=False, label_a=label_a, label_b=label_b, message="No data available")

    def by_field(self) -> dict[str, VarianceRow]:
        return {row.field: row for row in self.rows}


class LoadResult(BaseModel):
    """Outcome of loading one source slot (actual or budget)."""

    slot: str
    link_id: str = ""
    dataset: Dataset = Field(default_factory=Dataset)
    error: str = ""
    stale: bool = False

    @property
    def ok(self) -> bool:
        return not self.error and not self.stale
