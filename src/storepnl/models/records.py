"""Canonical financial records: the normalized structure all engine stages operate on.

Every spreadsheet row, regardless of the header labels of its source file, is
mapped into a ``CanonicalRecord`` keyed by (store, month).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CanonicalField(StrEnum):
    SALES = "sales"
    SALES_OF_SERVICES = "salesOfServices"
    PURCHASES = "purchases"
    PAYROLL = "payroll"
    UTILITIES = "utilities"
    OTHER_EXPENSES = "otherExpenses"
    RENT = "rent"
    FEES = "fees"
    SEVERANCE = "severance"
    CONTRIBUTION_MARGIN = "contributionMargin"
    EBITDA = "ebitda"
    BLUE_EXPENSES = "blueExpenses"
    PEPE_EXPENSES = "pepeExpenses"
    BANK_EXPENSES = "bankExpenses"
    NET_PROFIT = "netProfit"


ALL_FIELDS: tuple[CanonicalField, ...] = tuple(CanonicalField)

RawRow = dict[str, Any]


class TabularData(BaseModel):
    """Decoded spreadsheet: ordered header list plus one dict per data row."""

    columns: list[str] = Field(default_factory=list)
    rows: list[RawRow] = Field(default_factory=list)


class CanonicalRecord(BaseModel):
    """One store's P&L for one month."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    month: str
    store: str

    # --- Revenue ---
    sales: float = 0.0
    sales_of_services: float = Field(0.0, alias="salesOfServices")

    # --- Operating costs ---
    purchases: float = 0.0
    payroll: float = 0.0
    utilities: float = 0.0
    other_expenses: float = Field(0.0, alias="otherExpenses")
    rent: float = 0.0
    fees: float = 0.0
    severance: float = 0.0

    # --- Results ---
    contribution_margin: float = Field(0.0, alias="contributionMargin")
    ebitda: float = 0.0
    blue_expenses: float = Field(0.0, alias="blueExpenses")
    pepe_expenses: float = Field(0.0, alias="pepeExpenses")
    bank_expenses: float = Field(0.0, alias="bankExpenses")
    net_profit: float = Field(0.0, alias="netProfit")

    @property
    def key(self) -> tuple[str, str]:
        return (self.store, self.month)

    def value(self, field: CanonicalField | str) -> float:
        """Numeric value of a canonical field, addressed by its camelCase name."""
        name = CanonicalField(field)
        return getattr(self, _ATTRIBUTE_BY_FIELD[name])

    def values(self) -> dict[str, float]:
        return {f.value: self.value(f) for f in ALL_FIELDS}

    def with_values(self, **changes: float) -> "CanonicalRecord":
        """Derive a new record with some fields replaced (camelCase or attribute names)."""
        update = {_ATTRIBUTE_BY_FIELD.get(k, k): v for k, v in changes.items()}
        return self.model_copy(update=update)


_ATTRIBUTE_BY_FIELD: dict[str, str] = {
    name: attr
    for attr, info in CanonicalRecord.model_fields.items()
    for name in [info.alias or attr]
    if attr not in ("month", "store")
}


class Period(BaseModel):
    """Calendar month parsed from a ``Mon-YY`` token. Ordered by (year, month)."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(ge=0, le=11)
    year: int

    def __lt__(self, other: "Period") -> bool:
        return (self.year, self.month) < (other.year, other.month)

    def __le__(self, other: "Period") -> bool:
        return (self.year, self.month) <= (other.year, other.month)


class Dataset(BaseModel):
    """Mapped records of one source (link), in first-appearance order."""

    source_id: str = ""
    records: list[CanonicalRecord] = Field(default_factory=list)
    duplicates: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.records

    def find(self, store: str, month: str) -> CanonicalRecord | None:
        for record in self.records:
            if record.store == store and record.month == month:
                return record
        return None

    def months(self) -> list[str]:
        return list(dict.fromkeys(r.month for r in self.records))

    def stores(self) -> list[str]:
        return list(dict.fromkeys(r.store for r in self.records))
