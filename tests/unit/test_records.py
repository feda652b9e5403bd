"""Tests for the canonical record and period models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from storepnl.models.records import ALL_FIELDS, CanonicalField, CanonicalRecord, Dataset, Period


class TestCanonicalRecord:
    def test_camel_case_and_attribute_names(self):
        record = CanonicalRecord.model_validate({"month": "Jan-24", "store": "A", "salesOfServices": 5})
        assert record.sales_of_services == 5
        assert record.value(CanonicalField.SALES_OF_SERVICES) == 5
        assert record.value("netProfit") == 0

    def test_values_cover_every_field(self):
        values = CanonicalRecord(month="Jan-24", store="A").values()
        assert list(values) == [f.value for f in ALL_FIELDS]

    def test_with_values_returns_copy(self):
        record = CanonicalRecord(month="Jan-24", store="A", ebitda=10)
        changed = record.with_values(ebitda=20, netProfit=5)
        assert (changed.ebitda, changed.net_profit) == (20, 5)
        assert record.ebitda == 10

    def test_frozen(self):
        record = CanonicalRecord(month="Jan-24", store="A")
        with pytest.raises(ValidationError):
            record.sales = 1


class TestDataset:
    def test_lookup_and_ordering(self):
        dataset = Dataset(records=[
            CanonicalRecord(month="Feb-24", store="B"),
            CanonicalRecord(month="Jan-24", store="A"),
            CanonicalRecord(month="Feb-24", store="A"),
        ])
        assert dataset.find("A", "Feb-24") is dataset.records[2]
        assert dataset.find("C", "Feb-24") is None
        assert dataset.months() == ["Feb-24", "Jan-24"]
        assert dataset.stores() == ["B", "A"]
        assert Dataset().is_empty


class TestPeriod:
    def test_ordering(self):
        assert Period(month=11, year=2023) < Period(month=0, year=2024)
        assert Period(month=3, year=2024) <= Period(month=3, year=2024)

    def test_month_bounds(self):
        with pytest.raises(ValidationError):
            Period(month=12, year=2024)
