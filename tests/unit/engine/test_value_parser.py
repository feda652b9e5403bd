"""Tests for numeric cell parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from storepnl.engine.value_parser import parse_numeric


class TestParseNumeric:
    @pytest.mark.parametrize("cell, expected", [
        ("€ 1,234.50", 1234.5),
        ("€1,000.00", 1000.0),
        ("  2500 ", 2500.0),
        ("-300.25", -300.25),
        ("(1,234.00)", -1234.0),
    ])
    def test_currency_strings(self, cell, expected):
        assert parse_numeric(cell) == expected

    @pytest.mark.parametrize("cell", [None, "", "   ", "€", "n/a", "abc12", "-"])
    def test_blank_or_garbage_is_zero(self, cell):
        assert parse_numeric(cell) == 0

    def test_numbers_pass_through(self):
        assert parse_numeric(42) == 42.0
        assert parse_numeric(3.5) == 3.5
        assert parse_numeric(Decimal("10.25")) == 10.25

    def test_nan_and_infinity_are_zero(self):
        assert parse_numeric(float("nan")) == 0
        assert parse_numeric(float("inf")) == 0
        assert parse_numeric("inf") == 0

    def test_bool_and_other_types_are_zero(self):
        assert parse_numeric(True) == 0
        assert parse_numeric(["1"]) == 0

    @pytest.mark.parametrize("cell, expected", [
        ("12.5%", 12.5),
        ("12abc", 12.0),
        ("€ 300.40 net", 300.4),
        (".5", 0.5),
    ])
    def test_leading_number_is_read(self, cell, expected):
        assert parse_numeric(cell) == expected

    def test_overflowing_exponent_is_zero(self):
        assert parse_numeric("1e400") == 0
