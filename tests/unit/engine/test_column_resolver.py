"""Tests for tiered column resolution."""

from __future__ import annotations

from storepnl.engine.column_resolver import ColumnResolver, keyword_groups, resolve_column
from storepnl.models.records import CanonicalField


class TestResolveColumn:
    def test_exact_match_on_later_candidate(self):
        assert resolve_column({"Sales": 100}, ["ΠΩΛΗΣΕΙΣ (SALES)", "Sales"]) == "Sales"

    def test_normalized_match_returns_actual_header(self):
        assert resolve_column(["  ΔΕΚO   (UTILITIES) "], ["ΔΕΚΟ (Utilities)"]) == "  ΔΕΚO   (UTILITIES) "

    def test_keyword_match_on_english_half(self):
        assert resolve_column({"total sales (sales)": 50}, ["ΠΩΛΗΣΕΙΣ (SALES)"]) == "total sales (sales)"

    def test_decorated_header_matches_fuzzily(self):
        assert resolve_column(["EBITDA adj."], ["EBITDA"]) == "EBITDA adj."

    def test_earlier_tier_wins_over_earlier_candidate(self):
        headers = ["Payroll (Adjusted) 2024", "Payroll"]
        assert resolve_column(headers, ["Payroll (Adjusted)", "Payroll"]) == "Payroll"

    def test_not_found(self):
        assert resolve_column(["Store", "Month"], ["EBITDA"]) is None
        assert resolve_column([], ["EBITDA"]) is None
        assert resolve_column(["EBITDA"], []) is None

    def test_non_string_headers_ignored(self):
        assert resolve_column([None, 7, "Rent"], ["RENT"]) == "Rent"


class TestKeywordGroups:
    def test_bilingual_alias_splits_into_halves(self):
        groups = keyword_groups("ΑΓΟΡΕΣ (Purchases)")
        assert len(groups) == 3

    def test_short_tokens_dropped(self):
        assert keyword_groups("a b") == []


class TestColumnResolver:
    def test_exact_sales_not_stolen_by_sales_of_services(self):
        resolved = ColumnResolver().resolve_all(["Sales", "Purchases"])
        assert resolved[CanonicalField.SALES] == "Sales"
        assert resolved[CanonicalField.SALES_OF_SERVICES] is None
        assert resolved[CanonicalField.PURCHASES] == "Purchases"

    def test_greek_headers(self):
        resolved = ColumnResolver().resolve_all([
            "ΠΩΛΗΣΕΙΣ (SALES)", "ΠΩΛΗΣΕΙΣ ΥΠΗΡΕΣΙΩΝ (Sales of Services)", "ΕΝΟIΚΙO (RENT)",
        ])
        assert resolved[CanonicalField.SALES] == "ΠΩΛΗΣΕΙΣ (SALES)"
        assert resolved[CanonicalField.SALES_OF_SERVICES] == "ΠΩΛΗΣΕΙΣ ΥΠΗΡΕΣΙΩΝ (Sales of Services)"
        assert resolved[CanonicalField.RENT] == "ΕΝΟIΚΙO (RENT)"

    def test_split_word_contribution_margin(self):
        resolved = ColumnResolver().resolve_all(["Contributio n Margin"])
        assert resolved[CanonicalField.CONTRIBUTION_MARGIN] == "Contributio n Margin"

    def test_memoized_per_header_set(self):
        resolver = ColumnResolver()
        first = resolver.resolve_all(["Sales"])
        assert resolver.resolve_all(["Sales"]) is first


class TestSubstringTier:
    def test_header_contained_in_alias(self):
        # "Margin" is too weak for a keyword hit on "Contribution Margin" but is a substring of it
        assert resolve_column(["Margin"], ["Contribution Margin"]) == "Margin"
