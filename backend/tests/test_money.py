"""
Test suite for amount normalization across separator conventions.
"""

from decimal import Decimal

import pytest

from txocr.utils.money import format_amount, parse_amount


class TestParseAmount:
    """Locale-ambiguous numerals resolve to one canonical Decimal."""

    @pytest.mark.parametrize("raw, expected", [
        ("1.234,56", Decimal("1234.56")),   # Venezuelan
        ("1,234.56", Decimal("1234.56")),   # US
        ("6.775.90", Decimal("6775.90")),   # Multi-dot thermal printer
    ])
    def test_three_conventions(self, raw, expected):
        assert parse_amount(raw) == expected

    def test_venezuelan_large_amount(self):
        assert parse_amount("45.652,00") == Decimal("45652.00")

    def test_venezuelan_without_thousands(self):
        assert parse_amount("120,50") == Decimal("120.50")

    def test_clean_value_passes_through(self):
        assert parse_amount("1234.56") == Decimal("1234.56")
        assert parse_amount("100") == Decimal("100")

    def test_us_with_several_groups(self):
        assert parse_amount("1,234,567.89") == Decimal("1234567.89")

    def test_lone_comma_is_decimal_mark(self):
        """Without a dot after it, a comma is the Venezuelan decimal separator."""
        assert parse_amount("1,234") == Decimal("1.234")

    def test_surrounding_whitespace_ignored(self):
        assert parse_amount("  99,90 ") == Decimal("99.90")

    @pytest.mark.parametrize("raw", ["", ".", ",", "1,2,3", "abc", None])
    def test_unparseable_returns_none(self, raw):
        """Never silently coerce to zero."""
        assert parse_amount(raw) is None


class TestFormatAmount:
    """Confirmation messages render amounts in Venezuelan notation."""

    def test_bolivares(self):
        assert format_amount(Decimal("45652")) == "Bs 45.652,00"

    def test_rounds_to_cents(self):
        assert format_amount(Decimal("101.500")) == "Bs 101,50"

    def test_other_currency_uses_code(self):
        assert format_amount(Decimal("12.5"), "usd") == "USD 12,50"

    def test_missing_amount(self):
        assert format_amount(None) == "N/A"
