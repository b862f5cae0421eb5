"""Tests for amount parsing into minor units."""

import pytest

from ledgerport.utils.amount_parser import (
    format_minor_units,
    looks_like_amount,
    parse_amount_minor,
    parse_debit_credit,
)

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


class TestParseAmountMinor:
    """Tests for parse_amount_minor."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("123.45", 12345),
            ("$1,234.56", 123456),
            ("-$12.34", -1234),
            ("(50.00)", -5000),
            ("+7.5", 750),
            ("€ 1 000.00", 100000),
            ("₱250", 25000),
            ("  -4.50  ", -450),
            (".99", 99),
            ("5.", 500),
        ],
    )
    def test_common_bank_formats(self, text, expected):
        assert parse_amount_minor(text) == expected

    def test_half_rounds_away_from_zero(self):
        """Boundary values round half away from zero, not half-even."""
        assert parse_amount_minor("0.125") == 13
        assert parse_amount_minor("0.135") == 14
        assert parse_amount_minor("-0.125") == -13

    def test_below_half_rounds_down(self):
        assert parse_amount_minor("10.004") == 1000

    def test_no_float_drift(self):
        """Values that are inexact in binary floating point stay exact."""
        assert parse_amount_minor("0.29") == 29
        assert parse_amount_minor("1.15") == 115

    def test_parentheses_always_negative(self):
        assert parse_amount_minor("(-5.00)") == -500
        assert parse_amount_minor("(12.34)") == parse_amount_minor("-12.34")

    def test_zero_digit_currency(self):
        assert parse_amount_minor("1,500", minor_digits=0) == 1500
        assert parse_amount_minor("99.5", minor_digits=0) == 100

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12.3.4", "--5", "1e5", "$"])
    def test_rejects_non_numeric(self, text):
        with pytest.raises(ValueError):
            parse_amount_minor(text)

    def test_rejects_none(self):
        with pytest.raises(ValueError):
            parse_amount_minor(None)

    def test_long_fraction_rounds_exactly(self):
        assert parse_amount_minor("1.000000000000000000000000000000005") == 100
        assert parse_amount_minor("0.0050000000000000000000000000000000") == 1

    def test_signed_64_bit_limits(self):
        assert parse_amount_minor("92233720368547758.07") == INT64_MAX
        assert parse_amount_minor("-92233720368547758.08") == INT64_MIN

    @pytest.mark.parametrize(
        "text",
        [
            "92233720368547758.08",
            "-92233720368547758.09",
            "99999999999999999999.00",
            "1234567890123456789012345678.90",
            "(123456789012345678901234567890123456789)",
        ],
    )
    def test_rejects_out_of_range(self, text):
        with pytest.raises(ValueError, match="out of range"):
            parse_amount_minor(text)


class TestParseDebitCredit:
    """Tests for combining debit and credit cells."""

    def test_debit_is_negative(self):
        assert parse_debit_credit("45.10", "") == -4510

    def test_credit_is_positive(self):
        assert parse_debit_credit("", "200.00") == 20000

    def test_signed_debit_still_outflow(self):
        assert parse_debit_credit("-45.10", None) == -4510

    def test_zero_debit_falls_through_to_credit(self):
        assert parse_debit_credit("0.00", "12.00") == 1200

    def test_both_empty_is_zero(self):
        assert parse_debit_credit(None, None) == 0
        assert parse_debit_credit(" ", "") == 0
        assert parse_debit_credit("0", "0.00") == 0

    def test_debit_wins_when_both_present(self):
        assert parse_debit_credit("10.00", "5.00") == -1000

    def test_bad_cell_raises(self):
        with pytest.raises(ValueError):
            parse_debit_credit("n/a", None)


def test_format_minor_units():
    assert format_minor_units(-1234) == "-12.34"
    assert format_minor_units(500, minor_digits=0) == "500"


def test_looks_like_amount():
    assert looks_like_amount("$12.00")
    assert not looks_like_amount("Amount")


@pytest.mark.parametrize(
    "minor_units",
    [0, 1, -1, 5, -5, 15, -15, 105, -105, 995, 1234, -1234, 250000, -99999999, 2**53 + 1, INT64_MAX, INT64_MIN],
)
def test_format_then_parse_is_exact(minor_units):
    assert parse_amount_minor(format_minor_units(minor_units)) == minor_units


@pytest.mark.parametrize("minor_units", [0, 7, -7, 1500, INT64_MAX, INT64_MIN])
def test_format_then_parse_is_exact_without_minor_digits(minor_units):
    text = format_minor_units(minor_units, minor_digits=0)
    assert parse_amount_minor(text, minor_digits=0) == minor_units
