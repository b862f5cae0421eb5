"""Tests for the Money and Currency value objects."""

import pytest
from decimal import Decimal

from ledgerport.domain.errors import CurrencyMismatchError, ValidationError
from ledgerport.domain.money import EUR, JPY, USD, Currency, Money


class TestCurrency:
    """Tests for Currency lookup."""

    def test_from_code_is_case_insensitive(self):
        assert Currency.from_code("usd") is USD
        assert Currency.from_code(" eur ") is EUR

    def test_unknown_code(self):
        with pytest.raises(ValidationError, match="Unknown currency"):
            Currency.from_code("XYZ")

    def test_jpy_has_no_minor_units(self):
        assert JPY.minor_digits == 0
        assert JPY.minor_units_per_major == 1
        assert USD.minor_units_per_major == 100

    def test_code_must_be_three_letters(self):
        with pytest.raises(ValidationError):
            Currency(code="US", symbol="$", name="Bad")


class TestMoney:
    """Tests for Money."""

    def test_sign_helpers(self):
        assert Money(-450, USD).is_expense
        assert Money(450, USD).is_income
        assert Money.zero(USD).is_zero

    def test_rejects_non_integer_minor_units(self):
        with pytest.raises(ValidationError):
            Money(4.5, USD)
        with pytest.raises(ValidationError):
            Money(Decimal("450"), USD)
        with pytest.raises(ValidationError):
            Money(True, USD)

    def test_abs_and_negation(self):
        assert Money(-450, USD).abs() == Money(450, USD)
        assert -Money(450, USD) == Money(-450, USD)

    def test_ordering_same_currency(self):
        assert Money(-500, USD) < Money(100, USD)
        assert Money(100, USD) >= Money(100, USD)

    def test_ordering_across_currencies_raises(self):
        with pytest.raises(CurrencyMismatchError):
            Money(100, USD) < Money(100, EUR)

    def test_to_decimal(self):
        assert Money(-550, USD).to_decimal() == Decimal("-5.50")
        assert Money(1500, JPY).to_decimal() == Decimal("1500")

    def test_str(self):
        assert str(Money(-123456, USD)) == "-$1,234.56"
        assert str(Money(250000, EUR)) == "€2,500.00"

    def test_immutable(self):
        money = Money(100, USD)
        with pytest.raises(Exception):
            money.minor_units = 200
