"""Money value object kept as integer minor units.

Never store money as float. Sign convention: negative is an outflow
(expense), positive is an inflow (income).
"""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from ledgerport.domain.errors import (
    CurrencyMismatchError,
    ValidationError,
    currency_mismatch,
)


@dataclass(frozen=True)
class Currency:
    """ISO 4217 currency with its minor-unit exponent."""

    code: str
    symbol: str
    name: str
    minor_digits: int = 2

    def __post_init__(self):
        if len(self.code) != 3:
            raise ValidationError("Currency code must be 3 characters (ISO 4217)")
        if self.minor_digits < 0:
            raise ValidationError("Minor digits cannot be negative")

    @property
    def minor_units_per_major(self) -> int:
        return 10**self.minor_digits

    @classmethod
    def from_code(cls, code: str) -> "Currency":
        """Look up a known currency by its ISO code (case-insensitive).

        Raises:
            ValidationError: If the code is not registered
        """
        currency = CURRENCIES.get(code.strip().upper())
        if currency is None:
            raise ValidationError(
                f"Unknown currency '{code}'. Known currencies: {', '.join(sorted(CURRENCIES))}"
            )
        return currency


PHP = Currency(code="PHP", symbol="₱", name="Philippine Peso")
USD = Currency(code="USD", symbol="$", name="US Dollar")
EUR = Currency(code="EUR", symbol="€", name="Euro")
GBP = Currency(code="GBP", symbol="£", name="British Pound")
JPY = Currency(code="JPY", symbol="¥", name="Japanese Yen", minor_digits=0)

CURRENCIES = MappingProxyType({c.code: c for c in (PHP, USD, EUR, GBP, JPY)})


@dataclass(frozen=True)
class Money:
    """Signed amount in minor units tied to a currency."""

    minor_units: int
    currency: Currency

    def __post_init__(self):
        # bool is an int subclass; reject it along with floats and Decimals
        if not isinstance(self.minor_units, int) or isinstance(self.minor_units, bool):
            raise ValidationError(
                f"Money minor units must be an integer, got {type(self.minor_units).__name__}"
            )

    @classmethod
    def zero(cls, currency: Currency) -> "Money":
        return cls(0, currency)

    @property
    def is_expense(self) -> bool:
        return self.minor_units < 0

    @property
    def is_income(self) -> bool:
        return self.minor_units > 0

    @property
    def is_zero(self) -> bool:
        return self.minor_units == 0

    def abs(self) -> "Money":
        return Money(abs(self.minor_units), self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.minor_units, self.currency)

    def require_same_currency(self, other: "Money") -> None:
        """Raise CurrencyMismatchError unless both values share a currency."""
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                currency_mismatch(self.currency.code, other.currency.code)
            )

    def __lt__(self, other: "Money") -> bool:
        self.require_same_currency(other)
        return self.minor_units < other.minor_units

    def __le__(self, other: "Money") -> bool:
        self.require_same_currency(other)
        return self.minor_units <= other.minor_units

    def __gt__(self, other: "Money") -> bool:
        self.require_same_currency(other)
        return self.minor_units > other.minor_units

    def __ge__(self, other: "Money") -> bool:
        self.require_same_currency(other)
        return self.minor_units >= other.minor_units

    def to_decimal(self) -> Decimal:
        """Return the amount in major units, e.g. Money(-550, USD) -> Decimal('-5.50')."""
        return Decimal(self.minor_units).scaleb(-self.currency.minor_digits)

    def __str__(self) -> str:
        sign = "-" if self.minor_units < 0 else ""
        return f"{sign}{self.currency.symbol}{abs(self.to_decimal()):,}"
