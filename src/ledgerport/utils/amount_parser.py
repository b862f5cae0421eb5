"""Amount parsing utilities.

Amounts are converted to integer minor units (cents) straight from text
through Decimal, never through binary floating point.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
import re
from typing import Optional

MINOR_DIGITS = 2

# Range of the signed 64-bit amount column
MIN_MINOR_UNITS = -(2**63)
MAX_MINOR_UNITS = 2**63 - 1

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥₱]")
_NUMERIC = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_amount_minor(amount_str: str, minor_digits: int = MINOR_DIGITS) -> int:
    """Parse an amount string into signed integer minor units.

    Handles various formats:
    - "123.45" -> 12345
    - "$1,234.56" -> 123456
    - "-$12.34" -> -1234
    - "(50.00)" -> -5000 (negative in parentheses)
    - "+7.5" -> 750
    - "0.125" -> 13 (half away from zero)

    Args:
        amount_str: Amount string
        minor_digits: Number of minor-unit digits (2 for cents)

    Returns:
        Signed amount in minor units

    Raises:
        ValueError: If amount string is empty, not numeric or out of range
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", amount_str.strip())
    cleaned = cleaned.replace(",", "").replace(" ", "")

    # Handle parentheses notation (negative)
    is_negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1].strip()
    cleaned = cleaned.lstrip("+")

    if not _NUMERIC.match(cleaned):
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}': {e}") from e

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(cleaned) + minor_digits + 1)
        minor = int(amount.scaleb(minor_digits).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if is_negative:
        minor = -abs(minor)

    if not MIN_MINOR_UNITS <= minor <= MAX_MINOR_UNITS:
        raise ValueError(f"Amount '{amount_str.strip()}' is out of range")
    return minor


def parse_debit_credit(
    debit_str: Optional[str], credit_str: Optional[str], minor_digits: int = MINOR_DIGITS
) -> int:
    """Combine separate debit and credit cells into one signed amount.

    A non-empty, non-zero debit is an outflow (negative); otherwise a
    non-empty, non-zero credit is an inflow (positive). Both empty or zero
    yields 0, which callers treat as a row to skip.

    Raises:
        ValueError: If a non-empty cell is not numeric
    """
    if debit_str and debit_str.strip():
        debit = parse_amount_minor(debit_str, minor_digits)
        if debit != 0:
            return -abs(debit)

    if credit_str and credit_str.strip():
        credit = parse_amount_minor(credit_str, minor_digits)
        if credit != 0:
            return abs(credit)

    return 0


def format_minor_units(minor_units: int, minor_digits: int = MINOR_DIGITS) -> str:
    """Format minor units as plain decimal text, e.g. -1234 -> "-12.34"."""
    return str(Decimal(minor_units).scaleb(-minor_digits))


def looks_like_amount(value: str) -> bool:
    """Return True if the value parses as a monetary amount."""
    try:
        parse_amount_minor(value)
    except ValueError:
        return False
    return True
