"""Column mapping configuration and built-in bank presets."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from ledgerport.domain.errors import ValidationError, preset_not_found
from ledgerport.utils.date_parser import ISO_DATE_FORMAT, validate_date_format


@dataclass(frozen=True)
class ColumnMapping:
    """Maps bank CSV columns to transaction fields.

    Exactly one amount source is allowed: either a single signed
    ``amount_column`` or a ``debit_column``/``credit_column`` pair.

    When ``has_header`` is False, column names are 1-based positions
    ("1", "2", ...).
    """

    date_column: str
    description_column: str
    amount_column: Optional[str] = None
    debit_column: Optional[str] = None
    credit_column: Optional[str] = None
    date_format: str = ISO_DATE_FORMAT
    delimiter: str = ","
    has_header: bool = True

    def __post_init__(self):
        if not self.date_column or not self.date_column.strip():
            raise ValidationError("Date column cannot be blank")
        if not self.description_column or not self.description_column.strip():
            raise ValidationError("Description column cannot be blank")

        has_pair = self.debit_column is not None and self.credit_column is not None
        has_partial_pair = (self.debit_column is None) != (self.credit_column is None)
        if has_partial_pair:
            raise ValidationError("Debit and credit columns must be specified together")
        if self.amount_column is not None and has_pair:
            raise ValidationError(
                "Specify either amount_column OR debit_column and credit_column, not both"
            )
        if self.amount_column is None and not has_pair:
            raise ValidationError(
                "Must specify either amount_column OR both debit_column and credit_column"
            )

        if len(self.delimiter) != 1:
            raise ValidationError(f"Delimiter must be a single character, got {self.delimiter!r}")
        try:
            validate_date_format(self.date_format)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    @property
    def uses_debit_credit_columns(self) -> bool:
        """True if using separate debit/credit columns."""
        return self.debit_column is not None and self.credit_column is not None

    @property
    def required_columns(self) -> tuple[str, ...]:
        if self.uses_debit_credit_columns:
            return (self.date_column, self.description_column, self.debit_column, self.credit_column)
        return (self.date_column, self.description_column, self.amount_column)


CHASE = ColumnMapping(
    date_column="Transaction Date",
    amount_column="Amount",
    description_column="Description",
    date_format="MM/dd/yyyy",
)

WELLS_FARGO = ColumnMapping(
    date_column="Date",
    amount_column="Amount",
    description_column="Description",
    date_format="MM/dd/yyyy",
)

BANK_OF_AMERICA = ColumnMapping(
    date_column="Date",
    description_column="Description",
    debit_column="Debit",
    credit_column="Credit",
    date_format="MM/dd/yyyy",
)

SIMPLE = ColumnMapping(
    date_column="Date",
    amount_column="Amount",
    description_column="Description",
)

BANK_PRESETS = MappingProxyType(
    {
        "Chase": CHASE,
        "Wells Fargo": WELLS_FARGO,
        "Bank of America": BANK_OF_AMERICA,
        "Simple": SIMPLE,
    }
)


def get_preset(name: str) -> ColumnMapping:
    """Look up a bank preset by name (case-insensitive).

    Raises:
        ValidationError: If no preset has that name
    """
    wanted = name.strip().lower()
    for preset_name, mapping in BANK_PRESETS.items():
        if preset_name.lower() == wanted:
            return mapping
    raise ValidationError(preset_not_found(name, list(BANK_PRESETS)))
