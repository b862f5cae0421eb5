"""Domain model entities for ledgerport.

These are pure data classes representing business concepts, independent of
database schema. The repository layer converts to and from them.
"""

from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import Optional

from ledgerport.domain.column_mapping import ColumnMapping
from ledgerport.domain.errors import ValidationError
from ledgerport.domain.money import Currency, Money


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    name: str
    bank_name: str
    currency: Currency
    created_at: datetime


class TransactionStatus(str, Enum):
    """Lifecycle status of a stored transaction."""

    PENDING = "pending"
    CLEARED = "cleared"
    RECONCILED = "reconciled"
    VOID = "void"


@dataclass(frozen=True)
class Transaction:
    """Stored transaction domain entity.

    Negative amounts are outflows, positive amounts are inflows.
    """

    id: str
    account_id: int
    date: date
    amount: Money
    merchant: str
    memo: Optional[str]
    category_id: Optional[str]
    status: TransactionStatus
    cleared_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        if not self.merchant or not self.merchant.strip():
            raise ValidationError("Merchant cannot be blank")

    @property
    def is_expense(self) -> bool:
        return self.amount.is_expense

    @property
    def is_income(self) -> bool:
        return self.amount.is_income


@dataclass(frozen=True)
class CSVFormat:
    """A column mapping saved under a name for reuse with one account."""

    id: int
    name: str
    account_id: int
    mapping: ColumnMapping
    created_at: datetime
