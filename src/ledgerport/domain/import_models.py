"""Data classes produced by a single CSV import attempt.

None of these are persisted. They are built fresh for each import and
dropped after commit or cancellation.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from ledgerport.domain.column_mapping import ColumnMapping
from ledgerport.domain.money import Currency, Money


@dataclass(frozen=True)
class ParsedTransaction:
    """A successfully extracted CSV row."""

    date: date
    amount: Money
    merchant: str
    raw_description: str
    raw_row_index: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def is_expense(self) -> bool:
        return self.amount.is_expense

    @property
    def is_income(self) -> bool:
        return self.amount.is_income

    def fingerprint(self) -> str:
        """Comparison key "yyyy-mm-dd|minor_units|merchant". Never persisted."""
        return f"{self.date.isoformat()}|{self.amount.minor_units}|{self.merchant.lower().strip()}"

    @classmethod
    def from_minor_units(
        cls,
        date: date,
        amount_minor: int,
        currency: Currency,
        merchant: str,
        raw_description: str,
        raw_row_index: int,
    ) -> "ParsedTransaction":
        return cls(
            date=date,
            amount=Money(amount_minor, currency),
            merchant=merchant,
            raw_description=raw_description,
            raw_row_index=raw_row_index,
        )


@dataclass(frozen=True)
class ImportRowError:
    """A row that could not be parsed.

    Attributes:
        row_index: 1-based data row index (header excluded)
        message: Human-readable reason
        raw_data: Snapshot of the row's cells, if available
    """

    row_index: int
    message: str
    raw_data: Optional[str] = None

    def __str__(self) -> str:
        return f"Row {self.row_index}: {self.message}"


@dataclass(frozen=True)
class New:
    """Transaction does not match any existing record."""

    confidence: float = 0.0


@dataclass(frozen=True)
class Duplicate:
    """Transaction probably duplicates an existing record."""

    confidence: float
    existing_transaction_id: str


DuplicateStatus = Union[New, Duplicate]

NEW = New()


@dataclass
class ImportTransactionPreview:
    """Parsed transaction plus the review state the user can change."""

    transaction: ParsedTransaction
    duplicate_status: DuplicateStatus = NEW
    is_selected: bool = True
    category_id: Optional[str] = None
    internal_duplicate_of: Optional[str] = None

    @classmethod
    def from_parsed(
        cls,
        transaction: ParsedTransaction,
        duplicate_status: DuplicateStatus,
        internal_duplicate_of: Optional[str] = None,
    ) -> "ImportTransactionPreview":
        is_new = isinstance(duplicate_status, New) and internal_duplicate_of is None
        return cls(
            transaction=transaction,
            duplicate_status=duplicate_status,
            is_selected=is_new,
            internal_duplicate_of=internal_duplicate_of,
        )

    @property
    def id(self) -> str:
        return self.transaction.id

    @property
    def is_duplicate(self) -> bool:
        """True if flagged against existing records or an earlier batch row."""
        return isinstance(self.duplicate_status, Duplicate) or self.internal_duplicate_of is not None


@dataclass(frozen=True)
class ImportPreview:
    """Read-only summary of an import attempt before commit."""

    transactions: tuple[ImportTransactionPreview, ...]
    new_count: int
    duplicate_count: int
    error_count: int = 0
    errors: tuple[ImportRowError, ...] = ()

    @classmethod
    def build(
        cls, previews: list[ImportTransactionPreview], errors: list[ImportRowError]
    ) -> "ImportPreview":
        duplicate_count = sum(1 for p in previews if p.is_duplicate)
        return cls(
            transactions=tuple(previews),
            new_count=len(previews) - duplicate_count,
            duplicate_count=duplicate_count,
            error_count=len(errors),
            errors=tuple(errors),
        )

    @property
    def selected_transactions(self) -> list[ImportTransactionPreview]:
        return [p for p in self.transactions if p.is_selected]

    @property
    def duplicate_transactions(self) -> list[ImportTransactionPreview]:
        return [p for p in self.transactions if p.is_duplicate]

    def find(self, preview_id: str) -> Optional[ImportTransactionPreview]:
        for preview in self.transactions:
            if preview.id == preview_id:
                return preview
        return None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of committing an import.

    Every previewed row lands in exactly one bucket: imported, skipped
    (deselected), or duplicate (deselected duplicate). Row errors are
    counted separately; zero-amount rows are not counted at all.
    """

    imported_count: int
    skipped_count: int = 0
    duplicate_count: int = 0
    error_count: int = 0
    errors: tuple[ImportRowError, ...] = ()

    @property
    def total_rows(self) -> int:
        return self.imported_count + self.skipped_count + self.duplicate_count + self.error_count

    @property
    def is_success(self) -> bool:
        return self.error_count == 0

    def summary(self) -> str:
        parts = [f"Imported: {self.imported_count}"]
        if self.duplicate_count > 0:
            parts.append(f"Duplicates: {self.duplicate_count}")
        if self.skipped_count > 0:
            parts.append(f"Skipped: {self.skipped_count}")
        if self.error_count > 0:
            parts.append(f"Errors: {self.error_count}")
        return ", ".join(parts)


@dataclass(frozen=True)
class AutoParseResult:
    """Result of parsing with an auto-detected mapping."""

    mapping: ColumnMapping
    transactions: list[ParsedTransaction]
    errors: list[ImportRowError]
