"""Tests for domain entities and import data classes."""

import pytest
from datetime import date, datetime, UTC

from ledgerport.domain.entities import Account, Transaction, TransactionStatus
from ledgerport.domain.errors import ValidationError
from ledgerport.domain.import_models import (
    NEW,
    Duplicate,
    ImportPreview,
    ImportResult,
    ImportRowError,
    ImportTransactionPreview,
    ParsedTransaction,
)
from ledgerport.domain.money import USD, Money


def make_parsed(merchant="Coffee", minor_units=-450, row=1):
    return ParsedTransaction.from_minor_units(
        date=date(2024, 1, 15),
        amount_minor=minor_units,
        currency=USD,
        merchant=merchant,
        raw_description=merchant.upper(),
        raw_row_index=row,
    )


class TestAccount:
    """Tests for Account entity."""

    def test_account_immutability(self):
        account = Account(
            id=1, name="Checking", bank_name="Bank", currency=USD, created_at=datetime.now(UTC)
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            account.name = "New Name"


class TestTransaction:
    """Tests for Transaction entity."""

    def test_blank_merchant_rejected(self):
        now = datetime.now(UTC)
        with pytest.raises(ValidationError):
            Transaction(
                id="t1",
                account_id=1,
                date=date(2024, 1, 15),
                amount=Money(-100, USD),
                merchant="  ",
                memo=None,
                category_id=None,
                status=TransactionStatus.CLEARED,
                cleared_at=now,
                created_at=now,
                updated_at=now,
            )

    def test_status_values(self):
        assert TransactionStatus("cleared") is TransactionStatus.CLEARED
        assert [s.value for s in TransactionStatus] == ["pending", "cleared", "reconciled", "void"]


class TestParsedTransaction:
    """Tests for ParsedTransaction."""

    def test_fingerprint(self):
        txn = make_parsed(merchant="Sq Starbucks")
        assert txn.fingerprint() == "2024-01-15|-450|sq starbucks"

    def test_ids_are_unique(self):
        assert make_parsed().id != make_parsed().id

    def test_direction(self):
        assert make_parsed(minor_units=-1).is_expense
        assert make_parsed(minor_units=1).is_income


class TestImportPreview:
    """Tests for preview construction and selection."""

    def test_default_selection(self):
        new = ImportTransactionPreview.from_parsed(make_parsed(row=1), NEW)
        dup = ImportTransactionPreview.from_parsed(
            make_parsed(row=2), Duplicate(confidence=0.9, existing_transaction_id="x")
        )
        internal = ImportTransactionPreview.from_parsed(
            make_parsed(row=3), NEW, internal_duplicate_of=new.id
        )

        assert new.is_selected and not new.is_duplicate
        assert not dup.is_selected and dup.is_duplicate
        assert not internal.is_selected and internal.is_duplicate

        preview = ImportPreview.build([new, dup, internal], [ImportRowError(4, "Missing amount")])
        assert preview.new_count == 1
        assert preview.duplicate_count == 2
        assert preview.error_count == 1
        assert preview.selected_transactions == [new]
        assert preview.duplicate_transactions == [dup, internal]
        assert preview.find(dup.id) is dup
        assert preview.find("missing") is None


class TestImportResult:
    """Tests for ImportResult reporting."""

    def test_summary_omits_zero_parts(self):
        assert ImportResult(imported_count=3).summary() == "Imported: 3"
        result = ImportResult(imported_count=3, skipped_count=2, duplicate_count=1, error_count=1)
        assert result.summary() == "Imported: 3, Duplicates: 1, Skipped: 2, Errors: 1"

    def test_totals(self):
        result = ImportResult(imported_count=3, skipped_count=2, duplicate_count=1, error_count=1)
        assert result.total_rows == 7
        assert not result.is_success
        assert ImportResult(imported_count=0).is_success

    def test_row_error_str(self):
        assert str(ImportRowError(row_index=5, message="Missing date")) == "Row 5: Missing date"
