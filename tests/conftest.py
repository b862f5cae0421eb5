"""Shared pytest fixtures for ledgerport tests."""

import os
import tempfile
from datetime import date, datetime, UTC
from pathlib import Path

import pytest

from ledgerport.database.factories import create_sqlite_database
from ledgerport.domain.account import AccountService
from ledgerport.domain.csv_format import CSVFormatService
from ledgerport.domain.csv_import import CSVImportService
from ledgerport.domain.entities import Transaction, TransactionStatus
from ledgerport.domain.money import USD, Money


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that open their own connection
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def csv_format_service(temp_db):
    """Create a CSVFormatService with a temporary database."""
    return CSVFormatService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with default duplicate policy."""
    return CSVImportService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample USD account for testing."""
    account_id = account_service.create_account(name="Test Account", bank_name="Test Bank")
    return account_service.get_account(account_id)


@pytest.fixture
def make_transaction():
    """Build stored-transaction entities with sensible defaults."""

    def _make(
        account_id: int,
        txn_date: date,
        minor_units: int,
        merchant: str,
        currency=USD,
        txn_id: str | None = None,
    ) -> Transaction:
        now = datetime(2024, 1, 1, tzinfo=UTC)
        return Transaction(
            id=txn_id or f"existing-{txn_date.isoformat()}-{minor_units}-{merchant}",
            account_id=account_id,
            date=txn_date,
            amount=Money(minor_units, currency),
            merchant=merchant,
            memo=None,
            category_id=None,
            status=TransactionStatus.CLEARED,
            cleared_at=now,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
