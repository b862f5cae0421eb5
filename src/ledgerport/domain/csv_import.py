"""CSV import domain service.

An import runs Detecting -> Previewing -> Committing. Parsing and duplicate
scoring are pure; the only repository calls are the read of existing
transactions before scoring and the batch write at commit.
"""

import logging
import uuid
from datetime import datetime, UTC
from enum import Enum
from typing import Optional

from ledgerport.database.base import Database
from ledgerport.domain.account import AccountService
from ledgerport.domain.column_mapping import BANK_PRESETS, ColumnMapping
from ledgerport.domain.duplicate_detector import DuplicateDetector, DuplicatePolicy
from ledgerport.domain.entities import Account, Transaction, TransactionStatus
from ledgerport.domain.errors import InvalidStateError, NotFoundError
from ledgerport.domain.import_models import (
    ImportPreview,
    ImportResult,
    ImportRowError,
    ImportTransactionPreview,
    ParsedTransaction,
)
from ledgerport.domain.money import Money
from ledgerport.domain.row_extractor import CSVTransactionParser

logger = logging.getLogger(__name__)


class CSVImportService:
    """Service for previewing and importing bank CSV exports."""

    def __init__(self, db: Database, policy: Optional[DuplicatePolicy] = None):
        """Initialize CSV import service.

        Args:
            db: Database instance (existing-records source and persistence sink)
            policy: Duplicate matching limits
        """
        self.db = db
        self.account_service = AccountService(db)
        self.parser = CSVTransactionParser()
        self.duplicate_detector = DuplicateDetector(policy)

    def available_formats(self) -> list[tuple[str, ColumnMapping]]:
        """Return the built-in bank presets as (name, mapping) pairs."""
        return list(BANK_PRESETS.items())

    def build_preview(
        self,
        transactions: list[ParsedTransaction],
        errors: list[ImportRowError],
        account_id: int,
    ) -> ImportPreview:
        """Score parsed transactions for duplicates and build the review list.

        Existing-record matches and in-batch repeats are both deselected.

        Raises:
            Exception: Any repository read failure, unchanged
        """
        existing = self.db.get_transactions_by_account(account_id)
        internal = self.duplicate_detector.find_internal_duplicates(transactions)

        previews = [
            ImportTransactionPreview.from_parsed(
                parsed,
                status,
                internal_duplicate_of=internal.get(parsed.id),
            )
            for parsed, status in self.duplicate_detector.check_duplicates(transactions, existing)
        ]
        preview = ImportPreview.build(previews, errors)
        logger.info(
            "Preview for account %d: %d new, %d duplicate, %d errors",
            account_id,
            preview.new_count,
            preview.duplicate_count,
            preview.error_count,
        )
        return preview

    def generate_preview(
        self, csv_content: str, mapping: ColumnMapping, account_id: int
    ) -> ImportPreview:
        """Parse CSV with a known mapping and detect duplicates.

        Args:
            csv_content: Raw CSV content
            mapping: Column mapping configuration
            account_id: Account to import into (currency and existing transactions)

        Returns:
            Import preview with duplicate status for every parsed row

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = self.account_service.require_account(account_id)
        transactions, errors = self.parser.parse_with_errors(csv_content, mapping, account.currency)
        return self.build_preview(transactions, errors, account.id)

    def auto_detect_and_preview(
        self, csv_content: str, account_id: int
    ) -> tuple[ColumnMapping, ImportPreview]:
        """Detect the CSV format and generate a preview.

        Returns:
            Tuple of (detected mapping, import preview)

        Raises:
            FormatDetectionError: If columns cannot be detected
            NotFoundError: If the account doesn't exist
        """
        account = self.account_service.require_account(account_id)
        result = self.parser.parse_auto_detect(csv_content, account.currency)
        preview = self.build_preview(result.transactions, result.errors, account.id)
        return result.mapping, preview

    def _to_transaction(
        self,
        account: Account,
        parsed: ParsedTransaction,
        category_id: Optional[str],
        now: datetime,
    ) -> Transaction:
        Money.zero(account.currency).require_same_currency(parsed.amount)
        return Transaction(
            id=str(uuid.uuid4()),
            account_id=account.id,
            date=parsed.date,
            amount=parsed.amount,
            merchant=parsed.merchant,
            memo=parsed.raw_description if parsed.raw_description != parsed.merchant else None,
            category_id=category_id,
            status=TransactionStatus.CLEARED,
            cleared_at=now,
            created_at=now,
            updated_at=now,
        )

    def import_transactions(
        self,
        account_id: int,
        preview: ImportPreview,
        now: Optional[datetime] = None,
    ) -> ImportResult:
        """Persist the selected previews in one batch.

        Deselected duplicates count as duplicates, other deselected rows as
        skipped. Row errors from parsing are carried into the result.

        Raises:
            NotFoundError: If the account doesn't exist
            CurrencyMismatchError: If a preview amount is not in the account currency
            Exception: Any repository write failure, unchanged
        """
        account = self.account_service.require_account(account_id)
        now = now or datetime.now(UTC)

        selected = preview.selected_transactions
        unselected = [p for p in preview.transactions if not p.is_selected]
        duplicate_count = sum(1 for p in unselected if p.is_duplicate)

        transactions = [
            self._to_transaction(account, p.transaction, p.category_id, now) for p in selected
        ]
        if transactions:
            self.db.save_transactions(transactions)

        result = ImportResult(
            imported_count=len(transactions),
            skipped_count=len(unselected) - duplicate_count,
            duplicate_count=duplicate_count,
            error_count=preview.error_count,
            errors=preview.errors,
        )
        logger.info("Import into account %d: %s", account.id, result.summary())
        return result

    def import_csv_text(
        self,
        csv_content: str,
        mapping: ColumnMapping,
        account_id: int,
        skip_duplicates: bool = True,
        now: Optional[datetime] = None,
    ) -> ImportResult:
        """Parse, detect duplicates and import in one step.

        Args:
            csv_content: Raw CSV content
            mapping: Column mapping configuration
            account_id: Account to import into
            skip_duplicates: Leave out rows flagged as duplicates

        Returns:
            Import result with counts and row errors
        """
        preview = self.generate_preview(csv_content, mapping, account_id)
        for item in preview.transactions:
            item.is_selected = not (skip_duplicates and item.is_duplicate)
        return self.import_transactions(account_id, preview, now=now)

    def start_session(
        self,
        csv_content: str,
        account_id: int,
        mapping: Optional[ColumnMapping] = None,
    ) -> "ImportSession":
        """Create an import session and run it up to the preview stage."""
        session = ImportSession(self, csv_content, account_id, mapping)
        session.run()
        return session


class ImportState(str, Enum):
    """Stages of one import attempt."""

    DETECTING = "detecting"
    PREVIEWING = "previewing"
    COMMITTING = "committing"
    COMMITTED = "committed"
    FAILED = "failed"


class ImportSession:
    """One import attempt, from raw text to committed transactions.

    The preview survives a failed commit, so commit() can be retried
    without parsing again.
    """

    def __init__(
        self,
        service: CSVImportService,
        csv_content: str,
        account_id: int,
        mapping: Optional[ColumnMapping] = None,
    ):
        self.service = service
        self.csv_content = csv_content
        self.account_id = account_id
        self.mapping = mapping
        self.state = ImportState.DETECTING
        self.preview: Optional[ImportPreview] = None
        self.result: Optional[ImportResult] = None
        self.error: Optional[Exception] = None

    def _fail(self, error: Exception) -> None:
        self.state = ImportState.FAILED
        self.error = error
        logger.warning("Import session for account %d failed: %s", self.account_id, error)

    def run(self) -> ImportPreview:
        """Detect (if needed), parse and score duplicates.

        Raises:
            InvalidStateError: If the session already left the detecting stage
            FormatDetectionError: If no mapping was given and detection fails
        """
        if self.state is not ImportState.DETECTING:
            raise InvalidStateError(f"Cannot run import in state '{self.state.value}'")

        try:
            if self.mapping is None:
                self.mapping, self.preview = self.service.auto_detect_and_preview(
                    self.csv_content, self.account_id
                )
            else:
                self.preview = self.service.generate_preview(
                    self.csv_content, self.mapping, self.account_id
                )
        except Exception as e:
            self.preview = None
            self._fail(e)
            raise

        self.state = ImportState.PREVIEWING
        return self.preview

    def _require_preview_item(self, preview_id: str) -> ImportTransactionPreview:
        if self.preview is None or self.state not in (ImportState.PREVIEWING, ImportState.FAILED):
            raise InvalidStateError(f"No preview to edit in state '{self.state.value}'")
        item = self.preview.find(preview_id)
        if item is None:
            raise NotFoundError(f"Preview row {preview_id} not found")
        return item

    def set_selected(self, preview_id: str, selected: bool) -> None:
        self._require_preview_item(preview_id).is_selected = selected

    def assign_category(self, preview_id: str, category_id: Optional[str]) -> None:
        self._require_preview_item(preview_id).category_id = category_id

    def commit(self, now: Optional[datetime] = None) -> ImportResult:
        """Persist the selected rows.

        Allowed from the preview stage, or again after a failed commit.

        Raises:
            InvalidStateError: If there is no preview to commit
            Exception: Any repository write failure, unchanged
        """
        if self.preview is None or self.state not in (ImportState.PREVIEWING, ImportState.FAILED):
            raise InvalidStateError(f"Cannot commit import in state '{self.state.value}'")

        self.state = ImportState.COMMITTING
        try:
            self.result = self.service.import_transactions(self.account_id, self.preview, now=now)
        except Exception as e:
            self._fail(e)
            raise

        self.error = None
        self.state = ImportState.COMMITTED
        return self.result
