"""Turn raw CSV rows into parsed transactions.

Every row produces exactly one outcome: ``RowParsed``, ``RowSkipped`` (a
zero-amount row) or ``RowFailed``. Silent and reporting parsing are two
policies over the same outcome stream.
"""

import csv
import io
import logging
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Union

from ledgerport.domain.column_mapping import ColumnMapping
from ledgerport.domain.errors import FormatDetectionError
from ledgerport.domain.format_detector import (
    DATE_SAMPLE_SIZE,
    detect_column_mapping,
    detect_date_format,
    detect_delimiter,
    is_likely_header,
)
from ledgerport.domain.import_models import AutoParseResult, ImportRowError, ParsedTransaction
from ledgerport.domain.money import Currency
from ledgerport.utils.amount_parser import parse_amount_minor, parse_debit_credit
from ledgerport.utils.date_parser import parse_date_with_format
from ledgerport.utils.merchant import normalize_merchant

logger = logging.getLogger(__name__)


class MissingColumnError(ValueError):
    """Row is too short to contain a mapped column."""


@dataclass(frozen=True)
class CSVRow:
    """Raw cells of one data row keyed by column name.

    Attributes:
        row_index: 1-based index among data rows (header excluded)
        columns: Column name -> raw cell text
    """

    row_index: int
    columns: dict[str, str]

    def get(self, column: str) -> Optional[str]:
        """Return the trimmed cell, or None if the cell is empty.

        Raises:
            MissingColumnError: If the row has no such column
        """
        if column not in self.columns:
            raise MissingColumnError(f"Missing column '{column}'")
        value = self.columns[column]
        if value is None:
            return None
        value = value.strip()
        return value or None

    def get_optional(self, column: str) -> Optional[str]:
        """Like get(), but a missing column reads as an empty cell."""
        try:
            return self.get(column)
        except MissingColumnError:
            return None

    def snapshot(self) -> str:
        return ", ".join(f"{name}={value}" for name, value in self.columns.items())


@dataclass(frozen=True)
class RowParsed:
    transaction: ParsedTransaction


@dataclass(frozen=True)
class RowSkipped:
    row_index: int
    reason: str


@dataclass(frozen=True)
class RowFailed:
    error: ImportRowError


RowOutcome = Union[RowParsed, RowSkipped, RowFailed]


def _require(row: CSVRow, column: str, label: str) -> str:
    value = row.get(column)
    if value is None:
        raise ValueError(f"Missing {label}")
    return value


def extract_row(row: CSVRow, mapping: ColumnMapping, currency: Currency) -> RowOutcome:
    """Extract one transaction from a row.

    Date, amount and description failures become ``RowFailed``; a row whose
    amount nets to zero is ``RowSkipped``.
    """
    try:
        txn_date = parse_date_with_format(_require(row, mapping.date_column, "date"), mapping.date_format)

        if mapping.uses_debit_credit_columns:
            debit = row.get_optional(mapping.debit_column)
            credit = row.get_optional(mapping.credit_column)
            if (
                mapping.debit_column not in row.columns
                and mapping.credit_column not in row.columns
            ):
                raise MissingColumnError(
                    f"Missing columns '{mapping.debit_column}' and '{mapping.credit_column}'"
                )
            amount_minor = parse_debit_credit(debit, credit, currency.minor_digits)
        else:
            amount_minor = parse_amount_minor(
                _require(row, mapping.amount_column, "amount"), currency.minor_digits
            )

        if amount_minor == 0:
            return RowSkipped(row.row_index, "zero amount")

        raw_description = _require(row, mapping.description_column, "description")
    except ValueError as e:
        return RowFailed(ImportRowError(row_index=row.row_index, message=str(e), raw_data=row.snapshot()))

    merchant = normalize_merchant(raw_description) or " ".join(raw_description.split())
    return RowParsed(
        ParsedTransaction.from_minor_units(
            date=txn_date,
            amount_minor=amount_minor,
            currency=currency,
            merchant=merchant,
            raw_description=raw_description,
            raw_row_index=row.row_index,
        )
    )


def _is_blank(cells: list[str]) -> bool:
    return all(not cell.strip() for cell in cells)


class CSVTransactionParser:
    """Parses delimited bank exports into transactions."""

    def read_rows(self, csv_content: str, mapping: ColumnMapping) -> Iterator[Union[CSVRow, RowFailed]]:
        """Yield data rows keyed by column name.

        Blank lines are ignored and do not advance the row index. Structurally
        broken lines are yielded as ``RowFailed``.
        """
        reader = csv.reader(io.StringIO(csv_content.lstrip("\ufeff")), delimiter=mapping.delimiter)
        headers: Optional[list[str]] = None
        row_index = 0

        while True:
            try:
                cells = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                row_index += 1
                yield RowFailed(ImportRowError(row_index=row_index, message=f"Malformed row: {e}"))
                continue

            if _is_blank(cells):
                continue

            if mapping.has_header and headers is None:
                headers = [cell.strip() for cell in cells]
                continue

            row_index += 1
            names = headers if headers is not None else [str(i) for i in range(1, len(cells) + 1)]
            yield CSVRow(row_index=row_index, columns=dict(zip(names, cells)))

    def extract_rows(
        self, csv_content: str, mapping: ColumnMapping, currency: Currency
    ) -> Iterator[RowOutcome]:
        """Yield one outcome per data row."""
        for row in self.read_rows(csv_content, mapping):
            if isinstance(row, RowFailed):
                yield row
            else:
                yield extract_row(row, mapping, currency)

    def parse(
        self, csv_content: str, mapping: ColumnMapping, currency: Currency
    ) -> list[ParsedTransaction]:
        """Parse best-effort, silently dropping rows that fail.

        Args:
            csv_content: Raw CSV text
            mapping: Column mapping configuration
            currency: Currency for all transactions (from the account)

        Returns:
            Successfully parsed transactions
        """
        transactions = []
        for outcome in self.extract_rows(csv_content, mapping, currency):
            if isinstance(outcome, RowParsed):
                transactions.append(outcome.transaction)
            elif isinstance(outcome, RowFailed):
                logger.debug("Dropping row %d: %s", outcome.error.row_index, outcome.error.message)
        return transactions

    def parse_with_errors(
        self, csv_content: str, mapping: ColumnMapping, currency: Currency
    ) -> tuple[list[ParsedTransaction], list[ImportRowError]]:
        """Parse every row, collecting an ImportRowError for each failure.

        Returns:
            Tuple of (parsed transactions, row errors)
        """
        transactions = []
        errors = []
        for outcome in self.extract_rows(csv_content, mapping, currency):
            if isinstance(outcome, RowParsed):
                transactions.append(outcome.transaction)
            elif isinstance(outcome, RowFailed):
                logger.debug("Row %d failed: %s", outcome.error.row_index, outcome.error.message)
                errors.append(outcome.error)
        logger.info("Parsed %d transactions with %d row errors", len(transactions), len(errors))
        return transactions, errors

    def detect_mapping(self, csv_content: str) -> ColumnMapping:
        """Detect delimiter, columns and date format from the content.

        Raises:
            FormatDetectionError: If the content has no header or the columns
                cannot be identified
        """
        delimiter = detect_delimiter(csv_content)
        reader = csv.reader(io.StringIO(csv_content.lstrip("\ufeff")), delimiter=delimiter)
        try:
            non_blank = (cells for cells in reader if not _is_blank(cells))
            headers = next(non_blank, None)
            samples = [cells for _, cells in zip(range(DATE_SAMPLE_SIZE), non_blank)]
        except csv.Error as e:
            raise FormatDetectionError(f"Could not read CSV header: {e}") from e

        if headers is None:
            raise FormatDetectionError("CSV content is empty")

        headers = [h.strip() for h in headers]
        try:
            mapping = detect_column_mapping(headers)
        except FormatDetectionError as e:
            if not is_likely_header(headers):
                raise FormatDetectionError(
                    f"{e} The first row does not look like a header row."
                ) from e
            raise

        date_index = headers.index(mapping.date_column)
        sample_dates = [cells[date_index] for cells in samples if date_index < len(cells)]
        date_format = detect_date_format(sample_dates)

        return replace(mapping, date_format=date_format, delimiter=delimiter)

    def parse_auto_detect(self, csv_content: str, currency: Currency) -> AutoParseResult:
        """Detect the format, then parse in reporting mode.

        Raises:
            FormatDetectionError: If the format cannot be detected
        """
        mapping = self.detect_mapping(csv_content)
        transactions, errors = self.parse_with_errors(csv_content, mapping, currency)
        return AutoParseResult(mapping=mapping, transactions=transactions, errors=errors)
