"""Infer a column mapping, date format and delimiter from raw CSV content.

Each column role has an ordered tuple of patterns. Patterns are tried in
priority order and must match the whole trimmed, lower-cased header; the
first header matching the first successful pattern wins.
"""

import logging
import re
from typing import Optional, Sequence

from ledgerport.domain.column_mapping import ColumnMapping
from ledgerport.domain.errors import FormatDetectionError, undetectable_columns
from ledgerport.utils.amount_parser import looks_like_amount
from ledgerport.utils.date_parser import (
    COMMON_DATE_FORMATS,
    ISO_DATE_FORMAT,
    looks_like_date,
    matches_format,
)

logger = logging.getLogger(__name__)


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


DATE_COLUMN_PATTERNS = _compile(
    "date",
    "transaction.?date",
    "posting.?date",
    "value.?date",
    "txn.?date",
)

DESCRIPTION_COLUMN_PATTERNS = _compile(
    "description",
    "desc",
    "narrative",
    "transaction.?description",
    "payee",
    "merchant",
    "name",
    "memo",
    "notes",
)

AMOUNT_COLUMN_PATTERNS = _compile(
    "amount",
    "transaction.?amount",
    "value",
    "sum",
    "total",
)

DEBIT_COLUMN_PATTERNS = _compile(
    "debit",
    "debit.?amount",
    "withdrawal",
    "outflow",
    "expense",
    "money.?out",
    "payment",
)

CREDIT_COLUMN_PATTERNS = _compile(
    "credit",
    "credit.?amount",
    "deposit",
    "inflow",
    "income",
    "money.?in",
    "received",
)

COMMON_DELIMITERS = (",", ";", "\t", "|")

DATE_FORMAT_THRESHOLD = 0.8
DELIMITER_SAMPLE_LINES = 3
DATE_SAMPLE_SIZE = 5


def find_column(headers: Sequence[str], patterns: Sequence[re.Pattern]) -> Optional[str]:
    """Return the original header matched by the highest-priority pattern."""
    normalized = [h.strip().lower() for h in headers]
    for pattern in patterns:
        for original, header in zip(headers, normalized):
            if pattern.fullmatch(header):
                return original
    return None


def detect_column_mapping(headers: Sequence[str]) -> ColumnMapping:
    """Detect column roles from a header row.

    A single amount column is preferred; otherwise a debit and credit pair
    is used. A lone debit or credit column is treated as the amount column.

    Returns:
        ColumnMapping with the ISO date format and default delimiter

    Raises:
        FormatDetectionError: If the date, description or amount source is missing
    """
    date_column = find_column(headers, DATE_COLUMN_PATTERNS)
    description_column = find_column(headers, DESCRIPTION_COLUMN_PATTERNS)
    amount_column = find_column(headers, AMOUNT_COLUMN_PATTERNS)
    debit_column = find_column(headers, DEBIT_COLUMN_PATTERNS)
    credit_column = find_column(headers, CREDIT_COLUMN_PATTERNS)

    missing = []
    if date_column is None:
        missing.append("date")
    if description_column is None:
        missing.append("description")
    if amount_column is None and debit_column is None and credit_column is None:
        missing.append("amount")
    if missing:
        logger.warning("Column detection failed, missing %s in %s", missing, list(headers))
        raise FormatDetectionError(undetectable_columns(missing, list(headers)))

    if amount_column is not None:
        mapping = ColumnMapping(
            date_column=date_column,
            amount_column=amount_column,
            description_column=description_column,
        )
    elif debit_column is not None and credit_column is not None:
        mapping = ColumnMapping(
            date_column=date_column,
            description_column=description_column,
            debit_column=debit_column,
            credit_column=credit_column,
        )
    else:
        mapping = ColumnMapping(
            date_column=date_column,
            amount_column=debit_column or credit_column,
            description_column=description_column,
        )

    logger.debug("Detected column mapping %s", mapping)
    return mapping


def detect_date_format(date_strings: Sequence[str]) -> str:
    """Pick the first common date format that parses at least 80% of samples.

    Falls back to ISO (yyyy-MM-dd) when the sample is empty or nothing
    clears the threshold.
    """
    if not date_strings:
        return ISO_DATE_FORMAT

    for pattern in COMMON_DATE_FORMATS:
        success = sum(1 for value in date_strings if matches_format(value, pattern))
        if success / len(date_strings) >= DATE_FORMAT_THRESHOLD:
            return pattern
    return ISO_DATE_FORMAT


def detect_delimiter(sample: str) -> str:
    """Return the candidate delimiter occurring most in the first lines."""
    lines = sample.splitlines()[:DELIMITER_SAMPLE_LINES]
    if not lines:
        return ","

    counts = {d: sum(line.count(d) for line in lines) for d in COMMON_DELIMITERS}
    # max() keeps the first candidate on ties, so comma wins an all-zero sample
    return max(COMMON_DELIMITERS, key=lambda d: counts[d])


def is_likely_header(first_row: Sequence[str]) -> bool:
    """Heuristic: headers contain letters and no date- or amount-like cells."""
    if not first_row:
        return False

    has_letters = any(any(ch.isalpha() for ch in value) for value in first_row)
    has_date = any(looks_like_date(value) for value in first_row)
    has_amount = any(looks_like_amount(value) for value in first_row)
    return has_letters and not has_date and not has_amount
