"""Utility functions for ledgerport."""

from ledgerport.utils.date_parser import parse_date_with_format
from ledgerport.utils.amount_parser import parse_amount_minor, parse_debit_credit
from ledgerport.utils.merchant import normalize_merchant

__all__ = [
    "parse_date_with_format",
    "parse_amount_minor",
    "parse_debit_credit",
    "normalize_merchant",
]
