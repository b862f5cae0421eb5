"""Tests for merchant name normalization."""

import pytest

from ledgerport.utils.merchant import normalize_merchant


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("SQ *STARBUCKS #4521", "Sq Starbucks"),
        ("AMAZON MKTP 1234567890", "Amazon Mktp"),
        ("  Multiple   Spaces  ", "Multiple Spaces"),
        ("TST* JOE'S CAFE", "Tst Joe's Cafe"),
        ("UBER   TRIP 12 34", "Uber Trip"),
        ("NETFLIX.COM", "Netflix.com"),
        ("7-ELEVEN 123", "7-eleven"),
        ("shell oil 5744", "Shell Oil"),
    ],
)
def test_normalize_examples(raw, expected):
    assert normalize_merchant(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "SQ *STARBUCKS #4521",
        "AMAZON MKTP 1234567890",
        "PAYPAL *EBAY INC",
        "CHECK # 1042 PAYMENT",
        "WHOLEFDS MKT 10234 SEATTLE WA",
        "a  *  b",
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize_merchant(raw)
    assert normalize_merchant(once) == once


def test_normalize_keeps_short_numbers_inside_name():
    assert normalize_merchant("CHIPOTLE 123 ONLINE") == "Chipotle 123 Online"


def test_normalize_can_empty_all_digit_description():
    assert normalize_merchant("12345678") == ""
