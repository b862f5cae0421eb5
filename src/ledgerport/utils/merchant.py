"""Merchant name normalization."""

import re

_WHITESPACE = re.compile(r"\s+")
_ASTERISKS = re.compile(r"\*+")
_LOCATION_CODE = re.compile(r"\s+#\s*\d+")
_LONG_NUMBER = re.compile(r"\d{4,}")
_TRAILING_NUMBERS = re.compile(r"(\s+\d+)+\s*$")


def _title_word(word: str) -> str:
    if not word:
        return word
    return word[0].title() + word[1:].lower()


def normalize_merchant(description: str) -> str:
    """Canonicalize a bank description into a merchant name.

    "SQ *STARBUCKS #4521" -> "Sq Starbucks"
    "AMAZON MKTP 1234567890" -> "Amazon Mktp"
    "  Multiple   Spaces  " -> "Multiple Spaces"

    The result is stable: normalizing it again returns the same string.
    """
    name = _WHITESPACE.sub(" ", description.strip())
    name = _ASTERISKS.sub("", name)
    name = _LOCATION_CODE.sub("", name)
    name = _LONG_NUMBER.sub("", name)
    name = _TRAILING_NUMBERS.sub("", name)
    name = _WHITESPACE.sub(" ", name).strip()
    return " ".join(_title_word(word) for word in name.split(" "))
