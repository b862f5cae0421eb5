"""Date parsing utilities for bank export date columns.

Date formats are written as bank-style patterns ("yyyy-MM-dd", "dd.MM.yyyy")
because that is how users and presets describe them. Each pattern is
translated to a strptime format plus a fixed-width regex, so "MM" only ever
accepts two digits.
"""

import re
from datetime import date, datetime
from functools import lru_cache

from dateutil import parser as date_parser

ISO_DATE_FORMAT = "yyyy-MM-dd"

# Priority order matters: ISO first, then US before European for ambiguous days.
COMMON_DATE_FORMATS = (
    "yyyy-MM-dd",
    "MM/dd/yyyy",
    "dd/MM/yyyy",
    "yyyy/MM/dd",
    "MM-dd-yyyy",
    "dd-MM-yyyy",
    "yyyyMMdd",
    "dd.MM.yyyy",
    "MM.dd.yyyy",
)

_TOKENS = (
    ("yyyy", "%Y", r"\d{4}"),
    ("MM", "%m", r"\d{2}"),
    ("dd", "%d", r"\d{2}"),
)


@lru_cache(maxsize=None)
def _compile_pattern(pattern: str) -> tuple[str, re.Pattern]:
    """Translate a pattern into (strptime format, full-match regex).

    Raises:
        ValueError: If the pattern has no recognised date tokens
    """
    strptime_parts = []
    regex_parts = []
    i = 0
    found = set()
    while i < len(pattern):
        for token, directive, regex in _TOKENS:
            if pattern.startswith(token, i):
                strptime_parts.append(directive)
                regex_parts.append(regex)
                found.add(token)
                i += len(token)
                break
        else:
            char = pattern[i]
            strptime_parts.append("%%" if char == "%" else char)
            regex_parts.append(re.escape(char))
            i += 1

    if found != {"yyyy", "MM", "dd"}:
        raise ValueError(f"Unsupported date format '{pattern}': needs yyyy, MM and dd")

    return "".join(strptime_parts), re.compile("".join(regex_parts))


def validate_date_format(pattern: str) -> str:
    """Return the pattern unchanged if it is usable, else raise ValueError."""
    _compile_pattern(pattern)
    return pattern


def matches_format(date_str: str, pattern: str) -> bool:
    """Return True if date_str is a valid calendar date in the given pattern."""
    try:
        parse_with_pattern(date_str, pattern)
    except ValueError:
        return False
    return True


def parse_with_pattern(date_str: str, pattern: str) -> date:
    """Parse a date strictly against one pattern.

    Raises:
        ValueError: If the string does not match the pattern or is not a real date
    """
    strptime_format, regex = _compile_pattern(pattern)
    value = date_str.strip()
    if not regex.fullmatch(value):
        raise ValueError(f"Date '{value}' does not match format '{pattern}'")
    return datetime.strptime(value, strptime_format).date()


def parse_date_with_format(date_str: str, pattern: str = ISO_DATE_FORMAT) -> date:
    """Parse a date using the given pattern, falling back to ISO 8601.

    Args:
        date_str: Raw date cell
        pattern: Expected pattern, e.g. "MM/dd/yyyy"

    Returns:
        Date object

    Raises:
        ValueError: If the string matches neither the pattern nor ISO 8601
    """
    if date_str is None or not date_str.strip():
        raise ValueError("Empty date string")

    try:
        return parse_with_pattern(date_str, pattern)
    except ValueError as pattern_error:
        try:
            return date_parser.isoparse(date_str.strip()).date()
        except (ValueError, OverflowError):
            raise ValueError(
                f"Could not parse date '{date_str.strip()}' with format '{pattern}'"
            ) from pattern_error


def looks_like_date(value: str) -> bool:
    """Return True if the value parses with any common bank date format."""
    return any(matches_format(value, pattern) for pattern in COMMON_DATE_FORMATS)
