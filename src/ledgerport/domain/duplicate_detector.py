"""Duplicate detection for imported transactions.

Parsed transactions are compared with already stored transactions (exact,
then fuzzy) and with each other (fingerprint pass over the batch). The two
passes are independent.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ledgerport.domain.entities import Transaction
from ledgerport.domain.errors import ValidationError
from ledgerport.domain.import_models import NEW, Duplicate, DuplicateStatus, ParsedTransaction

logger = logging.getLogger(__name__)

DATE_WEIGHT = 0.4
AMOUNT_WEIGHT = 0.4
MERCHANT_WEIGHT = 0.2

DEFAULT_DUPLICATE_THRESHOLD = 0.75
DEFAULT_DATE_TOLERANCE_DAYS = 3


@dataclass(frozen=True)
class DuplicatePolicy:
    """Tunable limits for fuzzy duplicate matching.

    Attributes:
        threshold: Minimum fuzzy score reported as a duplicate
        date_tolerance_days: Largest date gap that still earns date credit
    """

    threshold: float = DEFAULT_DUPLICATE_THRESHOLD
    date_tolerance_days: int = DEFAULT_DATE_TOLERANCE_DAYS

    def __post_init__(self):
        if not 0.0 <= self.threshold <= 1.0:
            raise ValidationError(f"Duplicate threshold must be between 0 and 1, got {self.threshold}")
        if self.date_tolerance_days < 0:
            raise ValidationError(
                f"Date tolerance cannot be negative, got {self.date_tolerance_days}"
            )


def levenshtein_distance(s1: str, s2: str) -> int:
    """Minimum single-character edits turning s1 into s2."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j], current[j - 1], previous[j - 1]) + 1)
        previous = current
    return previous[-1]


def string_similarity(s1: str, s2: str) -> float:
    """Similarity in [0, 1]: 1 - distance / longer length. Two empty strings are 1.0."""
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return 1.0 - levenshtein_distance(s1, s2) / max(len(s1), len(s2))


class DuplicateDetector:
    """Scores parsed transactions against existing ones."""

    def __init__(self, policy: Optional[DuplicatePolicy] = None):
        """Initialize duplicate detector.

        Args:
            policy: Matching limits; defaults to a 0.75 threshold and 3 day window
        """
        self.policy = policy or DuplicatePolicy()

    @staticmethod
    def is_exact_match(parsed: ParsedTransaction, existing: Transaction) -> bool:
        """Same date, same minor units, same merchant ignoring case."""
        return (
            parsed.date == existing.date
            and parsed.amount.minor_units == existing.amount.minor_units
            and parsed.merchant.lower() == existing.merchant.lower()
        )

    def score(self, parsed: ParsedTransaction, existing: Transaction) -> float:
        """Weighted fuzzy score in [0, 1].

        - date within tolerance: up to 0.4, decreasing linearly with the gap
        - exact amount: 0.4
        - merchant similarity: up to 0.2
        """
        total = 0.0

        days_diff = abs((parsed.date - existing.date).days)
        tolerance = self.policy.date_tolerance_days
        if days_diff <= tolerance:
            total += DATE_WEIGHT if tolerance == 0 else DATE_WEIGHT * (1 - days_diff / tolerance)

        if parsed.amount.minor_units == existing.amount.minor_units:
            total += AMOUNT_WEIGHT

        total += MERCHANT_WEIGHT * string_similarity(
            parsed.merchant.lower(), existing.merchant.lower()
        )
        return total

    def check_duplicate(
        self, parsed: ParsedTransaction, existing_transactions: Sequence[Transaction]
    ) -> DuplicateStatus:
        """Classify one parsed transaction against existing records.

        Returns:
            Duplicate with confidence 1.0 for an exact match, Duplicate with the
            best fuzzy score if it reaches the threshold, otherwise New
        """
        for existing in existing_transactions:
            if self.is_exact_match(parsed, existing):
                return Duplicate(confidence=1.0, existing_transaction_id=existing.id)

        best = None
        best_score = 0.0
        for existing in existing_transactions:
            candidate = self.score(parsed, existing)
            if best is None or candidate > best_score:
                best, best_score = existing, candidate

        if best is not None and best_score >= self.policy.threshold:
            return Duplicate(confidence=best_score, existing_transaction_id=best.id)
        return NEW

    def check_duplicates(
        self,
        parsed_transactions: Sequence[ParsedTransaction],
        existing_transactions: Sequence[Transaction],
    ) -> list[tuple[ParsedTransaction, DuplicateStatus]]:
        """Check many parsed transactions; results keep input order."""
        return [
            (parsed, self.check_duplicate(parsed, existing_transactions))
            for parsed in parsed_transactions
        ]

    @staticmethod
    def find_internal_duplicates(
        parsed_transactions: Sequence[ParsedTransaction],
    ) -> dict[str, str]:
        """Find repeated rows within one batch.

        Returns:
            Mapping of duplicate transaction ID -> ID of the first batch row
            with the same fingerprint. The first occurrence is never flagged.
        """
        first_seen: dict[str, str] = {}
        duplicates: dict[str, str] = {}
        for parsed in parsed_transactions:
            fingerprint = parsed.fingerprint()
            if fingerprint in first_seen:
                duplicates[parsed.id] = first_seen[fingerprint]
            else:
                first_seen[fingerprint] = parsed.id

        if duplicates:
            logger.info("Found %d duplicate rows within the batch", len(duplicates))
        return duplicates
