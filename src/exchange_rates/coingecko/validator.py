"""
Validation of raw rate entries
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

from pydantic import ValidationError

from src.utils.core.logger import get_logger
from src.exchange_rates.coingecko.models import RawRateEntry, ValidatedRate

logger = get_logger(__name__, utility="exchange_rates")


@dataclass
class ValidationOutcome:
    """Entries that passed validation, in input order, and how many were dropped"""
    valid: List[ValidatedRate] = field(default_factory=list)
    dropped: int = 0


class RateValidator:
    """
    Filters raw entries down to those satisfying the ValidatedRate invariant
    """

    REQUIRED_FIELDS: Tuple[str, ...] = ("symbol",)

    def check_entry(self, entry: Any) -> Tuple[bool, List[str]]:
        """
        Check one raw entry

        Returns:
            Tuple of (is_valid, issues)
        """
        if not isinstance(entry, dict):
            return False, [f"Entry is not an object: {type(entry).__name__}"]

        issues = []
        for name in self.REQUIRED_FIELDS:
            value = entry.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                issues.append(f"Missing required field: {name}")

        return len(issues) == 0, issues

    def validate(self, entries: Iterable[RawRateEntry]) -> ValidationOutcome:
        """Validate entries, silently dropping the ones that fail"""
        outcome = ValidationOutcome()

        for entry in entries:
            is_valid, issues = self.check_entry(entry)
            if not is_valid:
                logger.debug(f"Dropping entry: {'; '.join(issues)}")
                outcome.dropped += 1
                continue

            try:
                outcome.valid.append(ValidatedRate.model_validate(entry))
            except ValidationError as e:
                logger.debug(f"Dropping entry {entry.get('symbol')!r}: {e.error_count()} invalid field(s)")
                outcome.dropped += 1

        return outcome
