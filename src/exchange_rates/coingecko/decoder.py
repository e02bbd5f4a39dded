"""
Decoding of raw markets response bodies into raw rate entries
"""

import json
from typing import List, Union

from src.utils.core.logger import get_logger
from src.exchange_rates.coingecko.models import RawRateEntry

logger = get_logger(__name__, utility="exchange_rates")


class RateDecodeError(ValueError):
    """Raised when a response body is not a JSON array"""


def parse_rates(body: Union[bytes, str, None]) -> List[RawRateEntry]:
    """
    Parse a response body as a JSON array of rate entries

    Entries are returned as decoded; filtering malformed entries is the
    validator's job.

    Raises:
        RateDecodeError: If the body is empty, not JSON, nested too deeply
            to parse, or not an array
    """
    if body is None or len(body) == 0:
        raise RateDecodeError("empty body")

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise RateDecodeError(f"malformed JSON: {e}") from e

    if not isinstance(data, list):
        raise RateDecodeError(f"expected a JSON array, got {type(data).__name__}")

    return data


def decode_rates(body: Union[bytes, str, None]) -> List[RawRateEntry]:
    """Parse a response body, returning an empty list when it cannot be decoded"""
    try:
        return parse_rates(body)
    except RateDecodeError as e:
        logger.warning(f"Treating undecodable body as empty page: {e}")
        return []
