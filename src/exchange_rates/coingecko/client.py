"""
CoinGecko markets API client

Issues exactly one GET per page. Upstream failures are reported as
PageFailed values rather than raised, so a poll never aborts on them.
"""

import requests
from typing import Any, Dict, Optional

from src.utils.core.logger import get_logger
from src.exchange_rates.config import CoinGeckoConfig, config as default_config
from src.exchange_rates.coingecko.decoder import RateDecodeError, parse_rates
from src.exchange_rates.coingecko.models import PageFailed, PageFetched, PageResult, RawPage

logger = get_logger(__name__, utility="exchange_rates")


class CoinGeckoAPIError(Exception):
    """CoinGecko API error with classification used for retry decisions"""

    RETRYABLE_HTTP_ERRORS = (429, 500, 502, 503, 504)  # Rate limits and server errors
    NON_RETRYABLE_HTTP_ERRORS = (400, 401, 403, 404, 422)  # Client errors

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_category: Optional[str] = None
    ) -> None:
        self.message: str = message
        self.status_code: Optional[int] = status_code
        self.error_category: str = error_category or self._classify_error()
        super().__init__(self.message)

    def _classify_error(self) -> str:
        """Classify the error type based on status code"""
        if self.status_code:
            if self.status_code in self.RETRYABLE_HTTP_ERRORS:
                return "retryable"
            elif self.status_code in self.NON_RETRYABLE_HTTP_ERRORS:
                return "client_error"
            elif self.status_code >= 500:
                return "server_error"
        return "unknown"

    def is_retryable(self) -> bool:
        """Determine if this error should trigger a retry"""
        return self.error_category in ("retryable", "server_error", "network")

    def to_page_failure(self, page: int) -> PageFailed:
        return PageFailed(
            page=page,
            reason=self.message,
            status_code=self.status_code,
            retryable=self.is_retryable(),
        )


class CoinGeckoClient:
    """Client for the CoinGecko /coins/markets listing"""

    def __init__(
        self,
        config: Optional[CoinGeckoConfig] = None,
        session: Optional[requests.Session] = None
    ) -> None:
        """
        Initialize the CoinGecko client

        Args:
            config: API settings (defaults to the environment-derived config)
            session: HTTP session to use; when omitted the client creates and owns one
        """
        self.config: CoinGeckoConfig = config or default_config
        self._owns_session: bool = session is None
        self.session: requests.Session = session or requests.Session()

        if self._owns_session:
            self.session.headers.update(self.config.headers)

    @staticmethod
    def markets_params(currency: str, per_page: int, page: int) -> Dict[str, Any]:
        """Query parameters for one page of the markets listing, in a fixed order"""
        return {
            "vs_currency": currency,
            "order": "market_cap_desc",
            "sparkline": "false",
            "per_page": str(per_page),
            "page": str(page),
        }

    def markets_url(self, currency: str = "usd", per_page: int = 250, page: int = 1) -> str:
        """Build the deterministic URL for one page of the markets listing"""
        prepared = requests.Request(
            "GET", self.config.markets_url, params=self.markets_params(currency, per_page, page)
        ).prepare()
        return prepared.url

    def get_markets_page(self, currency: str, per_page: int, page: int) -> RawPage:
        """
        Issue a single GET for one page

        Returns:
            RawPage with status code and body; non-success status is not raised

        Raises:
            requests.RequestException: For connection-level failures
        """
        url = self.markets_url(currency, per_page, page)
        logger.debug(f"Fetching from: {url}")

        response = self.session.get(url, timeout=self.config.REQUEST_TIMEOUT)
        return RawPage(url=url, status_code=response.status_code, body=response.content or b"")

    def fetch_markets_page(self, currency: str, per_page: int, page: int) -> PageResult:
        """
        Fetch and decode one page, folding every upstream failure into PageFailed

        Args:
            currency: Quote currency (vs_currency)
            per_page: Page size requested from the provider
            page: 1-based page number

        Returns:
            PageFetched with the decoded rows, or PageFailed with the reason
        """
        try:
            raw = self.get_markets_page(currency, per_page, page)
        except requests.RequestException as e:
            logger.error(f"Request for page {page} failed: {type(e).__name__}: {e}")
            return CoinGeckoAPIError(
                f"Transport error: {e}", error_category="network"
            ).to_page_failure(page)

        if not raw.ok:
            logger.error(f"Unsuccessful response - Error Code: {raw.status_code} ({raw.url})")
            return CoinGeckoAPIError(
                f"HTTP {raw.status_code}", status_code=raw.status_code
            ).to_page_failure(page)

        logger.debug("Parsing into rates")
        try:
            rows = parse_rates(raw.body)
        except RateDecodeError as e:
            logger.warning(f"Could not decode page {page} from {raw.url}: {e}")
            return PageFailed(page=page, reason=f"decode error: {e}", status_code=raw.status_code)

        return PageFetched(page=page, rows=rows)

    def close(self) -> None:
        """Close the session if this client created it"""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "CoinGeckoClient":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - cleanup session"""
        self.close()
