"""
Airbnb API client - one request per operation
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from .config import ClientConfig
from .exceptions import AirbnbAPIError, ArgumentError, HTTPStatusError, ParseError, TransportError
from .income import MonthlyIncomeEstimate, estimate_income, parse_calendar_months
from .parsing import (
    ListingPageInfo,
    SearchResult,
    load_json,
    parse_listing_page,
    parse_reviews,
    parse_search,
)
from .serializer import build_url, path_segment

logger = logging.getLogger(__name__)

SuccessCallback = Callable[..., Any]
FailureCallback = Callable[[AirbnbAPIError, Optional[httpx.Response]], Any]


# ============================================
# RESULTS & METRICS
# ============================================

@dataclass
class Outcome:
    """
    Result of one API call.

    Exactly one of ``value`` / ``error`` is meaningful: check ``ok``,
    or call ``unwrap()`` to get the value or raise the error.
    """
    value: Any = None
    error: Optional[AirbnbAPIError] = None
    response: Optional[httpx.Response] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


@dataclass
class ClientMetrics:
    """Request counters for monitoring."""
    requests_total: int = 0
    requests_success: int = 0
    requests_failed: int = 0
    avg_response_time: float = 0
    start_time: float = field(default_factory=time.time)

    @property
    def success_rate(self) -> float:
        if self.requests_total == 0:
            return 0
        return self.requests_success / self.requests_total * 100

    @property
    def elapsed_time(self) -> float:
        return time.time() - self.start_time

    def record(self, elapsed: float, success: bool):
        self.requests_total += 1
        if success:
            self.requests_success += 1
        else:
            self.requests_failed += 1
        self.avg_response_time = (
            (self.avg_response_time * (self.requests_total - 1) + elapsed)
            / self.requests_total
        )

    def to_dict(self) -> dict:
        return {
            "requests_total": self.requests_total,
            "requests_success": self.requests_success,
            "requests_failed": self.requests_failed,
            "success_rate": round(self.success_rate, 2),
            "avg_response_time_ms": round(self.avg_response_time * 1000, 2),
            "elapsed_time_sec": round(self.elapsed_time, 2),
        }


# ============================================
# ARGUMENT CHECKS
# ============================================

def _check_id(value: Any, name: str) -> Any:
    """Validate an id and return it normalized; integral floats become ints."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ArgumentError(f"{name} must be a string or a number, got {type(value).__name__}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ArgumentError(f"{name} must be a whole number, got {value}")
        return int(value)
    if isinstance(value, str) and not value.strip():
        raise ArgumentError(f"{name} must not be empty")
    return value


def _check_options(options: Optional[Mapping[str, Any]], name: str = "options") -> Dict[str, Any]:
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise ArgumentError(f"{name} must be a mapping, got {type(options).__name__}")
    return dict(options)


# ============================================
# MAIN CLIENT CLASS
# ============================================

class AirbnbClient:
    """
    Client for the unofficial Airbnb web API.

    Every operation makes exactly one GET request and returns an
    ``Outcome``. Invalid arguments raise ``ArgumentError`` before any
    request; transport, status and parse failures are reported through
    the outcome (and ``on_failure`` when given), never raised.

    Example:
        async with AirbnbClient(ClientConfig.from_env()) as client:
            outcome = await client.search({"location": "Seattle, WA", "guests": 2})
            if outcome.ok:
                print(outcome.value.hosting_ids)

            estimates = (await client.income(hosting_id)).unwrap()
    """

    def __init__(self, config: ClientConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.metrics = ClientMetrics()

        self._owns_client = client is None
        self.client = client if client is not None else httpx.AsyncClient(
            timeout=config.request_timeout,
            headers={"x-airbnb-api-key": config.api_key, **config.headers},
            proxy=config.proxy,
            follow_redirects=True,
            http2=config.http2,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    # ----------------------------------------
    # Request plumbing
    # ----------------------------------------

    async def _request(self, tag: str, url: str, parse: Callable[[str], Any]) -> Outcome:
        logger.debug(f"[{tag}] GET {url}")
        start_time = time.time()

        try:
            response = await self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.metrics.record(time.time() - start_time, success=False)
            logger.warning(f"[{tag}] Network error: {e}")
            error = TransportError(f"Request to {url} failed: {e}")
            error.__cause__ = e
            return Outcome(error=error)

        elapsed = time.time() - start_time

        if response.status_code != 200:
            self.metrics.record(elapsed, success=False)
            logger.warning(f"[{tag}] API returned {response.status_code}")
            return Outcome(error=HTTPStatusError(response.status_code, url), response=response)

        try:
            value = parse(response.text)
        except ParseError as e:
            error = e
        except Exception as e:
            error = ParseError(f"Unexpected response: {e!r}")
            error.__cause__ = e
        else:
            self.metrics.record(elapsed, success=True)
            return Outcome(value=value, response=response)

        self.metrics.record(elapsed, success=False)
        logger.error(f"[{tag}] Parse error: {error}")
        return Outcome(error=error, response=response)

    @staticmethod
    def _deliver(
        outcome: Outcome,
        on_success: Optional[SuccessCallback],
        on_failure: Optional[FailureCallback],
        success_args: Optional[tuple] = None,
    ) -> Outcome:
        if outcome.ok:
            if callable(on_success):
                on_success(*(success_args if success_args is not None else (outcome.value,)))
        elif callable(on_failure):
            on_failure(outcome.error, outcome.response)
        return outcome

    def _availability_params(self, hosting_id: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        today = date.today()
        params = {
            "listing_id": hosting_id,
            "key": self.config.api_key,
            "currency": self.config.currency,
            "locale": self.config.locale,
            "month": today.month,
            "year": today.year,
            "count": self.config.availability_count,
            "_format": self.config.availability_format,
        }
        params.update(options)
        return params

    # ----------------------------------------
    # Operations
    # ----------------------------------------

    async def search(
        self,
        options: Mapping[str, Any],
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> Outcome:
        """
        Search hostings.

        Args:
            options: Search filters, e.g. ``location``, ``checkin``,
                ``checkout``, ``guests``, ``page``, ``price_min``,
                ``price_max``, ``superhost``, ``ib``, and list filters
                such as ``hosting_amenities`` or ``room_types``
            on_success: Called with ``(hosting_ids, body)``
            on_failure: Called with ``(error, response)``

        Returns:
            Outcome holding a SearchResult
        """
        if options is None or not isinstance(options, Mapping):
            raise ArgumentError("Must provide search options")

        url = build_url(self.config.search_url, options)
        logger.info(f"[SEARCH] {options.get('location', '')}")

        outcome = await self._request("SEARCH", url, parse_search)
        if outcome.ok:
            result: SearchResult = outcome.value
            logger.info(f"[SEARCH] Found {len(result.hosting_ids)} hostings")
            return self._deliver(outcome, on_success, on_failure, (result.hosting_ids, result.body))
        return self._deliver(outcome, on_success, on_failure)

    async def availability(
        self,
        hosting_id: Any,
        options: Optional[Mapping[str, Any]] = None,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> Outcome:
        """
        Get the availability calendar for a hosting.

        Options override the defaults: ``key``, ``currency``, ``locale``,
        ``month`` (1-based), ``year`` and ``count`` (months fetched
        starting at ``month``).
        """
        hosting_id = _check_id(hosting_id, "hosting_id")
        params = self._availability_params(hosting_id, _check_options(options))

        url = build_url(self.config.availability_url, params)
        outcome = await self._request("AVAILABILITY", url, load_json)
        return self._deliver(outcome, on_success, on_failure)

    async def income(
        self,
        hosting_id: Any,
        options: Optional[Mapping[str, Any]] = None,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> Outcome:
        """
        Estimate monthly income for a hosting from its availability calendar.

        Takes the same options as ``availability``; the outcome holds a
        list of MonthlyIncomeEstimate, one per calendar month.
        """
        hosting_id = _check_id(hosting_id, "hosting_id")
        params = self._availability_params(hosting_id, _check_options(options))

        def parse(body: str) -> List[MonthlyIncomeEstimate]:
            return estimate_income(parse_calendar_months(load_json(body)))

        url = build_url(self.config.availability_url, params)
        outcome = await self._request("INCOME", url, parse)
        if outcome.ok:
            logger.info(f"[INCOME] {hosting_id}: {len(outcome.value)} months estimated")
        return self._deliver(outcome, on_success, on_failure)

    async def info(
        self,
        hosting_id: Any,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> Outcome:
        """Get listing info (JSON) for a hosting."""
        hosting_id = _check_id(hosting_id, "hosting_id")

        url = build_url(
            f"{self.config.listing_info_url}/{path_segment(hosting_id)}",
            {"key": self.config.api_key},
        )
        outcome = await self._request("INFO", url, load_json)
        return self._deliver(outcome, on_success, on_failure)

    async def info_page(
        self,
        hosting_id: Any,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> Outcome:
        """Scrape title, description and embedded metadata from a listing page."""
        hosting_id = _check_id(hosting_id, "hosting_id")

        url = f"{self.config.listing_page_url}/{path_segment(hosting_id)}"
        outcome = await self._request("INFO_PAGE", url, parse_listing_page)
        if outcome.ok:
            page: ListingPageInfo = outcome.value
            if page.meta_data is None:
                logger.warning(f"[INFO_PAGE] No hosting metadata found for {hosting_id}")
        return self._deliver(outcome, on_success, on_failure)

    async def reviews(
        self,
        user_id: Any,
        options: Optional[Mapping[str, Any]] = None,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> Outcome:
        """
        Get the review texts left for a user.

        Options: ``page`` (default 1) and ``role``, either 'host' or
        'guest' (default from config).
        """
        user_id = _check_id(user_id, "user_id")
        params = {"key": self.config.api_key, "page": 1, "role": self.config.reviews_role}
        params.update(_check_options(options))

        url = build_url(f"{self.config.user_reviews_url}/{path_segment(user_id)}", params)
        outcome = await self._request("REVIEWS", url, parse_reviews)
        if outcome.ok:
            logger.info(f"[REVIEWS] {user_id}: {len(outcome.value)} reviews")
        return self._deliver(outcome, on_success, on_failure)

    # ----------------------------------------
    # Metrics
    # ----------------------------------------

    def get_metrics(self) -> dict:
        """Get request metrics."""
        return self.metrics.to_dict()

    def reset_metrics(self):
        """Reset request metrics."""
        self.metrics = ClientMetrics()
