"""Async HTTP client for the Manifold Markets public API.

The API (``https://api.manifold.markets``) exposes market metadata and the
current CPMM liquidity pool of each market. This client is an async
context manager with structured error handling and a per-instance TTL
cache, so an optimization that looks the same market up dozens of times
only pays for one request.
"""

import logging
import time
from typing import Any

import httpx

from kelly_tools.clients.manifold.exceptions import ManifoldAPIError
from kelly_tools.clients.manifold.models import ManifoldMarket

logger = logging.getLogger(__name__)

_HTTP_BAD_REQUEST = 400
_DEFAULT_TIMEOUT = 30.0
_DEFAULT_CACHE_TTL = 60.0
_DEFAULT_P = 0.5


class ManifoldClient:
    """Typed async client for Manifold prediction markets.

    Args:
        base_url: Base URL for the Manifold API.
        timeout: Request timeout in seconds.
        cache_ttl_seconds: How long a fetched market is reused before it is
            requested again. Zero disables caching.

    """

    BASE_URL = "https://api.manifold.markets"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
        cache_ttl_seconds: float = _DEFAULT_CACHE_TTL,
    ) -> None:
        """Initialize the Manifold API client.

        Args:
            base_url: Base URL for the Manifold API.
            timeout: Request timeout in seconds.
            cache_ttl_seconds: Lifetime of cached markets in seconds.

        """
        self.base_url = base_url.rstrip("/")
        self.cache_ttl_seconds = cache_ttl_seconds
        self._http_client = httpx.AsyncClient(timeout=timeout)
        self._cache: dict[str, tuple[float, ManifoldMarket]] = {}

    async def get_market(self, slug: str, *, use_cache: bool = True) -> ManifoldMarket:
        """Fetch a market by its URL slug.

        Args:
            slug: Market slug, e.g. ``"will-it-rain-tomorrow"``.
            use_cache: Return a cached copy younger than the TTL if present.

        Returns:
            Typed market snapshot.

        Raises:
            ManifoldAPIError: When the market is not found or the API fails.

        """
        now = time.monotonic()
        if use_cache and slug in self._cache:
            fetched_at, market = self._cache[slug]
            if now - fetched_at < self.cache_ttl_seconds:
                return market

        raw: dict[str, Any] = await self._get(f"/v0/slug/{slug}")
        market = self._parse_market(raw)
        self._cache[slug] = (now, market)
        logger.debug("Fetched market %s (probability=%s)", slug, market.probability)
        return market

    def clear_cache(self) -> None:
        """Forget every cached market."""
        self._cache.clear()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Send a GET request and return parsed JSON.

        Args:
            path: Request path relative to base_url.
            params: Query parameters.

        Returns:
            Parsed JSON response.

        Raises:
            ManifoldAPIError: When the API returns an error response.

        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._http_client.request("GET", url, params=params)
        except httpx.HTTPError as exc:
            raise ManifoldAPIError(
                msg=f"HTTP request failed: {exc}",
                status_code=_HTTP_BAD_REQUEST,
            ) from exc

        if response.status_code >= _HTTP_BAD_REQUEST:
            self._handle_error(response)

        result: Any = response.json()
        return result

    @staticmethod
    def _handle_error(response: httpx.Response) -> None:
        """Raise a ManifoldAPIError from an error response.

        Args:
            response: HTTP response with a non-2xx status code.

        Raises:
            ManifoldAPIError: Always raised with status code and message.

        """
        try:
            data = response.json()
            msg: str = data.get("message", f"HTTP {response.status_code}")
        except Exception:
            msg = f"HTTP {response.status_code}"
        raise ManifoldAPIError(msg=msg, status_code=response.status_code)

    @staticmethod
    def _parse_market(raw: dict[str, Any]) -> ManifoldMarket:
        """Convert a raw API market dict into a typed ManifoldMarket.

        Args:
            raw: Market dictionary from the Manifold API.

        Returns:
            Typed ManifoldMarket dataclass.

        """
        pool: dict[str, Any] = raw.get("pool") or {}
        probability = raw.get("probability")
        return ManifoldMarket(
            id=raw.get("id", ""),
            slug=raw.get("slug", ""),
            question=raw.get("question", ""),
            url=raw.get("url", ""),
            mechanism=raw.get("mechanism", ""),
            outcome_type=raw.get("outcomeType", ""),
            probability=_safe_float(probability) if probability is not None else None,
            pool_yes=_safe_float(pool.get("YES")),
            pool_no=_safe_float(pool.get("NO")),
            p=_safe_float(raw.get("p", _DEFAULT_P)),
            total_liquidity=_safe_float(raw.get("totalLiquidity")),
            is_resolved=bool(raw.get("isResolved", False)),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()

    async def __aenter__(self) -> "ManifoldClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()


def _safe_float(value: Any) -> float:
    """Convert a value to float, returning zero for None/empty strings.

    Raise ``ManifoldAPIError`` for values that are present but cannot be
    parsed, rather than silently substituting zero for corrupt data.

    Args:
        value: Value to convert (string, float, int, or None).

    Returns:
        Float representation, or ``0.0`` for None/empty.

    Raises:
        ManifoldAPIError: If the value is non-empty but malformed.

    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return 0.0
    try:
        return float(value)
    except (ValueError, TypeError) as exc:
        msg = f"Cannot convert {value!r} to float"
        raise ManifoldAPIError(msg=msg, status_code=0) from exc
