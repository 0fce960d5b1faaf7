"""CoinGecko connector for crypto prices."""

import logging
import time
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

import requests

from wealthdash.core.exceptions import (
    MalformedUpstreamResponseError,
    ProviderUnavailableError,
    SymbolNotFoundError,
)
from wealthdash.core.timezone import now_utc
from wealthdash.core.util import is_number
from wealthdash.domain.models import CurrencyCode, MarketData

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
API_KEY_HEADER = "x-cg-demo-api-key"

# Top assets only. Anything else is looked up by its lower-cased ticker,
# which misses coins whose CoinGecko id differs from the ticker.
SYMBOL_TO_ID: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "USDT": "tether",
}


def to_coingecko_id(symbol: str) -> str:
    """Map a ticker to a CoinGecko coin id."""
    symbol = symbol.strip()
    return SYMBOL_TO_ID.get(symbol.upper(), symbol.lower())


class CoinGeckoConnector:
    """
    MarketDataConnector over CoinGecko's simple/price endpoint.

    Without an API key the public tier is used. Successful payloads are kept
    in memory for cache_ttl_seconds to stay under the rate limit.
    """

    name = "coingecko"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        cache_ttl_seconds: float = 300,
        timeout_seconds: float = 10,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._ttl = cache_ttl_seconds
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        self._clock = clock
        # (coin_id, vs_currency) -> (payload, cached_at)
        self._cache: dict[tuple[str, str], tuple[dict, float]] = {}

    def _headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self._api_key} if self._api_key else {}

    def test_connection(self) -> bool:
        try:
            response = self._session.get(
                f"{self._base_url}/ping",
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("CoinGecko connection test failed: %s", exc)
            return False
        return response.ok

    def fetch_price(self, symbol: str, currency: CurrencyCode) -> MarketData:
        coin_id = to_coingecko_id(symbol)
        vs_currency = currency.strip().lower()
        key = (coin_id, vs_currency)

        now = time.monotonic()
        self._evict_expired(now)
        cached = self._cache.get(key)
        if cached:
            price = self._extract_price(cached[0], symbol, coin_id, vs_currency)
        else:
            payload = self._request_price(coin_id, vs_currency)
            price = self._extract_price(payload, symbol, coin_id, vs_currency)
            self._cache[key] = (payload, now)

        return MarketData(
            symbol=symbol.strip().upper(),
            price=Decimal(str(price)),
            currency=currency.strip().upper(),
            last_updated=self._clock(),
        )

    def _evict_expired(self, now: float) -> None:
        for key in [k for k, (_, cached_at) in self._cache.items() if now - cached_at > self._ttl]:
            del self._cache[key]

    def _request_price(self, coin_id: str, vs_currency: str) -> Any:
        try:
            response = self._session.get(
                f"{self._base_url}/simple/price",
                params={"ids": coin_id, "vs_currencies": vs_currency},
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("CoinGecko request failed for %s/%s: %s", coin_id, vs_currency, exc)
            raise ProviderUnavailableError(self.name, str(exc)) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedUpstreamResponseError(self.name, "Response is not valid JSON") from exc

    def _extract_price(self, payload: Any, symbol: str, coin_id: str, vs_currency: str) -> Any:
        if not isinstance(payload, dict):
            raise MalformedUpstreamResponseError(
                self.name, f"Expected an object keyed by coin id, got {type(payload).__name__}"
            )
        prices = payload.get(coin_id)
        if prices is None:
            raise SymbolNotFoundError(symbol, self.name)
        if not isinstance(prices, dict):
            raise MalformedUpstreamResponseError(self.name, f"Unexpected price shape for {coin_id}")
        price = prices.get(vs_currency)
        if price is None:
            raise SymbolNotFoundError(symbol, self.name)
        if not is_number(price):
            raise MalformedUpstreamResponseError(self.name, f"Non-numeric price for {coin_id}")
        return price
